# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for keys, ConfigNode, ConfigTable and table loading/merging."""

import sys

import pytest

from genro_config import (
    ConfigNode,
    ConfigTable,
    InvalidAccessError,
    MalformedKeyError,
    NodeType,
    ParseError,
    TypeConflictError,
    join_key,
    parse_key,
    table_from_dict,
)
from genro_config.store import check_merge, merge_table


class TestKeys:
    """Tests for dotted key parsing."""

    def test_parse_simple_key(self):
        """Test a key without delimiter is a single segment."""
        assert parse_key('server') == ('server',)

    def test_parse_nested_key(self):
        """Test segments are returned in order."""
        assert parse_key('table.nested.value') == ('table', 'nested', 'value')

    @pytest.mark.parametrize('key', ['a', 'a.b', 'server.http.port', 'x_1.y-2.Z'])
    def test_parse_then_join_round_trip(self, key):
        """Test joining parsed segments gives back the key."""
        assert join_key(parse_key(key)) == key

    @pytest.mark.parametrize('key', ['', '.', '.a', 'a.', 'a..b', 'a.b.'])
    def test_malformed_keys(self, key):
        """Test empty keys and empty segments are rejected."""
        with pytest.raises(MalformedKeyError):
            parse_key(key)

    def test_non_string_key(self):
        """Test a non-string key is malformed."""
        with pytest.raises(MalformedKeyError, match="must be a string"):
            parse_key(5)

    def test_malformed_key_is_value_error(self):
        """Test MalformedKeyError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_key('a..b')

    def test_join_rejects_bad_segments(self):
        """Test segments that cannot be addressed are not joined."""
        with pytest.raises(MalformedKeyError):
            join_key(['a', 'b.c'])
        with pytest.raises(MalformedKeyError):
            join_key([])


class TestNodeType:
    """Tests for NodeType resolution."""

    def test_for_python_types(self):
        """Test Python types map to value node types."""
        assert NodeType.for_type(int) is NodeType.INTEGER
        assert NodeType.for_type(float) is NodeType.FLOAT
        assert NodeType.for_type(bool) is NodeType.BOOLEAN
        assert NodeType.for_type(str) is NodeType.STRING

    def test_for_node_type(self):
        """Test value node types are accepted as they are."""
        assert NodeType.for_type(NodeType.FLOAT) is NodeType.FLOAT

    def test_for_unsupported_type(self):
        """Test unsupported requested types raise TypeError."""
        with pytest.raises(TypeError):
            NodeType.for_type(list)
        with pytest.raises(TypeError):
            NodeType.for_type(NodeType.TABLE)

    def test_of_value(self):
        """Test value types are inferred strictly."""
        assert NodeType.of_value(True) is NodeType.BOOLEAN
        assert NodeType.of_value(1) is NodeType.INTEGER
        assert NodeType.of_value(1.0) is NodeType.FLOAT
        assert NodeType.of_value('1') is NodeType.STRING
        with pytest.raises(TypeError):
            NodeType.of_value(None)

    def test_no_coercion(self):
        """Test bool is not an integer and int is not a float."""
        assert not NodeType.INTEGER.accepts(True)
        assert not NodeType.FLOAT.accepts(1)
        assert not NodeType.STRING.accepts(1)
        assert NodeType.BOOLEAN.accepts(False)

    def test_defaults(self):
        """Test default-initialized values."""
        assert NodeType.INTEGER.default() == 0
        assert NodeType.FLOAT.default() == 0.0
        assert NodeType.BOOLEAN.default() is False
        assert NodeType.STRING.default() == ''


class TestConfigNode:
    """Tests for ConfigNode."""

    def test_create_value_node(self):
        """Test creating a value node."""
        node = ConfigNode('port', NodeType.INTEGER, 8080)
        assert node.label == 'port'
        assert node.value == 8080
        assert node.is_value is True
        assert node.is_table is False
        assert node.parent is None

    def test_create_value_node_default(self):
        """Test a value node without value holds the type default."""
        node = ConfigNode('name', NodeType.STRING)
        assert node.value == ''

    def test_create_table_node(self):
        """Test a table node owns a new empty ConfigTable."""
        node = ConfigNode('server', NodeType.TABLE)
        assert node.is_table is True
        assert isinstance(node.value, ConfigTable)
        assert node.value.parent is node

    def test_create_mismatched_value(self):
        """Test a node cannot be created with a value of another type."""
        with pytest.raises(TypeConflictError):
            ConfigNode('port', NodeType.INTEGER, '8080')

    def test_assign_value(self):
        """Test assigning a value of the node type."""
        node = ConfigNode('port', NodeType.INTEGER, 8080)
        node.value = 9090
        assert node.value == 9090

    def test_assign_wrong_type_keeps_value(self):
        """Test a mismatched assignment fails and keeps the stored value."""
        node = ConfigNode('port', NodeType.INTEGER, 8080)
        with pytest.raises(TypeConflictError):
            node.value = 'http'
        with pytest.raises(TypeConflictError):
            node.value = True
        assert node.value == 8080

    def test_assign_to_table(self):
        """Test a table node has no assignable value."""
        node = ConfigNode('server', NodeType.TABLE)
        with pytest.raises(InvalidAccessError):
            node.value = 1

    def test_fullpath(self):
        """Test fullpath follows parents up to the root."""
        root = ConfigTable()
        node = root.add_table('server').add_table('http').add_value('port', 80)
        assert node.fullpath == 'server.http.port'

    def test_repr(self):
        """Test string representation."""
        node = ConfigNode('port', NodeType.INTEGER, 8080)
        repr_str = repr(node)
        assert 'port' in repr_str
        assert '8080' in repr_str


class TestConfigTable:
    """Tests for ConfigTable."""

    def test_empty_table(self):
        """Test a new table is empty."""
        table = ConfigTable()
        assert len(table) == 0
        assert table.keys() == []
        assert table.parent is None

    def test_add_children(self):
        """Test adding tables and values keeps insertion order."""
        table = ConfigTable()
        table.add_value('name', 'api')
        table.add_table('server')
        assert table.keys() == ['name', 'server']
        assert 'server' in table
        assert 'missing' not in table
        assert [n.label for n in table] == ['name', 'server']

    def test_add_value_with_type(self):
        """Test add_value with only a node type stores the default."""
        table = ConfigTable()
        node = table.add_value('ratio', node_type=NodeType.FLOAT)
        assert node.value == 0.0

    def test_add_value_needs_type(self):
        """Test add_value without value or type fails."""
        with pytest.raises(TypeError):
            ConfigTable().add_value('x')

    def test_duplicate_label(self):
        """Test labels are unique among siblings."""
        table = ConfigTable()
        table.add_value('a', 1)
        with pytest.raises(InvalidAccessError, match="already exists"):
            table.add_value('a', 2)
        assert table.get('a').value == 1

    def test_invalid_label(self):
        """Test labels that cannot be addressed are refused."""
        table = ConfigTable()
        with pytest.raises(InvalidAccessError):
            table.add_value('a.b', 1)
        with pytest.raises(InvalidAccessError):
            table.add_table('')

    def test_insert_attached_node(self):
        """Test a node belonging to another table must be copied first."""
        first = ConfigTable()
        node = first.add_table('server').add_value('port', 80)
        second = ConfigTable()
        with pytest.raises(InvalidAccessError, match="another table"):
            second.insert(node)
        assert len(second) == 0
        assert node.fullpath == 'server.port'
        copied = second.insert(node.copy())
        assert copied.parent is second
        assert copied.fullpath == 'port'

    def test_get(self):
        """Test get returns direct children or default."""
        table = ConfigTable()
        node = table.add_value('a', 1)
        assert table.get('a') is node
        assert table.get('b') is None
        assert table.get('b', 'x') == 'x'

    def test_walk(self):
        """Test walk yields dotted paths depth first."""
        table = table_from_dict({'a': {'b': 1, 'c': {'d': 'x'}}, 'e': True})
        paths = [path for path, node in table.walk()]
        assert paths == ['a', 'a.b', 'a.c', 'a.c.d', 'e']

    def test_as_dict(self):
        """Test conversion to a plain nested dict."""
        data = {'server': {'port': 8080, 'debug': False}, 'name': 'api'}
        assert table_from_dict(data).as_dict() == data

    def test_copy_is_deep(self):
        """Test copies do not share nodes."""
        table = table_from_dict({'a': {'b': 1}})
        copied = table.copy()
        assert copied == table
        copied.get('a').value.get('b').value = 2
        assert table.get('a').value.get('b').value == 1
        assert copied != table

    def test_equality_checks_types(self):
        """Test tables with equal values of different types differ."""
        assert table_from_dict({'a': 1}) != table_from_dict({'a': 1.0})
        assert table_from_dict({'a': 1}) != table_from_dict({'a': True})


class TestTableFromDict:
    """Tests for converting mappings to tables."""

    def test_nested_dict(self):
        """Test nested mappings become tables with typed values."""
        table = table_from_dict({'server': {'port': 8080, 'ratio': 0.5}})
        server = table.get('server')
        assert server.is_table
        assert server.value.get('port').node_type is NodeType.INTEGER
        assert server.value.get('ratio').node_type is NodeType.FLOAT

    def test_top_level_must_be_mapping(self):
        """Test non-mapping input is a parse error."""
        with pytest.raises(ParseError, match="Top level"):
            table_from_dict(['a', 'b'])

    @pytest.mark.parametrize('value', [None, [1, 2], {1, 2}, b'raw'])
    def test_unsupported_values(self, value):
        """Test values without a node type are parse errors."""
        with pytest.raises(ParseError, match="Unsupported value type"):
            table_from_dict({'a': {'b': value}})

    def test_error_reports_path(self):
        """Test the failing path appears in the message."""
        with pytest.raises(ParseError, match="a.b"):
            table_from_dict({'a': {'b': None}})

    @pytest.mark.parametrize('label', ['', 'a.b', 1])
    def test_invalid_labels(self, label):
        """Test labels that cannot be addressed are parse errors."""
        with pytest.raises(ParseError, match="Invalid key"):
            table_from_dict({label: 1})

    def test_source_in_message(self):
        """Test the source name prefixes the message."""
        with pytest.raises(ParseError) as exc_info:
            table_from_dict({'a': None}, source='app.toml')
        assert exc_info.value.source == 'app.toml'
        assert str(exc_info.value).startswith('app.toml: ')

    def test_recursive_mapping(self):
        """Test a mapping containing itself is a parse error."""
        data = {'a': {}}
        data['a']['b'] = data['a']
        with pytest.raises(ParseError, match="Recursive mapping at 'a.b'"):
            table_from_dict(data)

    def test_repeated_mapping(self):
        """Test the same mapping under two labels is not recursive."""
        shared = {'port': 80}
        table = table_from_dict({'a': shared, 'b': {'c': shared}})
        assert table.as_dict() == {'a': {'port': 80}, 'b': {'c': {'port': 80}}}

    def test_deep_nesting(self):
        """Test nesting beyond the recursion limit is a parse error."""
        data = {}
        current = data
        for i in range(sys.getrecursionlimit() + 200):
            current[f'k{i}'] = {}
            current = current[f'k{i}']
        with pytest.raises(ParseError, match="nested too deeply"):
            table_from_dict(data, source='deep.toml')


class TestMerge:
    """Tests for check_merge and merge_table."""

    def test_graft_new_labels(self):
        """Test labels missing from the target are added."""
        target = table_from_dict({'a': 1})
        incoming = table_from_dict({'b': {'c': 2}})
        assert merge_table(target, incoming) == 1
        assert target.as_dict() == {'a': 1, 'b': {'c': 2}}

    def test_merge_tables_recursively(self):
        """Test tables present on both sides are merged."""
        target = table_from_dict({'a': {'b': 1}})
        incoming = table_from_dict({'a': {'c': 2}})
        check_merge(target, incoming)
        assert merge_table(target, incoming) == 1
        assert target.as_dict() == {'a': {'b': 1, 'c': 2}}

    def test_grafted_nodes_are_copies(self):
        """Test the target does not share nodes with the incoming table."""
        target = ConfigTable()
        incoming = table_from_dict({'a': {'b': 1}})
        merge_table(target, incoming)
        incoming.get('a').value.get('b').value = 5
        assert target.get('a').value.get('b').value == 1
        assert target.get('a').parent is target

    @pytest.mark.parametrize('existing, loaded', [
        ({'a': 1}, {'a': 1}),
        ({'a': 1}, {'a': 2}),
        ({'a': 1}, {'a': 'x'}),
        ({'a': 1}, {'a': {'b': 1}}),
        ({'a': {'b': 1}}, {'a': 1}),
    ])
    def test_conflicts(self, existing, loaded):
        """Test every non table/table collision is a type conflict."""
        target = table_from_dict(existing)
        incoming = table_from_dict(loaded)
        with pytest.raises(TypeConflictError):
            check_merge(target, incoming)
        with pytest.raises(TypeConflictError):
            merge_table(target, incoming)
        assert target.as_dict() == existing

    def test_check_merge_does_not_mutate(self):
        """Test check_merge leaves the target untouched on conflict."""
        target = table_from_dict({'a': {'b': 1}})
        incoming = table_from_dict({'a': {'d': 5, 'b': 2}})
        with pytest.raises(TypeConflictError, match="a.b"):
            check_merge(target, incoming)
        assert target.as_dict() == {'a': {'b': 1}}
