# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Config - typed access to a configuration tree by dotted key.

Keys are hierarchical and give the complete path to their target using
dotted components, e.g. 'table.nested.value'. Every access names the type
it expects, and the tree never converts between types.

Access modes:
    - **get(key, type)**: read-only, the value must exist with that type
    - **at(key, type)**: fetch-or-create, returns a writeable node handle
    - **has_key(key)**: existence of a table or value at key
    - **load(source, root)**: parse a source and merge it under root

Example:
    Basic usage::

        config = TomlConfig('app.toml')
        port = config.get('server.port', int)

        config.at('server.timeout', float).value = 2.5
        config.set('server.name', 'api')

        if config.has_key('database'):
            ...

    Composing sources::

        config = Config(parser=TomlParser())
        config.load('defaults.toml')
        config.load('plugins.toml', root='plugins')
"""

from __future__ import annotations

import os
from typing import IO, Any, Mapping

from .exceptions import ConfigError, InvalidAccessError, TypeConflictError
from .node import ConfigNode, NodeType
from .parsers import SourceParser, TomlParser, YamlParser
from .path import join_key, parse_key
from .store import ConfigTable, check_merge, merge_table, table_from_dict

_MISSING = object()


class Config:
    """Store configuration data in a tree and access it by dotted key.

    Attributes:
        parser: SourceParser used by load(), or None for a store that is
            only filled through load_table() and writeable access.
    """

    __slots__ = ('_tree', 'parser')

    def __init__(self, parser: SourceParser | None = None) -> None:
        self._tree = ConfigTable()
        self.parser = parser

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._tree.keys()})"

    def __contains__(self, key: str) -> bool:
        return self.has_key(key)

    @property
    def tree(self) -> ConfigTable:
        """The root table."""
        return self._tree

    # ==================== Path Traversal ====================

    def _traverse(
        self, segments: tuple[str, ...], autocreate: bool = False
    ) -> ConfigTable:
        """Walk all segments but the last, returning the table holding it.

        Args:
            segments: Parsed key.
            autocreate: If True, create missing intermediate tables.

        Raises:
            InvalidAccessError: If a segment is missing (and autocreate is
                False) or names a value instead of a table.
        """
        current = self._tree
        for i, label in enumerate(segments[:-1]):
            node = current.get(label)
            if node is None:
                if not autocreate:
                    raise InvalidAccessError(
                        f"Table '{join_key(segments[:i + 1])}' not found"
                    )
                current = current.add_table(label)
                continue
            if not node.is_table:
                remaining = join_key(segments[i + 1:])
                raise InvalidAccessError(
                    f"'{node.fullpath}' is a value, cannot access '{remaining}'"
                )
            current = node.value
        return current

    def _resolve_table(
        self, segments: tuple[str, ...], autocreate: bool = False
    ) -> ConfigTable | None:
        """Walk all segments, returning the table they name.

        Returns None when a table is missing and autocreate is False.

        Raises:
            InvalidAccessError: If a segment names a value.
        """
        current = self._tree
        for label in segments:
            node = current.get(label)
            if node is None:
                if not autocreate:
                    return None
                current = current.add_table(label)
            elif node.is_table:
                current = node.value
            else:
                raise InvalidAccessError(f"'{node.fullpath}' is a value, not a table")
        return current

    # ==================== Typed Access ====================

    def get_node(self, key: str) -> ConfigNode:
        """Get the node at key, whatever its shape.

        Raises:
            MalformedKeyError: If key is malformed.
            InvalidAccessError: If the key does not resolve.
        """
        segments = parse_key(key)
        node = self._traverse(segments).get(segments[-1])
        if node is None:
            raise InvalidAccessError(f"Key '{key}' not found")
        return node

    def get(self, key: str, type_: type | NodeType, default: Any = _MISSING) -> Any:
        """Read-only access to a value.

        Args:
            key: Hierarchical key.
            type_: Expected value type (int, float, bool or str).
            default: Returned instead of raising InvalidAccessError when the
                key does not resolve to a value. Type conflicts always raise.

        Returns:
            The stored value.

        Raises:
            MalformedKeyError: If key is malformed.
            InvalidAccessError: If the key is missing or names a table.
            TypeConflictError: If the value has another type.
            TypeError: If type_ is not a supported value type.

        Example:
            >>> config.get('server.port', int)
            8080
            >>> config.get('server.debug', bool, default=False)
            False
        """
        node_type = NodeType.for_type(type_)
        try:
            node = self.get_node(key)
            if node.is_table:
                raise InvalidAccessError(f"'{key}' is a table, not a value")
        except InvalidAccessError:
            if default is _MISSING:
                raise
            return default
        if node.node_type is not node_type:
            raise TypeConflictError(
                f"'{key}' is {node.node_type.value}, not {node_type.value}"
            )
        return node.value

    def at(self, key: str, type_: type | NodeType) -> ConfigNode:
        """Writeable access to a value.

        A new value node holding the type's default is created if it does
        not exist, including all parent tables as necessary. An existing
        value must already have the requested type.

        Args:
            key: Hierarchical key.
            type_: Value type (int, float, bool or str).

        Returns:
            The value node. Assigning node.value updates the tree.

        Raises:
            MalformedKeyError: If key is malformed. Nothing is created.
            InvalidAccessError: If a parent segment is a value, or the
                target is a table.
            TypeConflictError: If the existing value has another type.
            TypeError: If type_ is not a supported value type.

        Example:
            >>> config.at('server.port', int).value = 8080
            >>> config.get('server.port', int)
            8080
        """
        node_type = NodeType.for_type(type_)
        segments = parse_key(key)
        parent = self._traverse(segments, autocreate=True)
        node = parent.get(segments[-1])
        if node is None:
            return parent.add_value(segments[-1], node_type=node_type)
        if node.is_table:
            raise InvalidAccessError(f"'{key}' is a table, not a value")
        if node.node_type is not node_type:
            raise TypeConflictError(
                f"'{key}' is {node.node_type.value}, not {node_type.value}"
            )
        return node

    def set(self, key: str, value: Any) -> None:
        """Store value at key with writeable access typed by value itself.

        Raises:
            TypeError: If value is not an int, float, bool or str.
            TypeConflictError: If key holds a value of another type.
        """
        self.at(key, NodeType.of_value(value)).value = value

    def has_key(self, key: str) -> bool:
        """Test if key exists, as a table or a value.

        Malformed keys are reported as missing.
        """
        try:
            self.get_node(key)
        except ConfigError:
            return False
        return True

    # ==================== Loading ====================

    def load(self, source: str | os.PathLike[str] | IO[Any], root: str = '') -> None:
        """Load config data from a file path or a readable stream.

        Args:
            source: File path, or a text or binary stream.
            root: Place data at this root ('' for the top of the tree).

        Raises:
            ConfigError: If this Config has no parser.
            OSError: If the file cannot be read.
            ParseError: If the source cannot be parsed.
            InvalidAccessError: If root crosses or names a value.
            TypeConflictError: If loaded data collides with existing data.
        """
        if self.parser is None:
            raise ConfigError(f"{type(self).__name__} has no parser to load sources")
        if isinstance(source, (str, os.PathLike)):
            table = self.parser.parse_path(source)
        else:
            table = self.parser.parse_stream(source)
        self.load_table(table, root)

    def load_table(self, table: ConfigTable | Mapping[str, Any], root: str = '') -> None:
        """Merge a pre-parsed table into the tree at root.

        Missing tables along root are created. Incoming entries are merged
        with existing tables; any other collision is a conflict. Conflicts
        are detected before the tree is modified, so a failed load leaves
        it unchanged.

        Args:
            table: ConfigTable or nested mapping of supported values.
            root: Place data at this root ('' for the top of the tree).

        Raises:
            ParseError: If a mapping holds unsupported labels or values.
            MalformedKeyError: If root is malformed.
            InvalidAccessError: If root crosses or names a value.
            TypeConflictError: If loaded data collides with existing data.
        """
        if not isinstance(table, ConfigTable):
            table = table_from_dict(table)
        segments = parse_key(root) if root else ()
        target = self._resolve_table(segments)
        if target is not None:
            check_merge(target, table)
        else:
            target = self._resolve_table(segments, autocreate=True)
        merge_table(target, table)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Return the whole tree as a plain nested dict."""
        return self._tree.as_dict()


class TomlConfig(Config):
    """Store TOML config data.

    Example:
        >>> config = TomlConfig(io.StringIO('[server]\\nport = 8080\\n'))
        >>> config.get('server.port', int)
        8080
    """

    __slots__ = ()

    def __init__(
        self, source: str | os.PathLike[str] | IO[Any] | None = None, root: str = ''
    ) -> None:
        """Initialize a TomlConfig, loading source at root if given."""
        super().__init__(parser=TomlParser())
        if source is not None:
            self.load(source, root)


class YamlConfig(Config):
    """Store YAML config data."""

    __slots__ = ()

    def __init__(
        self, source: str | os.PathLike[str] | IO[Any] | None = None, root: str = ''
    ) -> None:
        """Initialize a YamlConfig, loading source at root if given."""
        super().__init__(parser=YamlParser())
        if source is not None:
            self.load(source, root)
