# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Building and merging ConfigTable instances.

table_from_dict() is the shared converter used by the source parsers: it
turns the nested mapping produced by a format library into a ConfigTable,
refusing anything that is not a table or a supported scalar.

check_merge() and merge_table() implement bulk-load. Merging never
overwrites: incoming labels are grafted only where the target has nothing,
tables are merged recursively, and every other collision is a conflict.
check_merge() finds conflicts without touching the target, so callers can
validate before mutating.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..exceptions import ParseError, TypeConflictError
from ..node import ConfigNode, NodeType
from ..path import KEY_DELIMITER, is_valid_segment
from .core import ConfigTable


def table_from_dict(data: Mapping[str, Any], source: str | None = None) -> ConfigTable:
    """Convert a nested mapping into a new ConfigTable.

    Args:
        data: Nested mapping. Mapping values become tables; int, float,
            bool and str values become typed value nodes.
        source: Optional name of the data origin, used in error messages.

    Returns:
        A new root ConfigTable. Nothing is returned on failure.

    Raises:
        ParseError: If data is not a mapping, a label is not a non-empty
            string without the key delimiter, or a value has an unsupported
            type (None, lists, dates, ...). Also raised when a mapping
            contains itself, or tables nest deeper than the interpreter
            can convert.

    Example:
        >>> table = table_from_dict({'server': {'port': 8080}})
        >>> table.get('server').value.get('port').node_type
        <NodeType.INTEGER: 'integer'>
    """
    if not isinstance(data, Mapping):
        raise ParseError(
            f"Top level must be a table, not {type(data).__name__}", source=source
        )
    table = ConfigTable()
    try:
        _fill_table(table, data, '', source, (id(data),))
    except RecursionError:
        raise ParseError("Tables nested too deeply", source=source) from None
    return table


def _fill_table(
    table: ConfigTable,
    data: Mapping[Any, Any],
    prefix: str,
    source: str | None,
    seen: tuple[int, ...],
) -> None:
    for label, value in data.items():
        path = f"{prefix}{KEY_DELIMITER}{label}" if prefix else str(label)
        if not is_valid_segment(label):
            raise ParseError(f"Invalid key {path!r}", source=source)
        if isinstance(value, Mapping):
            # seen holds the mappings on the current path only
            if id(value) in seen:
                raise ParseError(f"Recursive mapping at '{path}'", source=source)
            _fill_table(table.add_table(label), value, path, source, seen + (id(value),))
            continue
        try:
            node_type = NodeType.of_value(value)
        except TypeError:
            raise ParseError(
                f"Unsupported value type {type(value).__name__} at '{path}'",
                source=source,
            ) from None
        table.insert(ConfigNode(label, node_type, value))


def check_merge(target: ConfigTable, incoming: ConfigTable) -> None:
    """Verify that incoming can be merged into target.

    Raises:
        TypeConflictError: At the first label present in both tables where
            the two nodes are not both tables.
    """
    for node in incoming:
        current = target.get(node.label)
        if current is None:
            continue
        if current.is_table and node.is_table:
            check_merge(current.value, node.value)
            continue
        raise TypeConflictError(
            f"Cannot load {node.node_type.value} at '{current.fullpath}': "
            f"{current.node_type.value} already present"
        )


def merge_table(target: ConfigTable, incoming: ConfigTable) -> int:
    """Merge incoming into target.

    Labels missing from target are grafted as deep copies, so target never
    shares nodes with incoming. Run check_merge() first; merge_table()
    stops at the first conflict without undoing earlier grafts.

    Returns:
        Number of nodes grafted at any depth of target.

    Raises:
        TypeConflictError: On a value collision or a table/value mismatch.
    """
    grafted = 0
    for node in incoming:
        current = target.get(node.label)
        if current is None:
            target.insert(node.copy())
            grafted += 1
        elif current.is_table and node.is_table:
            grafted += merge_table(current.value, node.value)
        else:
            raise TypeConflictError(
                f"Cannot load {node.node_type.value} at '{current.fullpath}': "
                f"{current.node_type.value} already present"
            )
    return grafted
