# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigTable - the table node of a configuration tree.

A ConfigTable maps labels to ConfigNode children. Tables own their children
exclusively: a node belongs to exactly one table, and copying a table copies
its whole subtree.

Key Features:
    - **O(1) lookup**: Internal dict-based storage for fast access by label
    - **Insertion order**: Iteration follows the order children were added
    - **Walk**: Depth-first traversal yielding dotted paths
    - **Conversion**: Plain nested dict through as_dict()

ConfigTable knows nothing about dotted keys beyond the walk; resolving a key
against a tree is done by Config.

Example:
    >>> table = ConfigTable()
    >>> server = table.add_table('server')
    >>> server.add_value('port', 8080)
    >>> table.as_dict()
    {'server': {'port': 8080}}
"""

from __future__ import annotations

from typing import Any, Iterator

from ..exceptions import InvalidAccessError
from ..node import ConfigNode, NodeType
from ..path import KEY_DELIMITER, is_valid_segment


class ConfigTable:
    """A table of uniquely labelled configuration nodes.

    Attributes:
        parent: The ConfigNode that contains this table as its value,
            or None if this is a root table.
    """

    __slots__ = ('_nodes', '_order', 'parent')

    def __init__(self, parent: ConfigNode | None = None) -> None:
        self._nodes: dict[str, ConfigNode] = {}
        self._order: list[ConfigNode] = []
        self.parent = parent

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"ConfigTable({list(self._nodes.keys())})"

    def __len__(self) -> int:
        """Return the number of direct children in this table."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[ConfigNode]:
        """Iterate over direct child nodes in insertion order."""
        return iter(self._order)

    def __contains__(self, label: str) -> bool:
        """Check if a direct child with this label exists."""
        return label in self._nodes

    def __eq__(self, other: object) -> bool:
        """Tables are equal when they hold the same labels, types and values."""
        if not isinstance(other, ConfigTable):
            return NotImplemented
        if self._nodes.keys() != other._nodes.keys():
            return False
        for label, node in self._nodes.items():
            other_node = other._nodes[label]
            if node.node_type is not other_node.node_type:
                return False
            if node.value != other_node.value:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    # ==================== Children ====================

    def get(self, label: str, default: Any = None) -> ConfigNode | None:
        """Get a direct child by label, with default."""
        return self._nodes.get(label, default)

    def insert(self, node: ConfigNode) -> ConfigNode:
        """Insert node as a child of this table.

        Args:
            node: The node to insert. Its parent is set to this table.
                A node attached to another table must be copied first.

        Returns:
            The inserted node.

        Raises:
            InvalidAccessError: If a child with the same label exists, the
                label cannot be addressed by a dotted key, or node already
                belongs to another table.
        """
        if not is_valid_segment(node.label):
            raise InvalidAccessError(f"Invalid label {node.label!r}")
        if node.parent is not None and node.parent is not self:
            raise InvalidAccessError(
                f"Node '{node.fullpath}' already belongs to another table"
            )
        if node.label in self._nodes:
            raise InvalidAccessError(f"Label '{node.label}' already exists")
        node.parent = self
        self._nodes[node.label] = node
        self._order.append(node)
        return node

    def add_table(self, label: str) -> ConfigTable:
        """Create an empty child table and return it."""
        node = self.insert(ConfigNode(label, NodeType.TABLE))
        return node.value

    def add_value(
        self, label: str, value: Any = None, node_type: NodeType | None = None
    ) -> ConfigNode:
        """Create a child value node and return it.

        Args:
            label: Label of the new node.
            value: The scalar to store. If None, node_type is required and
                the node holds the type's default value.
            node_type: Value type. Inferred from value when omitted.

        Raises:
            TypeError: If neither a supported value nor a node_type is given.
            TypeConflictError: If value does not match node_type.
        """
        if node_type is None:
            if value is None:
                raise TypeError("add_value() needs a value or a node_type")
            node_type = NodeType.of_value(value)
        return self.insert(ConfigNode(label, node_type, value))

    # ==================== Iteration ====================

    def keys(self) -> list[str]:
        """Return list of labels in insertion order."""
        return [n.label for n in self._order]

    def nodes(self) -> list[ConfigNode]:
        """Return list of nodes in insertion order."""
        return list(self._order)

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, ConfigNode]]:
        """Walk the subtree depth first.

        Yields:
            Tuples of (dotted path relative to this table, node).

        Example:
            >>> for path, node in table.walk():
            ...     print(path, node.value)
        """
        for node in self._order:
            path = f"{_prefix}{KEY_DELIMITER}{node.label}" if _prefix else node.label
            yield path, node
            if node.is_table:
                yield from node.value.walk(path)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to plain dict (recursive)."""
        result: dict[str, Any] = {}
        for node in self._order:
            if node.is_table:
                result[node.label] = node.value.as_dict()
            else:
                result[node.label] = node.value
        return result

    def copy(self) -> ConfigTable:
        """Return a detached deep copy of this table."""
        table = ConfigTable()
        for node in self._order:
            table.insert(node.copy())
        return table
