# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Configuration node classes."""

from __future__ import annotations

from enum import Enum
from typing import Any, TYPE_CHECKING

from .exceptions import InvalidAccessError, TypeConflictError
from .path import KEY_DELIMITER

if TYPE_CHECKING:
    from .store import ConfigTable


class NodeType(Enum):
    """Closed set of node shapes.

    TABLE nodes hold a ConfigTable; every other member tags a leaf value
    with the Python type it stores.
    """

    TABLE = 'table'
    INTEGER = 'integer'
    FLOAT = 'float'
    BOOLEAN = 'boolean'
    STRING = 'string'

    @property
    def is_value(self) -> bool:
        return self is not NodeType.TABLE

    @property
    def python_type(self) -> type | None:
        """The Python type stored by this value type, None for TABLE."""
        return _PYTHON_TYPES.get(self)

    def default(self) -> Any:
        """Return the default-initialized value for this value type.

        Raises:
            TypeError: For TABLE, which has no scalar default.
        """
        if self is NodeType.TABLE:
            raise TypeError("A table has no default value")
        return self.python_type()

    def accepts(self, value: Any) -> bool:
        """True if value can be stored in a node of this type.

        Matching is strict: a bool is not an integer and an int is not
        a float.
        """
        if self is NodeType.TABLE:
            return False
        if self is NodeType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, self.python_type)

    @classmethod
    def for_type(cls, type_: type | NodeType) -> NodeType:
        """Resolve a requested value type.

        Args:
            type_: One of int, float, bool, str, or a value NodeType member.

        Raises:
            TypeError: If type_ does not name a value type.
        """
        if isinstance(type_, NodeType):
            if type_ is NodeType.TABLE:
                raise TypeError("TABLE is not a value type")
            return type_
        for node_type, python_type in _PYTHON_TYPES.items():
            if type_ is python_type:
                return node_type
        raise TypeError(f"Unsupported value type: {type_!r}")

    @classmethod
    def of_value(cls, value: Any) -> NodeType:
        """Return the value type that stores value.

        Raises:
            TypeError: If value is not an int, float, bool or str.
        """
        # bool first, it is an int subclass
        for node_type in (cls.BOOLEAN, cls.INTEGER, cls.FLOAT, cls.STRING):
            if node_type.accepts(value):
                return node_type
        raise TypeError(f"Unsupported value type: {type(value).__name__}")


_PYTHON_TYPES: dict[NodeType, type] = {
    NodeType.INTEGER: int,
    NodeType.FLOAT: float,
    NodeType.BOOLEAN: bool,
    NodeType.STRING: str,
}


class ConfigNode:
    """A node in a configuration tree.

    Each node has:
    - label: The node's unique name within its parent table
    - node_type: The NodeType tag, fixed at creation
    - value: A ConfigTable for tables, the stored scalar for values
    - parent: Reference to the containing ConfigTable

    Assigning value on a value node is checked against node_type, so
    a handle returned by Config.at() can be written through safely.

    Example:
        >>> node = ConfigNode('port', NodeType.INTEGER, 8080)
        >>> node.value = 'http'
        Traceback (most recent call last):
        ...
        TypeConflictError: ...
    """

    __slots__ = ('label', 'node_type', '_value', 'parent')

    def __init__(
        self,
        label: str,
        node_type: NodeType,
        value: Any = None,
        parent: ConfigTable | None = None,
    ) -> None:
        """Initialize a ConfigNode.

        Args:
            label: The node's unique name.
            node_type: Shape of the node.
            value: ConfigTable for TABLE nodes (a new empty one if None),
                otherwise the scalar (the type default if None).
            parent: The ConfigTable containing this node.

        Raises:
            TypeConflictError: If value does not match node_type.
        """
        self.label = label
        self.node_type = node_type
        self.parent = parent
        if node_type is NodeType.TABLE:
            from .store import ConfigTable
            if value is None:
                value = ConfigTable()
            elif not isinstance(value, ConfigTable):
                raise TypeConflictError(
                    f"Table node '{label}' needs a ConfigTable, not {type(value).__name__}"
                )
            value.parent = self
        elif value is None:
            value = node_type.default()
        elif not node_type.accepts(value):
            raise TypeConflictError(
                f"Node '{label}' is {node_type.value}, cannot hold {type(value).__name__}"
            )
        self._value = value

    def __repr__(self) -> str:
        value_repr = (
            f"ConfigTable({len(self._value)})" if self.is_table else repr(self._value)
        )
        return f"ConfigNode({self.label!r}, {self.node_type.value}, value={value_repr})"

    @property
    def is_table(self) -> bool:
        """True if this node contains a ConfigTable."""
        return self.node_type is NodeType.TABLE

    @property
    def is_value(self) -> bool:
        """True if this node contains a scalar value."""
        return self.node_type is not NodeType.TABLE

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        if self.is_table:
            raise InvalidAccessError(f"'{self.fullpath}' is a table, not a value")
        if not self.node_type.accepts(value):
            raise TypeConflictError(
                f"'{self.fullpath}' is {self.node_type.value}, "
                f"cannot assign {type(value).__name__}"
            )
        self._value = value

    @property
    def fullpath(self) -> str:
        """Dotted key of this node from the root of its tree."""
        labels = [self.label]
        table = self.parent
        while table is not None and table.parent is not None:
            labels.append(table.parent.label)
            table = table.parent.parent
        return KEY_DELIMITER.join(reversed(labels))

    def copy(self, parent: ConfigTable | None = None) -> ConfigNode:
        """Return a deep copy of this node, attached to parent."""
        value = self._value.copy() if self.is_table else self._value
        return ConfigNode(self.label, self.node_type, value, parent=parent)
