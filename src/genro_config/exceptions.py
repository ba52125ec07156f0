# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Configuration exceptions."""

from __future__ import annotations


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class MalformedKeyError(ConfigError, ValueError):
    """Raised when a dotted key cannot be split into non-empty segments."""

    pass


class InvalidAccessError(ConfigError, LookupError):
    """Raised when a path segment is missing or has the wrong shape.

    A segment has the wrong shape when a table is required and a value is
    found, or the other way around.
    """

    pass


class TypeConflictError(InvalidAccessError, TypeError):
    """Raised when a value has a different type than the one requested.

    Also raised by bulk-load when incoming data collides with existing nodes.
    """

    pass


class ParseError(ConfigError):
    """Raised by a source parser when its input cannot be turned into a table."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        message = super().__str__()
        if self.source:
            return f"{self.source}: {message}"
        return message
