# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dotted key handling.

A key such as ``'server.http.port'`` addresses a node by the labels of the
tables leading to it. There is no escaping: a label containing the delimiter
cannot be addressed, and loaders refuse to store one.
"""

from __future__ import annotations

from typing import Iterable

from .exceptions import MalformedKeyError

KEY_DELIMITER = '.'


def parse_key(key: str) -> tuple[str, ...]:
    """Split a dotted key into its segments.

    Args:
        key: Dotted key (e.g., 'table.nested.value').

    Returns:
        Tuple of segment labels, never empty.

    Raises:
        MalformedKeyError: If key is not a string, is empty, or contains an
            empty segment (leading, trailing or doubled delimiter).

    Example:
        >>> parse_key('server.port')
        ('server', 'port')
    """
    if not isinstance(key, str):
        raise MalformedKeyError(f"Key must be a string, not {type(key).__name__}")
    if not key:
        raise MalformedKeyError("Empty key")
    segments = tuple(key.split(KEY_DELIMITER))
    if '' in segments:
        raise MalformedKeyError(f"Empty segment in key '{key}'")
    return segments


def join_key(segments: Iterable[str]) -> str:
    """Join segments back into a dotted key.

    Raises:
        MalformedKeyError: If no segments are given or one of them cannot
            be addressed.
    """
    segments = list(segments)
    if not segments:
        raise MalformedKeyError("No segments to join")
    for label in segments:
        if not is_valid_segment(label):
            raise MalformedKeyError(f"Invalid segment {label!r}")
    return KEY_DELIMITER.join(segments)


def is_valid_segment(label: object) -> bool:
    """True if label can be stored as a node label and addressed by a key."""
    return isinstance(label, str) and bool(label) and KEY_DELIMITER not in label
