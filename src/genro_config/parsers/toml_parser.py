# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TOML source parser."""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..exceptions import ParseError
from ..store import ConfigTable, table_from_dict
from .base import SourceParser

logger = logging.getLogger(__name__)


class TomlParser(SourceParser):
    """Parse TOML documents into a ConfigTable.

    Tables, integers, floats, booleans and strings are supported. Arrays,
    dates and times have no node type and are rejected.

    Example:
        >>> table = TomlParser().parse_stream(io.StringIO('[server]\\nport = 8080\\n'))
        >>> table.as_dict()
        {'server': {'port': 8080}}
    """

    format_name = 'TOML'

    def parse_stream(self, stream: IO[Any]) -> ConfigTable:
        text = self._read_text(stream)
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ParseError(f"Invalid TOML: {e}") from e
        table = table_from_dict(data)
        logger.debug("Parsed TOML document with %d top-level entries", len(table))
        return table
