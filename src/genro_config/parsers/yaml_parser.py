# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""YAML source parser."""

from __future__ import annotations

import logging
from typing import IO, Any

import yaml

from ..exceptions import ParseError
from ..store import ConfigTable, table_from_dict
from .base import SourceParser

logger = logging.getLogger(__name__)


class YamlParser(SourceParser):
    """Parse YAML documents into a ConfigTable.

    Documents are read with yaml.safe_load(). An empty document is an empty
    table. The top level must be a mapping with string keys; null values and
    sequences are rejected.
    """

    format_name = 'YAML'

    def parse_stream(self, stream: IO[Any]) -> ConfigTable:
        text = self._read_text(stream)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParseError(f"Invalid YAML: {e}") from e
        if data is None:
            data = {}
        table = table_from_dict(data)
        logger.debug("Parsed YAML document with %d top-level entries", len(table))
        return table
