# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SourceParser - the capability that turns serialized text into a table."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import IO, Any

from ..exceptions import ParseError
from ..store import ConfigTable

logger = logging.getLogger(__name__)


class SourceParser(ABC):
    """Base class for format parsers.

    Subclasses implement parse_stream(). Parsers must raise ParseError on
    malformed input and never return a partially filled table.
    """

    #: Short format name used in log and error messages.
    format_name: str = ''

    @abstractmethod
    def parse_stream(self, stream: IO[Any]) -> ConfigTable:
        """Parse a readable text or binary stream.

        Raises:
            ParseError: If the content cannot be parsed.
        """

    def parse_path(self, path: str | os.PathLike[str]) -> ConfigTable:
        """Parse a file.

        Raises:
            OSError: If the file cannot be opened.
            ParseError: If its content cannot be parsed.
        """
        logger.debug("Parsing %s", os.fspath(path))
        with open(path, 'rb') as f:
            try:
                return self.parse_stream(f)
            except ParseError as e:
                if e.source is None:
                    e.source = os.fspath(path)
                raise

    def _read_text(self, stream: IO[Any]) -> str:
        data = stream.read()
        if isinstance(data, bytes):
            try:
                return data.decode('utf-8')
            except UnicodeDecodeError as e:
                raise ParseError(f"Invalid {self.format_name} encoding: {e}") from e
        return data
