# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parsers for populating a configuration tree from serialized sources.

Available parsers:
- toml: TOML documents (TomlParser)
- yaml: YAML documents (YamlParser)

Example:
    >>> from genro_config.parsers import TomlParser
    >>> table = TomlParser().parse_path('app.toml')
    >>> table.as_dict()
"""

from .base import SourceParser
from .toml_parser import TomlParser
from .yaml_parser import YamlParser

__all__ = [
    'SourceParser',
    'TomlParser',
    'YamlParser',
]
