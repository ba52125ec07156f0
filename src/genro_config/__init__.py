# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Config - Typed hierarchical configuration.

Configuration is kept in a tree of tables and typed values, addressed by
dotted keys ('server.http.port') and read or written with an explicit type.
TOML and YAML sources can be loaded and merged under any root.
"""

__version__ = "0.1.0"

from .config import Config, TomlConfig, YamlConfig
from .exceptions import (
    ConfigError,
    InvalidAccessError,
    MalformedKeyError,
    ParseError,
    TypeConflictError,
)
from .global_config import get_config, init_config, reset_config
from .node import ConfigNode, NodeType
from .parsers import SourceParser, TomlParser, YamlParser
from .path import KEY_DELIMITER, join_key, parse_key
from .store import ConfigTable, table_from_dict

__all__ = [
    # Core classes
    "Config",
    "TomlConfig",
    "YamlConfig",
    "ConfigTable",
    "ConfigNode",
    "NodeType",
    # Keys
    "KEY_DELIMITER",
    "parse_key",
    "join_key",
    # Parsers
    "SourceParser",
    "TomlParser",
    "YamlParser",
    "table_from_dict",
    # Global instance
    "init_config",
    "get_config",
    "reset_config",
    # Exceptions
    "ConfigError",
    "MalformedKeyError",
    "InvalidAccessError",
    "TypeConflictError",
    "ParseError",
]
