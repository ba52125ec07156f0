# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Process-wide configuration instance.

Applications that want a single shared Config install it once at startup
and remove it at shutdown::

    init_config(TomlConfig('app.toml'))
    ...
    port = get_config().get('server.port', int)
    ...
    reset_config()

The Config itself is not synchronized; see Config for the threading model.
"""

from __future__ import annotations

from .config import Config
from .exceptions import ConfigError

_config: Config | None = None


def init_config(config: Config) -> Config:
    """Install config as the process-wide instance and return it.

    Raises:
        ConfigError: If an instance is already installed.
    """
    global _config
    if _config is not None:
        raise ConfigError("Global config already initialized")
    _config = config
    return config


def get_config() -> Config:
    """Return the process-wide instance.

    Raises:
        ConfigError: If init_config() has not been called.
    """
    if _config is None:
        raise ConfigError("Global config not initialized")
    return _config


def reset_config() -> None:
    """Remove the process-wide instance. Safe to call when none is installed."""
    global _config
    _config = None
