# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - the in-memory configuration tree.

The package is organized into:
- core: ConfigTable, the table node with lookup, iteration and conversion
- loading: Converting nested mappings to tables and merging tables

Example:
    >>> from genro_config.store import table_from_dict
    >>> table = table_from_dict({'server': {'port': 8080}})
    >>> table.as_dict()
    {'server': {'port': 8080}}
"""

from .core import ConfigTable
from .loading import check_merge, merge_table, table_from_dict

__all__ = ["ConfigTable", "check_merge", "merge_table", "table_from_dict"]
