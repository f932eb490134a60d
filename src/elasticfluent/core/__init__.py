"""核心模块导出."""

from elasticfluent.core.fragments import absorb, built_map
from elasticfluent.core.ndjson import dumps_line, to_ndjson
from elasticfluent.core.state import (
    append,
    assoc_in,
    evolve,
    get_in,
    snapshot,
    update_in,
    without,
)

__all__ = [
    "absorb",
    "append",
    "assoc_in",
    "built_map",
    "dumps_line",
    "evolve",
    "get_in",
    "snapshot",
    "to_ndjson",
    "update_in",
    "without",
]
