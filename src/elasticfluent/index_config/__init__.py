"""索引配置模块."""

from .builder import IndexBuilder
from .models import (
    AliasOptions,
    CreateIndexOptions,
    DenseVectorIndexOptions,
    IndexMappings,
    IndexSettings,
    MappingProperty,
)

__all__ = [
    "IndexBuilder",
    "AliasOptions",
    "CreateIndexOptions",
    "DenseVectorIndexOptions",
    "IndexMappings",
    "IndexSettings",
    "MappingProperty",
]
