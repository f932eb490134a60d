"""索引配置构建器."""

from __future__ import annotations

from elasticfluent.core.state import assoc_in, evolve, snapshot
from elasticfluent.index_config.models import (
    AliasOptions,
    CreateIndexOptions,
    IndexMappings,
    IndexSettings,
)


class IndexBuilder:
    """索引配置构建器.

    累积 mappings / settings / aliases，输出创建索引的请求体。

    Example:
        >>> config = (
        ...     IndexBuilder()
        ...     .mappings({"properties": {"name": {"type": "text"}}})
        ...     .settings({"number_of_shards": 1})
        ...     .alias("products_alias")
        ...     .build()
        ... )
    """

    def __init__(self, state: CreateIndexOptions | None = None):
        self._state: CreateIndexOptions = state or {}

    def mappings(self, mappings: IndexMappings) -> IndexBuilder:
        """设置映射，替换之前的值."""
        return IndexBuilder(evolve(self._state, {"mappings": mappings}))

    def settings(self, settings: IndexSettings) -> IndexBuilder:
        """设置索引参数，替换之前的值."""
        return IndexBuilder(evolve(self._state, {"settings": settings}))

    def alias(self, name: str, options: AliasOptions | None = None) -> IndexBuilder:
        """添加别名，同名别名以最后一次为准."""
        return IndexBuilder(assoc_in(self._state, ["aliases", name], dict(options or {})))

    def build(self) -> CreateIndexOptions:
        return snapshot(self._state)
