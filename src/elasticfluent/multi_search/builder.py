"""多重搜索请求体构建器."""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch.dsl import Search
from elasticsearch.serializer import JsonSerializer

from elasticfluent.core.ndjson import to_ndjson
from elasticfluent.core.state import snapshot
from elasticfluent.multi_search.models import MSearchHeader, MSearchRequest
from elasticfluent.typing import NdjsonLines

logger = logging.getLogger(__name__)


def _resolve_body(body: Any) -> Any:
    # 允许直接传入 QueryBuilder 或 elasticsearch.dsl 的 Search
    if isinstance(body, Search):
        return body.to_dict()
    build = getattr(body, "build", None)
    if callable(build) and not isinstance(body, dict):
        return build()
    return body


class MSearchBuilder:
    """多重搜索构建器.

    每个搜索都是 (头部, 请求体) 对，头部缺省时输出 ``{}``。输出 ``_msearch``
    接口需要的 NDJSON 文本或对象数组。

    Args:
        searches: 已累积的搜索
        serializer: NDJSON 行序列化器

    Example:
        >>> MSearchBuilder().add_query({"query": {"match_all": {}}}, {"index": "products"}).build()
        '{"index":"products"}\\n{"query":{"match_all":{}}}\\n'
    """

    def __init__(
        self,
        searches: tuple[MSearchRequest, ...] = (),
        serializer: JsonSerializer | None = None,
    ):
        self._searches = tuple(searches)
        self._serializer = serializer

    def add(self, request: MSearchRequest) -> MSearchBuilder:
        """添加一个 {"header": ..., "body": ...} 请求."""
        return MSearchBuilder(self._searches + (request,), self._serializer)

    def add_query(self, body: Any, header: MSearchHeader | None = None) -> MSearchBuilder:
        """
        添加一个搜索.

        Args:
            body: 请求体字典、QueryBuilder 或 elasticsearch.dsl 的 Search
            header: 头部，缺省为 {}
        """
        return self.add({"header": header or {}, "body": _resolve_body(body)})

    def build_array(self) -> NdjsonLines:
        """输出对象数组: [头部1, 请求体1, 头部2, 请求体2, ...]."""
        lines: NdjsonLines = []
        for search in self._searches:
            lines.append(search.get("header") or {})
            lines.append(_resolve_body(search.get("body")))
        return snapshot(lines)

    def build(self) -> str:
        """输出 NDJSON 文本，以换行符结尾；没有任何搜索时输出 "\\n"."""
        logger.debug(f"构建 msearch 请求体: {len(self._searches)} 个搜索")
        return to_ndjson(self.build_array(), self._serializer)
