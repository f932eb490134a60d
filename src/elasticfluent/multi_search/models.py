"""多重搜索数据模型定义模块."""

from __future__ import annotations

from typing import Any, Literal, TypedDict


class MSearchHeader(TypedDict, total=False):
    """单个搜索的头部.

    Attributes:
        index: 索引名称或名称列表
        preference: 搜索偏好，如 "_local"
        routing: 路由
        search_type: 搜索类型
    """

    index: str | list[str]
    preference: str
    routing: str
    search_type: Literal["query_then_fetch", "dfs_query_then_fetch"]


class MSearchRequest(TypedDict, total=False):
    """多重搜索中的单个请求，header 可以省略."""

    header: MSearchHeader
    body: dict[str, Any]
