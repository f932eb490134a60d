"""子句构建器模块.

ClauseBuilder 是无状态的片段工厂：每个方法都是参数的纯函数，返回一个
``{查询类型: 负载}`` 片段。它既用于根查询，也用于 bool 子句、nested、
constant_score、script_score 等回调内部。
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from elasticfluent.core.fragments import absorb
from elasticfluent.core.options import (
    ConstantScoreOptions,
    FuzzyOptions,
    GeoBoundingBoxOptions,
    GeoDistanceOptions,
    GeoPolygonOptions,
    KnnOptions,
    MatchOptions,
    MultiMatchOptions,
    NestedOptions,
    PercolateOptions,
    QueryStringOptions,
    RangeConditions,
    RegexpOptions,
    ScriptOptions,
    ScriptScoreOptions,
)
from elasticfluent.typing import Fragment


def knn_body(field: str, query_vector: Sequence[float], options: KnnOptions) -> dict:
    """构建 knn 负载（根级 knn 与 knn 子句共用）.

    filter、boost 仅在为真值时输出，similarity 仅在不为 None 时输出。
    """
    body: dict[str, Any] = {
        "field": str(field),
        "query_vector": list(query_vector),
        "k": options.get("k"),
        "num_candidates": options.get("num_candidates"),
    }
    if options.get("filter"):
        body["filter"] = options["filter"]
    if options.get("boost"):
        body["boost"] = options["boost"]
    if options.get("similarity") is not None:
        body["similarity"] = options["similarity"]
    return body


def script_body(options: ScriptOptions) -> dict:
    """构建 script 对象，lang 默认 painless，params 仅在为真值时输出."""
    script: dict[str, Any] = {
        "source": options.get("source"),
        "lang": options.get("lang", "painless"),
    }
    if options.get("params"):
        script["params"] = options["params"]
    return script


def _as_list(values: Any) -> Any:
    # 单个字符串原样写入，不拆成字符
    if isinstance(values, str):
        return values
    return list(values)


class ClauseBuilder:
    """
    DSL 子句构建器.

    不持有任何数据，可以在进程内共享（见模块级 ``clause_builder``）。

    使用示例:
        c = ClauseBuilder()
        c.match("name", "laptop", {"boost": 2})
        # {"match": {"name": {"query": "laptop", "boost": 2}}}

        c.when(category, lambda c2: c2.term("category", category)) or c.match_all()
    """

    # ========== 全文查询 ==========

    def match_all(self) -> Fragment:
        return {"match_all": {}}

    def match(self, field: str, value: Any, options: MatchOptions | None = None) -> Fragment:
        """
        match 查询.

        Args:
            field: 字段名
            value: 查询值
            options: 查询选项，为空时输出简写形式

        Returns:
            无选项: {"match": {field: value}}
            有选项: {"match": {field: {"query": value, **options}}}
        """
        if not options:
            return {"match": {field: value}}
        return {"match": {field: {"query": value, **options}}}

    def multi_match(
        self,
        fields: Sequence[str] | str,
        query: str,
        options: MultiMatchOptions | None = None,
    ) -> Fragment:
        return {"multi_match": {"fields": _as_list(fields), "query": query, **(options or {})}}

    def match_phrase(self, field: str, value: Any) -> Fragment:
        return {"match_phrase": {field: value}}

    def match_phrase_prefix(
        self, field: str, value: Any, options: MatchOptions | None = None
    ) -> Fragment:
        if not options:
            return {"match_phrase_prefix": {field: value}}
        return {"match_phrase_prefix": {field: {"query": value, **options}}}

    def query_string(self, query: str, options: QueryStringOptions | None = None) -> Fragment:
        return {"query_string": {"query": query, **(options or {})}}

    # ========== 词项查询 ==========

    def term(self, field: str, value: Any) -> Fragment:
        return {"term": {field: value}}

    def terms(self, field: str, values: Sequence[Any] | str) -> Fragment:
        return {"terms": {field: _as_list(values)}}

    def range(self, field: str, conditions: RangeConditions) -> Fragment:  # noqa: A003
        return {"range": {field: dict(conditions)}}

    def exists(self, field: str) -> Fragment:
        return {"exists": {"field": field}}

    def prefix(self, field: str, value: str) -> Fragment:
        return {"prefix": {field: value}}

    def wildcard(self, field: str, value: str) -> Fragment:
        return {"wildcard": {field: value}}

    def fuzzy(self, field: str, value: str, options: FuzzyOptions | None = None) -> Fragment:
        """fuzzy 查询，始终输出 {field: {"value": value, **options}} 形式."""
        return {"fuzzy": {field: {"value": value, **(options or {})}}}

    def ids(self, values: Sequence[str] | str) -> Fragment:
        return {"ids": {"values": _as_list(values)}}

    def regexp(self, field: str, value: str, options: RegexpOptions | None = None) -> Fragment:
        if not options:
            return {"regexp": {field: value}}
        return {"regexp": {field: {"value": value, **options}}}

    # ========== 地理查询 ==========

    def geo_distance(
        self,
        field: str,
        center: Any,
        options: GeoDistanceOptions | None = None,
    ) -> Fragment:
        """
        geo_distance 查询.

        Args:
            field: 地理字段名
            center: 中心点，如 {"lat": 40.7, "lon": -74.0}
            options: 距离选项，如 {"distance": "5km"}
        """
        return {"geo_distance": {str(field): center, **(options or {})}}

    def geo_bounding_box(self, field: str, options: GeoBoundingBoxOptions) -> Fragment:
        return {"geo_bounding_box": {str(field): options}}

    def geo_polygon(self, field: str, options: GeoPolygonOptions) -> Fragment:
        return {"geo_polygon": {str(field): options}}

    # ========== 向量与脚本 ==========

    def knn(
        self,
        field: str,
        query_vector: Sequence[float],
        options: KnnOptions,
    ) -> Fragment:
        """knn 查询子句（可放入 bool 内）."""
        return {"knn": knn_body(field, query_vector, options)}

    def script(self, options: ScriptOptions) -> Fragment:
        """
        script 查询.

        示例:
            c.script({"source": "doc['price'].value > params.min", "params": {"min": 10}})
            # {"script": {"script": {"source": ..., "lang": "painless", "params": {...}}}}
        """
        payload: dict[str, Any] = {"script": script_body(options)}
        if options.get("boost"):
            payload["boost"] = options["boost"]
        return {"script": payload}

    def percolate(self, options: PercolateOptions) -> Fragment:
        return {"percolate": dict(options)}

    # ========== 复合查询 ==========

    def bool(self, fn: Callable[[Any], Any]) -> Fragment:  # noqa: A003
        """
        嵌套 bool 查询.

        回调接收一个全新的 BoolBuilder，返回值被转换为 {"bool": {...}} 片段，
        因此 bool 可以在 bool 子句中任意深度嵌套。

        示例:
            c.bool(lambda b: b.should(lambda c: c.term("a", 1)).should(lambda c: c.term("b", 2)))
        """
        from elasticfluent.builders.bool import BoolBuilder

        return absorb(fn(BoolBuilder()))

    def nested(
        self,
        path: str,
        fn: Callable[[ClauseBuilder], Any],
        options: NestedOptions | None = None,
    ) -> Fragment:
        """
        nested 查询.

        回调中的字段名不受约束，可以使用 "comments.author" 这类点号路径。
        """
        return {
            "nested": {
                "path": path,
                "query": absorb(fn(ClauseBuilder())),
                **(options or {}),
            }
        }

    def constant_score(
        self,
        fn: Callable[[ClauseBuilder], Any],
        options: ConstantScoreOptions | None = None,
    ) -> Fragment:
        return {
            "constant_score": {
                "filter": absorb(fn(clause_builder)),
                **(options or {}),
            }
        }

    def script_score(
        self,
        fn: Callable[[ClauseBuilder], Any],
        script: ScriptOptions,
        options: ScriptScoreOptions | None = None,
    ) -> Fragment:
        """script_score 查询，min_score 在不为 None 时输出，boost 在为真值时输出."""
        options = options or {}
        payload: dict[str, Any] = {
            "query": absorb(fn(clause_builder)),
            "script": script_body(script),
        }
        if options.get("min_score") is not None:
            payload["min_score"] = options["min_score"]
        if options.get("boost"):
            payload["boost"] = options["boost"]
        return {"script_score": payload}

    # ========== 条件组合 ==========

    def when(
        self,
        condition: Any,
        then_fn: Callable[[ClauseBuilder], Any],
        else_fn: Callable[[ClauseBuilder], Any] | None = None,
    ) -> Any:
        """
        条件组合.

        按 Python 真值规则判断 condition：为真调用 then_fn，否则调用 else_fn，
        都没有时返回 None。返回的 None 不会被过滤，调用方应提供默认片段。

        示例:
            q.filter(lambda c: c.when(category, lambda c2: c2.term("category", category)) or c.match_all())
        """
        if condition:
            return then_fn(ClauseBuilder())
        return else_fn(ClauseBuilder()) if else_fn else None


# 共享的子句构建器实例（无状态）
clause_builder = ClauseBuilder()
