"""根查询构建器模块."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from elasticsearch.dsl import Search

from elasticfluent.builders.aggregation import AggregationBuilder
from elasticfluent.builders.bool import BoolBuilder, ClauseFn
from elasticfluent.builders.clause import clause_builder, knn_body
from elasticfluent.builders.suggester import SuggesterBuilder
from elasticfluent.core.fragments import built_map
from elasticfluent.core.options import (
    ConstantScoreOptions,
    FuzzyOptions,
    GeoBoundingBoxOptions,
    GeoDistanceOptions,
    GeoPolygonOptions,
    HighlightOptions,
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
    SortDirection,
)
from elasticfluent.core.state import append, evolve, get_in, snapshot, without
from elasticfluent.typing import Fragment, RequestBody, SortItem

logger = logging.getLogger(__name__)


class QueryBuilder:
    """
    ES 查询请求体构建器.

    不可变的流式构建器：每个方法都返回新的 QueryBuilder，调用它的对象保持不变。
    同一个构建器可以作为公共前缀派生多条分支，各分支只看到自己的增量。

    支持:
    - 根查询（match、term、range、geo_distance、script_score 等，后调用者覆盖）
    - bool 组合（must / should / must_not / filter / minimum_should_match）
    - knn 向量检索
    - 聚合 (aggs) 与建议器 (suggest)
    - 分页、排序、高亮、_source 及其他请求参数
    - 条件组合 (when)

    使用示例:
        body = (
            QueryBuilder()
            .bool()
            .must(lambda c: c.match("name", "laptop", {"operator": "and"}))
            .filter(lambda c: c.term("category", "electronics"))
            .sort("price", "asc")
            .from_(0)
            .size(20)
            .build()
        )
    """

    def __init__(self, state: RequestBody | None = None, include_query: bool = True):
        """
        初始化构建器.

        Args:
            state: 已累积的请求体
            include_query: 为 False 时 build() 不输出 query（仅聚合 / 仅 knn 请求）
        """
        self._state: RequestBody = state or {}
        self._include_query = include_query

    def _next(self, state: RequestBody) -> QueryBuilder:
        return QueryBuilder(state, include_query=self._include_query)

    def _set(self, key: str, value: Any) -> QueryBuilder:
        return self._next(evolve(self._state, {key: value}))

    def _with_query(self, fragment: Fragment) -> QueryBuilder:
        return self._set("query", fragment)

    # ========== bool 组合 ==========

    def bool(self) -> QueryBuilder:  # noqa: A003
        """进入 bool 状态，根查询重置为空 bool."""
        return self._with_query({"bool": {}})

    def _bool_step(self, step: Callable[[BoolBuilder], BoolBuilder]) -> QueryBuilder:
        # 当前根查询不是 bool 时，以空 bool 替换
        composer = BoolBuilder(get_in(self._state, ["query", "bool"], None) or {})
        return self._with_query(step(composer).to_fragment())

    def must(self, fn: ClauseFn) -> QueryBuilder:
        return self._bool_step(lambda b: b.must(fn))

    def should(self, fn: ClauseFn) -> QueryBuilder:
        return self._bool_step(lambda b: b.should(fn))

    def must_not(self, fn: ClauseFn) -> QueryBuilder:
        return self._bool_step(lambda b: b.must_not(fn))

    def filter(self, fn: ClauseFn) -> QueryBuilder:  # noqa: A003
        return self._bool_step(lambda b: b.filter(fn))

    def minimum_should_match(self, value: int | str) -> QueryBuilder:
        return self._bool_step(lambda b: b.minimum_should_match(value))

    # ========== 全文查询 ==========

    def match_all(self) -> QueryBuilder:
        return self._with_query(clause_builder.match_all())

    def match(self, field: str, value: Any, options: MatchOptions | None = None) -> QueryBuilder:
        return self._with_query(clause_builder.match(field, value, options))

    def multi_match(
        self,
        fields: Sequence[str] | str,
        query: str,
        options: MultiMatchOptions | None = None,
    ) -> QueryBuilder:
        return self._with_query(clause_builder.multi_match(fields, query, options))

    def match_phrase(self, field: str, value: Any) -> QueryBuilder:
        return self._with_query(clause_builder.match_phrase(field, value))

    def match_phrase_prefix(
        self, field: str, value: Any, options: MatchOptions | None = None
    ) -> QueryBuilder:
        return self._with_query(clause_builder.match_phrase_prefix(field, value, options))

    def query_string(
        self, query: str, options: QueryStringOptions | None = None
    ) -> QueryBuilder:
        return self._with_query(clause_builder.query_string(query, options))

    # ========== 词项查询 ==========

    def term(self, field: str, value: Any) -> QueryBuilder:
        return self._with_query(clause_builder.term(field, value))

    def terms(self, field: str, values: Sequence[Any] | str) -> QueryBuilder:
        return self._with_query(clause_builder.terms(field, values))

    def range(self, field: str, conditions: RangeConditions) -> QueryBuilder:  # noqa: A003
        return self._with_query(clause_builder.range(field, conditions))

    def exists(self, field: str) -> QueryBuilder:
        return self._with_query(clause_builder.exists(field))

    def prefix(self, field: str, value: str) -> QueryBuilder:
        return self._with_query(clause_builder.prefix(field, value))

    def wildcard(self, field: str, value: str) -> QueryBuilder:
        return self._with_query(clause_builder.wildcard(field, value))

    def fuzzy(self, field: str, value: str, options: FuzzyOptions | None = None) -> QueryBuilder:
        return self._with_query(clause_builder.fuzzy(field, value, options))

    def ids(self, values: Sequence[str] | str) -> QueryBuilder:
        return self._with_query(clause_builder.ids(values))

    def regexp(
        self, field: str, value: str, options: RegexpOptions | None = None
    ) -> QueryBuilder:
        return self._with_query(clause_builder.regexp(field, value, options))

    # ========== 复合查询 ==========

    def nested(
        self,
        path: str,
        fn: ClauseFn,
        options: NestedOptions | None = None,
    ) -> QueryBuilder:
        return self._with_query(clause_builder.nested(path, fn, options))

    def constant_score(
        self, fn: ClauseFn, options: ConstantScoreOptions | None = None
    ) -> QueryBuilder:
        return self._with_query(clause_builder.constant_score(fn, options))

    def script(self, options: ScriptOptions) -> QueryBuilder:
        return self._with_query(clause_builder.script(options))

    def script_score(
        self,
        fn: ClauseFn,
        script: ScriptOptions,
        options: ScriptScoreOptions | None = None,
    ) -> QueryBuilder:
        return self._with_query(clause_builder.script_score(fn, script, options))

    def percolate(self, options: PercolateOptions) -> QueryBuilder:
        return self._with_query(clause_builder.percolate(options))

    # ========== 地理查询 ==========

    def geo_distance(
        self, field: str, center: Any, options: GeoDistanceOptions | None = None
    ) -> QueryBuilder:
        return self._with_query(clause_builder.geo_distance(field, center, options))

    def geo_bounding_box(self, field: str, options: GeoBoundingBoxOptions) -> QueryBuilder:
        return self._with_query(clause_builder.geo_bounding_box(field, options))

    def geo_polygon(self, field: str, options: GeoPolygonOptions) -> QueryBuilder:
        return self._with_query(clause_builder.geo_polygon(field, options))

    # ========== 向量检索 ==========

    def knn(
        self,
        field: str,
        query_vector: Sequence[float],
        options: KnnOptions,
    ) -> QueryBuilder:
        """
        设置根级 knn 检索（与 query 并列，而不是放在 query 内）.

        Args:
            field: dense_vector 字段名
            query_vector: 查询向量
            options: 至少包含 k 与 num_candidates

        示例:
            builder.knn("embedding", [0.1, 0.2, 0.3], {"k": 10, "num_candidates": 100})
        """
        return self._set("knn", knn_body(field, query_vector, options))

    # ========== 排序、分页与请求参数 ==========

    def sort(self, field: str, direction: SortDirection = "asc") -> QueryBuilder:
        """追加一个排序字段，多次调用按调用顺序排列."""
        item: SortItem = {field: direction}
        return self._next(append(self._state, "sort", item))

    def from_(self, value: int) -> QueryBuilder:
        return self._set("from", value)

    def to(self, value: int) -> QueryBuilder:
        return self._set("to", value)

    def size(self, value: int) -> QueryBuilder:
        return self._set("size", value)

    def source(self, fields: Sequence[str] | str | bool) -> QueryBuilder:
        """设置 _source 字段过滤，字符串与布尔值原样写入."""
        return self._set("_source", fields if isinstance(fields, (bool, str)) else list(fields))

    def timeout(self, value: str) -> QueryBuilder:
        return self._set("timeout", value)

    def track_scores(self, value: bool) -> QueryBuilder:
        return self._set("track_scores", value)

    def explain(self, value: bool) -> QueryBuilder:
        return self._set("explain", value)

    def min_score(self, value: float) -> QueryBuilder:
        return self._set("min_score", value)

    def version(self, value: bool) -> QueryBuilder:
        return self._set("version", value)

    def seq_no_primary_term(self, value: bool) -> QueryBuilder:
        return self._set("seq_no_primary_term", value)

    def track_total_hits(self, value: bool | int) -> QueryBuilder:
        return self._set("track_total_hits", value)

    def highlight(
        self, fields: Sequence[str], options: HighlightOptions | None = None
    ) -> QueryBuilder:
        """
        设置高亮.

        每个字段都使用完整的 options；pre_tags / post_tags 为真值时同时写到顶层。
        """
        options = options or {}
        highlight: dict[str, Any] = {
            "fields": {str(field): dict(options) for field in fields},
        }
        if options.get("pre_tags"):
            highlight["pre_tags"] = options["pre_tags"]
        if options.get("post_tags"):
            highlight["post_tags"] = options["post_tags"]
        return self._set("highlight", highlight)

    # ========== 聚合与建议 ==========

    def aggs(self, fn: Callable[[AggregationBuilder], AggregationBuilder]) -> QueryBuilder:
        """用全新的 AggregationBuilder 构建聚合，结果替换 aggs."""
        return self._set("aggs", built_map(fn(AggregationBuilder()), "aggs"))

    def suggest(self, fn: Callable[[SuggesterBuilder], SuggesterBuilder]) -> QueryBuilder:
        """用全新的 SuggesterBuilder 构建建议器，结果替换 suggest.

        回调返回 build() 的结果 {"suggest": {...}} 时取其 suggest 部分。
        """
        result = fn(SuggesterBuilder())
        suggesters = built_map(result, "suggest")
        if isinstance(result, dict) and list(result) == ["suggest"]:
            suggesters = result["suggest"]
        return self._set("suggest", suggesters)

    # ========== 条件组合 ==========

    def when(
        self,
        condition: Any,
        then_fn: Callable[[QueryBuilder], Any],
        else_fn: Callable[[QueryBuilder], Any] | None = None,
    ) -> Any:
        """
        条件组合.

        condition 为真时用当前状态的新构建器调用 then_fn；为假时调用 else_fn，
        没有 else_fn 时返回 None。

        示例:
            builder = base.when(
                category,
                lambda q: q.filter(lambda c: c.term("category", category)),
            ) or base
        """
        if condition:
            return then_fn(self._next(self._state))
        return else_fn(self._next(self._state)) if else_fn else None

    # ========== 输出 ==========

    def to_fragment(self) -> Fragment | None:
        """返回当前根查询片段（嵌入其他查询时使用）."""
        return self._state.get("query")

    def build(self) -> RequestBody:
        """
        构建请求体.

        Returns:
            请求体字典的独立副本，多次调用结果相等
        """
        state = self._state if self._include_query else without(self._state, "query")
        return snapshot(state)

    def to_search(self, index: str | list[str] | None = None, using: Any = None) -> Search:
        """
        转换为 elasticsearch.dsl.Search 对象，交由调用方执行.

        Args:
            index: 索引名称
            using: 客户端或连接别名

        Returns:
            elasticsearch.dsl.Search 对象
        """
        kwargs: dict[str, Any] = {}
        if index is not None:
            kwargs["index"] = index
        if using is not None:
            kwargs["using"] = using
        body = self.build()
        logger.debug(f"转换为 Search 对象: index={index}, keys={list(body)}")
        return Search(**kwargs).update_from_dict(body)
