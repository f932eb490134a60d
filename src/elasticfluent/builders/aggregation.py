"""聚合构建器模块.

聚合以扁平映射累积：每个桶/指标操作向当前映射追加一个
``{名称: {类型: {"field": 字段, **选项}}}`` 条目。sub_agg 是唯一的递归操作：
它用一个全新的构建器构建子聚合，并把结果合并到 **最近一次插入** 的条目的
``aggs`` 键下。"最近一次插入" 按插入顺序而非名称确定，由构建器额外记录。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from elasticfluent.core.fragments import built_map
from elasticfluent.core.options import (
    CardinalityAggOptions,
    DateHistogramAggOptions,
    HistogramAggOptions,
    MetricAggOptions,
    PercentilesAggOptions,
    RangeAggOptions,
    TermsAggOptions,
    TopHitsAggOptions,
)
from elasticfluent.core.state import evolve, snapshot, update_in
from elasticfluent.exceptions import AggregationCompositionError
from elasticfluent.typing import AggregationMap

logger = logging.getLogger(__name__)


class AggregationBuilder:
    """
    聚合构建器.

    使用示例:
        aggs = (
            AggregationBuilder()
            .terms("by_category", "category", {"size": 10})
            .sub_agg(lambda s: s.avg("avg_price", "price").max("max_price", "price"))
            .date_histogram("timeline", "created_at", {"calendar_interval": "1d"})
            .build()
        )
        # {
        #     "by_category": {
        #         "terms": {"field": "category", "size": 10},
        #         "aggs": {"avg_price": {...}, "max_price": {...}},
        #     },
        #     "timeline": {"date_histogram": {...}},
        # }
    """

    def __init__(self, aggs: AggregationMap | None = None, last: str | None = None):
        """
        初始化构建器.

        Args:
            aggs: 已累积的聚合映射
            last: 最近一次插入的聚合名称，sub_agg 挂载到该条目
        """
        self._aggs: AggregationMap = aggs or {}
        self._last = last

    # ========== 通用入口 ==========

    def raw(self, name: str, node: dict[str, Any]) -> AggregationBuilder:
        """
        插入一个完整的聚合节点.

        Args:
            name: 聚合名称
            node: 聚合节点，如 {"filter": {"term": {"level": "error"}}}

        Returns:
            新的构建器，node 成为最近插入的条目
        """
        return AggregationBuilder(evolve(self._aggs, {name: node}), name)

    def bucket(
        self,
        name: str,
        agg_type: str,
        field: str | None = None,
        **options: Any,
    ) -> AggregationBuilder:
        """
        添加任意类型的聚合.

        Args:
            name: 聚合名称
            agg_type: 聚合类型，如 "terms"、"geohash_grid"
            field: 字段名，为 None 时不输出 field
            **options: 其他聚合参数

        示例:
            builder.bucket("grid", "geohash_grid", field="location", precision=5)
        """
        body: dict[str, Any] = {"field": field} if field is not None else {}
        return self.raw(name, {agg_type: {**body, **options}})

    def _field_agg(
        self, name: str, agg_type: str, field: str, options: Any
    ) -> AggregationBuilder:
        return self.raw(name, {agg_type: {"field": field, **(options or {})}})

    # ========== 桶聚合 ==========

    def terms(
        self, name: str, field: str, options: TermsAggOptions | None = None
    ) -> AggregationBuilder:
        return self._field_agg(name, "terms", field, options)

    def date_histogram(
        self, name: str, field: str, options: DateHistogramAggOptions
    ) -> AggregationBuilder:
        return self._field_agg(name, "date_histogram", field, options)

    def range(  # noqa: A003
        self, name: str, field: str, options: RangeAggOptions
    ) -> AggregationBuilder:
        return self._field_agg(name, "range", field, options)

    def histogram(
        self, name: str, field: str, options: HistogramAggOptions
    ) -> AggregationBuilder:
        return self._field_agg(name, "histogram", field, options)

    # ========== 指标聚合 ==========

    def avg(
        self, name: str, field: str, options: MetricAggOptions | None = None
    ) -> AggregationBuilder:
        return self._field_agg(name, "avg", field, options)

    def sum(  # noqa: A003
        self, name: str, field: str, options: MetricAggOptions | None = None
    ) -> AggregationBuilder:
        return self._field_agg(name, "sum", field, options)

    def min(  # noqa: A003
        self, name: str, field: str, options: MetricAggOptions | None = None
    ) -> AggregationBuilder:
        return self._field_agg(name, "min", field, options)

    def max(  # noqa: A003
        self, name: str, field: str, options: MetricAggOptions | None = None
    ) -> AggregationBuilder:
        return self._field_agg(name, "max", field, options)

    def cardinality(
        self, name: str, field: str, options: CardinalityAggOptions | None = None
    ) -> AggregationBuilder:
        """去重计数聚合，精度由 precision_threshold 控制."""
        return self._field_agg(name, "cardinality", field, options)

    def percentiles(
        self, name: str, field: str, options: PercentilesAggOptions | None = None
    ) -> AggregationBuilder:
        return self._field_agg(name, "percentiles", field, options)

    def stats(
        self, name: str, field: str, options: MetricAggOptions | None = None
    ) -> AggregationBuilder:
        """统计聚合（count, min, max, avg, sum）."""
        return self._field_agg(name, "stats", field, options)

    def extended_stats(
        self, name: str, field: str, options: MetricAggOptions | None = None
    ) -> AggregationBuilder:
        """扩展统计聚合（额外返回 variance, std_deviation 等）."""
        return self._field_agg(name, "extended_stats", field, options)

    def value_count(
        self, name: str, field: str, options: MetricAggOptions | None = None
    ) -> AggregationBuilder:
        return self._field_agg(name, "value_count", field, options)

    def top_hits(
        self, name: str, options: TopHitsAggOptions | None = None
    ) -> AggregationBuilder:
        """
        Top Hits 聚合，不需要 field.

        通常作为子聚合使用，返回每个桶的前 N 条文档。
        """
        return self.raw(name, {"top_hits": dict(options or {})})

    # ========== 子聚合 ==========

    def sub_agg(
        self, fn: Callable[[AggregationBuilder], AggregationBuilder]
    ) -> AggregationBuilder:
        """
        为最近插入的聚合添加子聚合.

        回调接收一个全新的空构建器，其构建结果合并到最近插入条目的 aggs 键下
        （键不存在时创建）。连续多次调用 sub_agg 会挂载到同一个父聚合。

        Args:
            fn: 子聚合构建回调

        Returns:
            新的构建器，最近插入的条目保持不变

        Raises:
            AggregationCompositionError: 当前没有任何聚合可供挂载时抛出

        示例:
            # 子聚合挂载到 a，而不是之后添加的 b
            builder.terms("a", "x").sub_agg(lambda s: s.avg("v", "y")).terms("b", "z")
        """
        if self._last is None:
            raise AggregationCompositionError("sub_agg 之前必须至少添加一个聚合")

        child_aggs = built_map(fn(AggregationBuilder()), "sub_agg")
        logger.debug(f"子聚合 {list(child_aggs)} 挂载到 '{self._last}'")

        aggs = update_in(
            self._aggs,
            [self._last, "aggs"],
            lambda existing: {**(existing or {}), **child_aggs},
        )
        return AggregationBuilder(aggs, self._last)

    def to_map(self) -> AggregationMap:
        """返回内部聚合映射（与构建器共享结构，仅供组合使用）."""
        return self._aggs

    def build(self) -> AggregationMap:
        """构建聚合映射的独立副本."""
        return snapshot(self._aggs)
