"""查询选项类型定义模块.

各查询类型的选项字典按开放记录（TypedDict, total=False）定义，
构建器只负责透传，不做取值校验，最终由 Elasticsearch 校验。
"""

from typing import Any, Literal, TypedDict

SortDirection = Literal["asc", "desc"]


class MatchOptions(TypedDict, total=False):
    """match / match_phrase_prefix 查询选项.

    Attributes:
        operator: 词项之间的逻辑关系
        fuzziness: 模糊度，如 "AUTO" 或 1
        boost: 权重
        analyzer: 分析器
        zero_terms_query: 分析后无词项时的行为
        max_expansions: 前缀扩展数量（match_phrase_prefix）
    """

    operator: Literal["and", "or"]
    fuzziness: str | int
    boost: float
    analyzer: str
    zero_terms_query: Literal["none", "all"]
    max_expansions: int


class MultiMatchOptions(TypedDict, total=False):
    """multi_match 查询选项."""

    type: Literal[
        "best_fields",
        "most_fields",
        "cross_fields",
        "phrase",
        "phrase_prefix",
        "bool_prefix",
    ]
    operator: Literal["and", "or"]
    tie_breaker: float
    boost: float


class FuzzyOptions(TypedDict, total=False):
    """fuzzy 查询选项."""

    fuzziness: str | int
    boost: float


class RangeConditions(TypedDict, total=False):
    """range 查询条件."""

    gt: Any
    gte: Any
    lt: Any
    lte: Any
    format: str
    time_zone: str


class RegexpOptions(TypedDict, total=False):
    """regexp 查询选项."""

    flags: str
    max_determinized_states: int
    boost: float


class QueryStringOptions(TypedDict, total=False):
    """query_string 查询选项."""

    default_field: str
    fields: list[str]
    default_operator: Literal["AND", "OR"]
    analyze_wildcard: bool
    boost: float


class NestedOptions(TypedDict, total=False):
    """nested 查询选项."""

    score_mode: Literal["avg", "max", "min", "sum", "none"]
    ignore_unmapped: bool
    inner_hits: dict[str, Any]


class ConstantScoreOptions(TypedDict, total=False):
    """constant_score 查询选项."""

    boost: float


class KnnOptions(TypedDict, total=False):
    """knn 向量检索选项（Elasticsearch 8.0+）.

    Attributes:
        k: 返回的最近邻数量
        num_candidates: 每个分片考察的候选数量
        filter: 预过滤片段
        boost: 权重
        similarity: 最小相似度阈值
    """

    k: int
    num_candidates: int
    filter: Any
    boost: float
    similarity: float


class ScriptOptions(TypedDict, total=False):
    """script 查询选项，lang 默认为 painless."""

    source: str
    lang: str
    params: dict[str, Any]
    boost: float


class ScriptScoreOptions(TypedDict, total=False):
    """script_score 查询附加选项."""

    min_score: float
    boost: float


class PercolateOptions(TypedDict, total=False):
    """percolate 查询选项."""

    field: str
    document: dict[str, Any]
    documents: list[dict[str, Any]]
    index: str
    id: str  # noqa: A003


class GeoPoint(TypedDict):
    """地理坐标点."""

    lat: float
    lon: float


class GeoDistanceOptions(TypedDict, total=False):
    """geo_distance 查询选项."""

    distance: str | float
    distance_type: Literal["arc", "plane"]
    unit: Literal["mi", "km", "mm", "cm", "m", "yd", "ft", "in", "nmi"]


class GeoBoundingBoxOptions(TypedDict, total=False):
    """geo_bounding_box 查询选项，可以用角点或四条边表示."""

    top_left: GeoPoint
    bottom_right: GeoPoint
    top: float
    left: float
    bottom: float
    right: float


class GeoPolygonOptions(TypedDict):
    """geo_polygon 查询选项."""

    points: list[GeoPoint]


class HighlightOptions(TypedDict, total=False):
    """highlight 选项."""

    fragment_size: int
    number_of_fragments: int
    pre_tags: list[str]
    post_tags: list[str]
    type: Literal["unified", "plain", "fvh"]


class TermSuggesterOptions(TypedDict, total=False):
    """term 建议器选项."""

    field: str
    size: int
    suggest_mode: Literal["missing", "popular", "always"]
    string_distance: str
    max_edits: int
    prefix_length: int
    min_word_length: int


class PhraseSuggesterOptions(TypedDict, total=False):
    """phrase 建议器选项."""

    field: str
    size: int
    confidence: float
    max_errors: float
    direct_generator: list[dict[str, Any]]
    highlight: dict[str, str]
    collate: dict[str, Any]


class CompletionSuggesterOptions(TypedDict, total=False):
    """completion 建议器选项."""

    field: str
    size: int
    skip_duplicates: bool
    fuzzy: dict[str, Any]
    contexts: dict[str, Any]


class TermsAggOptions(TypedDict, total=False):
    """terms 聚合选项."""

    size: int
    min_doc_count: int
    order: dict[str, SortDirection]
    missing: str
    include: Any
    exclude: Any


class DateHistogramAggOptions(TypedDict, total=False):
    """date_histogram 聚合选项."""

    interval: str
    calendar_interval: str
    fixed_interval: str
    format: str
    min_doc_count: int
    order: dict[str, SortDirection]
    extended_bounds: dict[str, Any]
    time_zone: str


class RangeAggOptions(TypedDict, total=False):
    """range 聚合选项，ranges 形如 [{"to": 100}, {"from": 100, "key": "mid"}]."""

    ranges: list[dict[str, Any]]
    keyed: bool


class HistogramAggOptions(TypedDict, total=False):
    """histogram 聚合选项."""

    interval: float
    min_doc_count: int
    order: dict[str, SortDirection]
    extended_bounds: dict[str, float]


class MetricAggOptions(TypedDict, total=False):
    """avg/sum/min/max/stats/value_count 聚合选项."""

    missing: Any
    script: dict[str, Any]


class CardinalityAggOptions(TypedDict, total=False):
    """cardinality 聚合选项."""

    precision_threshold: int
    missing: Any


class PercentilesAggOptions(TypedDict, total=False):
    """percentiles 聚合选项."""

    percents: list[float]
    keyed: bool
    missing: Any


class TopHitsAggOptions(TypedDict, total=False):
    """top_hits 聚合选项."""

    size: int
    sort: list[dict[str, Any]]
    _source: Any
