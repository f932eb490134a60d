"""elasticfluent 异常定义模块."""


class ElasticFluentError(Exception):
    """elasticfluent 基础异常类."""

    pass


class AggregationCompositionError(ElasticFluentError):
    """聚合组合异常（如在没有任何聚合时调用 sub_agg）."""

    pass


class SerializationError(ElasticFluentError):
    """NDJSON 行序列化异常."""

    pass
