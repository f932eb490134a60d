"""elasticfluent - Elasticsearch 请求体流式构建工具.

用不可变的流式 API 组合 Elasticsearch 请求体，只负责构建，不负责执行请求。

主要功能:
    - query: 构建 _search 请求体（查询、bool 组合、knn、聚合、建议、分页等）
    - aggregations: 构建可任意嵌套的聚合
    - suggest: 构建建议器
    - bulk / msearch: 构建 NDJSON 格式的批量操作与多重搜索请求体
    - index_builder: 构建创建索引的配置

使用示例:
    from elasticfluent import query

    body = (
        query()
        .match("name", "laptop", {"boost": 2})
        .from_(0)
        .size(20)
        .build()
    )
    # {"query": {"match": {"name": {"query": "laptop", "boost": 2}}}, "from": 0, "size": 20}
"""

__version__ = "0.1.0"

from elasticsearch.serializer import JsonSerializer

# 导出构建器
from elasticfluent.builders import (
    AggregationBuilder,
    BoolBuilder,
    ClauseBuilder,
    QueryBuilder,
    SuggesterBuilder,
    clause_builder,
)
from elasticfluent.bulk import BulkAction, BulkBuilder, BulkOperation

# 导出异常
from elasticfluent.exceptions import (
    AggregationCompositionError,
    ElasticFluentError,
    SerializationError,
)
from elasticfluent.index_config import IndexBuilder
from elasticfluent.multi_search import MSearchBuilder


def query(include_query: bool = True) -> QueryBuilder:
    """创建查询构建器，include_query 为 False 时输出不包含 query."""
    return QueryBuilder(include_query=include_query)


def aggregations() -> AggregationBuilder:
    """创建聚合构建器."""
    return AggregationBuilder()


def suggest() -> SuggesterBuilder:
    """创建建议器构建器."""
    return SuggesterBuilder()


def bulk(serializer: JsonSerializer | None = None) -> BulkBuilder:
    """创建批量操作构建器."""
    return BulkBuilder(serializer=serializer)


def msearch(serializer: JsonSerializer | None = None) -> MSearchBuilder:
    """创建多重搜索构建器."""
    return MSearchBuilder(serializer=serializer)


def index_builder() -> IndexBuilder:
    """创建索引配置构建器."""
    return IndexBuilder()


__all__ = [
    # 版本
    "__version__",
    # 工厂函数
    "query",
    "aggregations",
    "suggest",
    "bulk",
    "msearch",
    "index_builder",
    # 构建器
    "QueryBuilder",
    "BoolBuilder",
    "ClauseBuilder",
    "clause_builder",
    "AggregationBuilder",
    "SuggesterBuilder",
    "BulkBuilder",
    "BulkAction",
    "BulkOperation",
    "MSearchBuilder",
    "IndexBuilder",
    # 异常
    "ElasticFluentError",
    "AggregationCompositionError",
    "SerializationError",
]
