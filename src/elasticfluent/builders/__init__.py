"""构建器模块导出."""

from elasticfluent.builders.aggregation import AggregationBuilder
from elasticfluent.builders.bool import BoolBuilder
from elasticfluent.builders.clause import ClauseBuilder, clause_builder
from elasticfluent.builders.query import QueryBuilder
from elasticfluent.builders.suggester import SuggesterBuilder

__all__ = [
    "AggregationBuilder",
    "BoolBuilder",
    "ClauseBuilder",
    "QueryBuilder",
    "SuggesterBuilder",
    "clause_builder",
]
