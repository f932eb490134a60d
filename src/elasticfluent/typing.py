"""elasticfluent 类型定义模块."""

from typing import Any, Dict, List

# DSL 片段类型，形如 {查询类型: 负载}
Fragment = Dict[str, Any]

# 请求体类型（_search 请求体）
RequestBody = Dict[str, Any]

# 聚合映射类型
# 格式: {聚合名称: {聚合类型: {...}, "aggs": {...}}}
AggregationMap = Dict[str, Any]

# 建议器映射类型
# 格式: {建议名称: {"text": ..., 建议类型: {...}}}
SuggesterMap = Dict[str, Any]

# 排序项类型，形如 {字段名: "asc" | "desc"}
SortItem = Dict[str, str]

# NDJSON 行列表类型
NdjsonLines = List[Dict[str, Any]]
