"""DSL 片段归一化模块.

bool / nested / constant_score / script_score 等回调可以返回多种对象，
这里把它们统一成可以直接写入请求体的片段。
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch.dsl.query import Query

from elasticfluent.exceptions import ElasticFluentError

logger = logging.getLogger(__name__)


def absorb(result: Any) -> Any:
    """把回调返回值转换为 DSL 片段.

    支持:
        - dict: 原样返回
        - elasticsearch.dsl 的 Query 对象（Q(...)）: 调用 to_dict()
        - 实现了 to_fragment() 的构建器（QueryBuilder、BoolBuilder）: 取其片段
        - None: 原样返回，调用方应配合 ``when(...) or 默认片段`` 使用

    Args:
        result: 回调返回值

    Returns:
        DSL 片段
    """
    if result is None:
        logger.warning("子句回调返回了 None，将原样写入请求体；请为 when() 提供默认片段")
        return None
    if isinstance(result, Query):
        return result.to_dict()
    to_fragment = getattr(result, "to_fragment", None)
    if callable(to_fragment):
        return to_fragment()
    return result


def built_map(result: Any, kind: str) -> dict[str, Any]:
    """把 aggs / suggest / sub_agg 回调的返回值转换为映射.

    回调可以返回构建器本身，也可以返回它 build() 之后的字典。

    Args:
        result: 回调返回值
        kind: 回调所属的操作名，用于错误信息

    Returns:
        聚合或建议器映射

    Raises:
        ElasticFluentError: 返回值既不是构建器也不是字典时抛出
    """
    to_map = getattr(result, "to_map", None)
    if callable(to_map):
        return to_map()
    if isinstance(result, dict):
        return result
    raise ElasticFluentError(f"{kind} 回调必须返回构建器或字典，实际返回 {type(result).__name__}")
