"""NDJSON 渲染模块.

Bulk 与 Multi-Search 共用的换行分隔 JSON 输出：每个元素一行紧凑 JSON，
以单个换行符连接，并且整体以一个换行符结尾（空序列输出 "\\n"）。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from elasticsearch.exceptions import SerializationError as TransportSerializationError
from elasticsearch.serializer import JsonSerializer

from elasticfluent.exceptions import SerializationError

logger = logging.getLogger(__name__)

# 默认序列化器：紧凑分隔符、保留非 ASCII 字符，支持 datetime/Decimal/UUID
DEFAULT_SERIALIZER = JsonSerializer()


def dumps_line(line: Any, serializer: JsonSerializer | None = None) -> str:
    """把单个元素序列化为一行 JSON.

    Args:
        line: 头部或文档对象
        serializer: 序列化器，默认使用 elasticsearch 的 JsonSerializer

    Returns:
        不含换行符的 JSON 字符串

    Raises:
        SerializationError: 元素无法序列化时抛出
    """
    serializer = serializer or DEFAULT_SERIALIZER
    try:
        data = serializer.dumps(line)
    except (TransportSerializationError, TypeError, ValueError) as e:
        raise SerializationError(f"无法序列化 NDJSON 行: {line!r}") from e
    if isinstance(data, bytes):
        data = data.decode("utf-8", "surrogatepass")
    return data


def to_ndjson(lines: Iterable[Any], serializer: JsonSerializer | None = None) -> str:
    """把元素序列渲染为 NDJSON 文本.

    Args:
        lines: 按顺序排列的头部/文档元素
        serializer: 序列化器

    Returns:
        以换行符结尾的 NDJSON 字符串
    """
    rendered = [dumps_line(line, serializer) for line in lines]
    logger.debug(f"渲染 NDJSON: {len(rendered)} 行")
    return "\n".join(rendered) + "\n"
