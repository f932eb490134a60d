"""批量操作请求体构建器."""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch.serializer import JsonSerializer

from elasticfluent.bulk.models import (
    BulkAction,
    BulkCreateMeta,
    BulkDeleteMeta,
    BulkIndexMeta,
    BulkOperation,
    BulkUpdateMeta,
)
from elasticfluent.core.ndjson import to_ndjson
from elasticfluent.core.state import snapshot
from elasticfluent.typing import NdjsonLines

logger = logging.getLogger(__name__)


class BulkBuilder:
    """批量操作构建器.

    按调用顺序累积 index / create / update / delete 操作，输出 ``_bulk`` 接口
    需要的 NDJSON 文本或对象数组。每次追加都返回新的构建器。

    Args:
        operations: 已累积的操作
        serializer: NDJSON 行序列化器，默认使用 elasticsearch 的 JsonSerializer

    Example:
        >>> body = (
        ...     BulkBuilder()
        ...     .index({"name": "Alice"}, {"_index": "users", "_id": "1"})
        ...     .update({"_index": "users", "_id": "2", "doc": {"name": "Bob"}})
        ...     .delete({"_index": "users", "_id": "3"})
        ...     .build()
        ... )
    """

    def __init__(
        self,
        operations: tuple[BulkOperation, ...] = (),
        serializer: JsonSerializer | None = None,
    ):
        self._operations = tuple(operations)
        self._serializer = serializer

    def _append(self, operation: BulkOperation) -> BulkBuilder:
        return BulkBuilder(self._operations + (operation,), self._serializer)

    @property
    def operations(self) -> tuple[BulkOperation, ...]:
        return self._operations

    def index(self, doc: dict[str, Any], meta: BulkIndexMeta | None = None) -> BulkBuilder:
        """索引文档（存在则替换）."""
        return self._append(BulkOperation(BulkAction.INDEX, dict(meta or {}), doc))

    def create(self, doc: dict[str, Any], meta: BulkCreateMeta | None = None) -> BulkBuilder:
        """创建文档（已存在时失败）."""
        return self._append(BulkOperation(BulkAction.CREATE, dict(meta or {}), doc))

    def update(self, meta: BulkUpdateMeta) -> BulkBuilder:
        """更新文档，一个调用产生动作行与文档行两行."""
        return self._append(BulkOperation.for_update(meta))

    def delete(self, meta: BulkDeleteMeta) -> BulkBuilder:
        """删除文档，只有动作行."""
        return self._append(BulkOperation(BulkAction.DELETE, dict(meta)))

    def build_array(self) -> NdjsonLines:
        """输出对象数组: [动作1, 文档1, 动作2, 文档2, ...]."""
        return snapshot([line for op in self._operations for line in op.lines()])

    def build(self) -> str:
        """输出 NDJSON 文本，以换行符结尾."""
        logger.debug(f"构建 bulk 请求体: {len(self._operations)} 个操作")
        return to_ndjson(self.build_array(), self._serializer)
