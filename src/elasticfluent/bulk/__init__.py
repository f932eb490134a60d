"""批量操作模块.

构建 Elasticsearch ``_bulk`` 接口的请求体：
- index / create: 动作行 + 文档行
- update: 从一个元数据对象拆出动作行与文档行
- delete: 只有动作行

示例用法:
    >>> from elasticfluent.bulk import BulkBuilder
    >>> BulkBuilder().index({"name": "Alice"}, {"_id": "1"}).build()
    '{"index":{"_id":"1"}}\\n{"name":"Alice"}\\n'
"""

from .builder import BulkBuilder
from .models import (
    BulkAction,
    BulkCreateMeta,
    BulkDeleteMeta,
    BulkIndexMeta,
    BulkOperation,
    BulkUpdateMeta,
)

__all__ = [
    "BulkAction",
    "BulkBuilder",
    "BulkCreateMeta",
    "BulkDeleteMeta",
    "BulkIndexMeta",
    "BulkOperation",
    "BulkUpdateMeta",
]
