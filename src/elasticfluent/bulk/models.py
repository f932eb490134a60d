"""批量操作数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, TypedDict


class BulkAction(str, Enum):
    """批量操作类型枚举."""

    INDEX = "index"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# update 操作中写入文档行（而不是动作行）的键
UPDATE_BODY_KEYS = ("doc", "script", "upsert", "doc_as_upsert")


class BulkIndexMeta(TypedDict, total=False):
    """index 操作元数据."""

    _index: str
    _id: str
    routing: str
    version: int
    version_type: Literal["internal", "external", "external_gte"]


class BulkCreateMeta(TypedDict, total=False):
    """create 操作元数据."""

    _index: str
    _id: str
    routing: str


class BulkUpdateMeta(TypedDict, total=False):
    """update 操作元数据.

    doc、script、upsert、doc_as_upsert 写入文档行，其余键写入动作行。

    Attributes:
        _index: 索引名称
        _id: 文档ID
        routing: 路由
        retry_on_conflict: 版本冲突重试次数
        doc: 局部更新的文档
        doc_as_upsert: 文档不存在时是否以 doc 插入
        script: 脚本更新
        upsert: 文档不存在时插入的文档
    """

    _index: str
    _id: str
    routing: str
    retry_on_conflict: int
    doc: dict[str, Any]
    doc_as_upsert: bool
    script: dict[str, Any]
    upsert: dict[str, Any]


class BulkDeleteMeta(TypedDict, total=False):
    """delete 操作元数据."""

    _index: str
    _id: str
    routing: str
    version: int


@dataclass(frozen=True)
class BulkOperation:
    """批量操作项.

    Attributes:
        action: 操作类型
        meta: 动作行元数据
        body: 文档行，delete 操作没有文档行
    """

    action: BulkAction
    meta: dict[str, Any]
    body: dict[str, Any] | None = None

    @property
    def has_body(self) -> bool:
        return self.action is not BulkAction.DELETE

    def header(self) -> dict[str, Any]:
        """动作行，如 {"index": {"_id": "1"}}."""
        return {self.action.value: self.meta}

    def lines(self) -> list[Any]:
        """按 NDJSON 顺序返回该操作的行（delete 只有动作行）."""
        if not self.has_body:
            return [self.header()]
        return [self.header(), self.body]

    @classmethod
    def for_update(cls, meta: BulkUpdateMeta) -> BulkOperation:
        """从单个元数据对象拆分出 update 的动作行与文档行.

        Args:
            meta: update 元数据

        Returns:
            BulkOperation，文档行只包含不为 None 的 doc/script/upsert/doc_as_upsert
        """
        header = {k: v for k, v in meta.items() if k not in UPDATE_BODY_KEYS}
        body = {k: meta[k] for k in UPDATE_BODY_KEYS if meta.get(k) is not None}
        return cls(action=BulkAction.UPDATE, meta=header, body=body)
