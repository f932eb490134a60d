"""Bool 查询组合模块.

must / should / must_not / filter 四个转移都停留在 bool 状态内，可以任意顺序、
任意次数调用；每次调用把回调返回的单个片段按插入顺序追加到对应数组。
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from elasticfluent.builders.clause import ClauseBuilder, clause_builder
from elasticfluent.core.fragments import absorb
from elasticfluent.core.state import append, evolve, snapshot
from elasticfluent.typing import Fragment

ClauseFn = Callable[[ClauseBuilder], Any]


class BoolBuilder:
    """
    Bool 查询构建器.

    每个方法都返回新的 BoolBuilder，原对象保持不变，因此同一个前缀可以派生出
    多条互不干扰的分支。

    使用示例:
        fragment = (
            BoolBuilder()
            .must(lambda c: c.match("name", "laptop"))
            .filter(lambda c: c.term("category", "electronics"))
            .minimum_should_match(1)
            .build()
        )
        # {"bool": {"must": [...], "filter": [...], "minimum_should_match": 1}}
    """

    def __init__(self, state: dict[str, Any] | None = None):
        """
        初始化构建器.

        Args:
            state: bool 负载（不含外层 "bool" 键）
        """
        self._state: dict[str, Any] = state or {}

    def _add(self, occurrence: str, fn: ClauseFn) -> BoolBuilder:
        clause = absorb(fn(clause_builder))
        return BoolBuilder(append(self._state, occurrence, clause))

    def must(self, fn: ClauseFn) -> BoolBuilder:
        return self._add("must", fn)

    def should(self, fn: ClauseFn) -> BoolBuilder:
        return self._add("should", fn)

    def must_not(self, fn: ClauseFn) -> BoolBuilder:
        return self._add("must_not", fn)

    def filter(self, fn: ClauseFn) -> BoolBuilder:  # noqa: A003
        return self._add("filter", fn)

    def minimum_should_match(self, value: int | str) -> BoolBuilder:
        """设置 minimum_should_match，多次调用以最后一次为准."""
        return BoolBuilder(evolve(self._state, {"minimum_should_match": value}))

    def to_fragment(self) -> Fragment:
        """返回内部片段（与构建器共享结构，仅供组合使用）."""
        return {"bool": self._state}

    def build(self) -> Fragment:
        """构建 {"bool": {...}} 片段的独立副本."""
        return snapshot(self.to_fragment())
