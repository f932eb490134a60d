"""建议器构建器模块.

与聚合构建器结构平行的扁平映射，按建议名称索引，不支持嵌套。
"""

from __future__ import annotations

from typing import Any

from elasticfluent.core.options import (
    CompletionSuggesterOptions,
    PhraseSuggesterOptions,
    TermSuggesterOptions,
)
from elasticfluent.core.state import evolve, snapshot
from elasticfluent.typing import SuggesterMap


class SuggesterBuilder:
    """
    建议器构建器.

    使用示例:
        suggestions = (
            SuggesterBuilder()
            .term("spelling", "laptpo", {"field": "name", "size": 5})
            .completion("autocomplete", "lap", {"field": "suggest_field"})
            .build()
        )
        # {"suggest": {"spelling": {...}, "autocomplete": {...}}}
    """

    def __init__(self, state: SuggesterMap | None = None):
        self._state: SuggesterMap = state or {}

    def _put(self, name: str, entry: dict[str, Any]) -> SuggesterBuilder:
        # 同名建议以最后一次为准
        return SuggesterBuilder(evolve(self._state, {name: entry}))

    def term(self, name: str, text: str, options: TermSuggesterOptions) -> SuggesterBuilder:
        """词项建议（拼写纠错）."""
        return self._put(name, {"text": text, "term": options})

    def phrase(
        self, name: str, text: str, options: PhraseSuggesterOptions
    ) -> SuggesterBuilder:
        """短语建议."""
        return self._put(name, {"text": text, "phrase": options})

    def completion(
        self, name: str, prefix: str, options: CompletionSuggesterOptions
    ) -> SuggesterBuilder:
        """自动补全建议，使用 prefix 而不是 text."""
        return self._put(name, {"prefix": prefix, "completion": options})

    def to_map(self) -> SuggesterMap:
        return self._state

    def build(self) -> dict[str, SuggesterMap]:
        return {"suggest": snapshot(self._state)}
