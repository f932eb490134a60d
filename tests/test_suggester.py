"""SuggesterBuilder 单元测试."""

from elasticfluent import query, suggest


class TestSuggesterBuilder:
    """建议器测试类."""

    def test_term_suggester(self):
        """测试 term 建议器."""
        result = suggest().term("name-suggestions", "laptpo", {"field": "name", "size": 5}).build()

        assert result == {
            "suggest": {
                "name-suggestions": {"text": "laptpo", "term": {"field": "name", "size": 5}}
            }
        }

    def test_phrase_suggester(self):
        """测试 phrase 建议器."""
        options = {
            "field": "description",
            "confidence": 1.5,
            "highlight": {"pre_tag": "<em>", "post_tag": "</em>"},
        }
        result = suggest().phrase("fix", "gamng laptp", options).build()

        assert result == {"suggest": {"fix": {"text": "gamng laptp", "phrase": options}}}

    def test_completion_suggester_uses_prefix(self):
        """测试 completion 建议器使用 prefix."""
        result = (
            suggest()
            .completion("auto", "lap", {"field": "suggest_field", "skip_duplicates": True})
            .build()
        )

        assert result == {
            "suggest": {
                "auto": {
                    "prefix": "lap",
                    "completion": {"field": "suggest_field", "skip_duplicates": True},
                }
            }
        }

    def test_multiple_and_collision(self):
        """测试多个建议器与同名覆盖."""
        result = (
            suggest()
            .term("a", "x", {"field": "name"})
            .phrase("b", "y", {"field": "name"})
            .term("a", "z", {"field": "title"})
            .build()
        )

        assert list(result["suggest"]) == ["a", "b"]
        assert result["suggest"]["a"] == {"text": "z", "term": {"field": "title"}}

    def test_suggest_in_query(self):
        """测试在查询中添加建议器."""
        result = (
            query()
            .match("name", "laptop")
            .suggest(lambda s: s.completion("auto", "lap", {"field": "suggest_field"}))
            .size(5)
            .build()
        )

        assert result == {
            "query": {"match": {"name": "laptop"}},
            "suggest": {"auto": {"prefix": "lap", "completion": {"field": "suggest_field"}}},
            "size": 5,
        }
