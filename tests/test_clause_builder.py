"""ClauseBuilder 单元测试."""

from elasticfluent import ClauseBuilder, clause_builder


class TestClauseBuilder:
    """ClauseBuilder 测试类."""

    def test_shared_instance_is_stateless(self):
        """测试共享实例不累积状态."""
        first = clause_builder.term("a", 1)
        second = clause_builder.term("b", 2)

        assert first == {"term": {"a": 1}}
        assert second == {"term": {"b": 2}}

    def test_knn_clause(self):
        """测试 knn 子句带外层 knn 键."""
        result = ClauseBuilder().knn("embedding", (0.1, 0.2), {"k": 3, "num_candidates": 30})

        assert result == {
            "knn": {
                "field": "embedding",
                "query_vector": [0.1, 0.2],
                "k": 3,
                "num_candidates": 30,
            }
        }

    def test_script_with_boost(self):
        """测试 script 子句的 boost 与自定义 lang."""
        result = ClauseBuilder().script({"source": "return true", "lang": "expression", "boost": 3})

        assert result == {
            "script": {"script": {"source": "return true", "lang": "expression"}, "boost": 3}
        }

    def test_when_truthy(self):
        """测试 when 条件为真."""
        c = ClauseBuilder()

        assert c.when(1, lambda c2: c2.term("a", 1)) == {"term": {"a": 1}}

    def test_when_falsy(self):
        """测试 when 条件为假."""
        c = ClauseBuilder()

        assert c.when(0, lambda c2: c2.term("a", 1)) is None
        assert c.when(None, lambda c2: c2.term("a", 1), lambda c2: c2.match_all()) == {
            "match_all": {}
        }

    def test_when_fresh_builder(self):
        """测试 when 回调接收新的子句构建器."""
        received = []
        clause_builder.when(True, lambda c2: received.append(c2))

        assert isinstance(received[0], ClauseBuilder)
        assert received[0] is not clause_builder

    def test_single_string_values_are_not_split(self):
        """测试单个字符串参数原样写入，序列参数转换为列表."""
        assert clause_builder.terms("tags", "abc") == {"terms": {"tags": "abc"}}
        assert clause_builder.terms("tags", ("a", "b")) == {"terms": {"tags": ["a", "b"]}}
        assert clause_builder.ids("doc-1") == {"ids": {"values": "doc-1"}}
        assert clause_builder.multi_match("name", "x") == {
            "multi_match": {"fields": "name", "query": "x"}
        }
