"""Bool 组合单元测试."""

import logging

from elasticsearch.dsl import Q

from elasticfluent import BoolBuilder, query


class TestBoolComposition:
    """根查询 bool 组合测试类."""

    def test_bool_resets_query(self):
        """测试 bool() 以空 bool 替换根查询."""
        assert query().match("name", "x").bool().build() == {"query": {"bool": {}}}

    def test_must_preserves_insertion_order(self):
        """测试子句按插入顺序排列."""
        result = (
            query()
            .bool()
            .must(lambda c: c.match("title", "test title"))
            .must(lambda c: c.match("price", 42))
            .build()
        )

        assert result["query"]["bool"]["must"] == [
            {"match": {"title": "test title"}},
            {"match": {"price": 42}},
        ]

    def test_all_occurrences(self):
        """测试四种子句可以任意顺序混用."""
        result = (
            query()
            .bool()
            .filter(lambda c: c.term("category", "electronics"))
            .must(lambda c: c.match("name", "gaming laptop", {"operator": "and", "boost": 2}))
            .should(lambda c: c.fuzzy("description", "gaming laptop", {"fuzziness": "AUTO"}))
            .must_not(lambda c: c.term("status", "discontinued"))
            .filter(lambda c: c.range("price", {"gte": 800, "lte": 2000}))
            .minimum_should_match(0)
            .build()
        )

        assert result == {
            "query": {
                "bool": {
                    "filter": [
                        {"term": {"category": "electronics"}},
                        {"range": {"price": {"gte": 800, "lte": 2000}}},
                    ],
                    "must": [
                        {
                            "match": {
                                "name": {"query": "gaming laptop", "operator": "and", "boost": 2}
                            }
                        }
                    ],
                    "should": [
                        {"fuzzy": {"description": {"value": "gaming laptop", "fuzziness": "AUTO"}}}
                    ],
                    "must_not": [{"term": {"status": "discontinued"}}],
                    "minimum_should_match": 0,
                }
            }
        }

    def test_minimum_should_match_last_call_wins(self):
        """测试 minimum_should_match 以最后一次为准，且不影响子句."""
        result = (
            query()
            .bool()
            .minimum_should_match(2)
            .should(lambda c: c.term("a", 1))
            .minimum_should_match("50%")
            .build()
        )

        assert result["query"]["bool"] == {
            "minimum_should_match": "50%",
            "should": [{"term": {"a": 1}}],
        }

    def test_clause_without_bool_enters_bool(self):
        """测试非 bool 根查询上调用子句方法时以空 bool 开始."""
        result = query().match("name", "x").filter(lambda c: c.term("a", 1)).build()

        assert result == {"query": {"bool": {"filter": [{"term": {"a": 1}}]}}}

    def test_meta_after_bool(self):
        """测试 bool 子句之后可以继续设置请求参数."""
        result = (
            query()
            .bool()
            .must(lambda c: c.match("name", "laptop"))
            .timeout("5s")
            .from_(0)
            .size(20)
            .sort("price", "asc")
            .build()
        )

        assert result["timeout"] == "5s"
        assert result["sort"] == [{"price": "asc"}]
        assert result["query"]["bool"]["must"] == [{"match": {"name": "laptop"}}]


class TestConditionalClauses:
    """条件子句测试类."""

    def test_dynamic_filters_with_fallback(self):
        """测试 when 配合默认片段构建动态过滤."""
        search_term = "laptop"
        category = "electronics"
        min_price = None
        max_price = None
        tags = ["gaming", "portable"]

        result = (
            query()
            .bool()
            .must(
                lambda c: c.when(
                    search_term,
                    lambda c2: c2.match("name", search_term, {"operator": "and", "boost": 2}),
                )
                or c.match_all()
            )
            .filter(
                lambda c: c.when(category, lambda c2: c2.term("category", category))
                or c.match_all()
            )
            .filter(
                lambda c: c.when(
                    min_price and max_price,
                    lambda c2: c2.range("price", {"gte": min_price, "lte": max_price}),
                )
                or c.match_all()
            )
            .filter(
                lambda c: c.when(tags and len(tags) > 0, lambda c2: c2.terms("tags", tags))
                or c.match_all()
            )
            .build()
        )

        assert result == {
            "query": {
                "bool": {
                    "must": [
                        {"match": {"name": {"query": "laptop", "operator": "and", "boost": 2}}}
                    ],
                    "filter": [
                        {"term": {"category": "electronics"}},
                        {"match_all": {}},
                        {"terms": {"tags": ["gaming", "portable"]}},
                    ],
                }
            }
        }

    def test_none_clause_passes_through(self, caplog):
        """测试没有默认片段时 None 原样写入子句数组."""
        title = None

        with caplog.at_level(logging.WARNING, logger="elasticfluent"):
            result = (
                query()
                .bool()
                .filter(lambda c: c.when(title, lambda c2: c2.term("title", title)))
                .build()
            )

        assert result == {"query": {"bool": {"filter": [None]}}}
        assert any("None" in record.getMessage() for record in caplog.records)


class TestNestedComposition:
    """嵌套组合测试类."""

    def test_bool_inside_bool(self):
        """测试 bool 子句中嵌套 bool."""
        result = (
            query()
            .bool()
            .must(lambda c: c.match("name", "laptop"))
            .filter(
                lambda c: c.bool(
                    lambda b: b.should(lambda c2: c2.term("brand", "acme"))
                    .should(lambda c2: c2.term("brand", "globex"))
                    .minimum_should_match(1)
                )
            )
            .build()
        )

        assert result["query"]["bool"]["filter"] == [
            {
                "bool": {
                    "should": [
                        {"term": {"brand": "acme"}},
                        {"term": {"brand": "globex"}},
                    ],
                    "minimum_should_match": 1,
                }
            }
        ]

    def test_three_levels_deep(self):
        """测试三层 bool 嵌套."""
        result = (
            BoolBuilder()
            .must(
                lambda c: c.bool(
                    lambda b: b.must_not(
                        lambda c2: c2.bool(lambda b2: b2.filter(lambda c3: c3.exists("deleted_at")))
                    )
                )
            )
            .build()
        )

        assert result == {
            "bool": {
                "must": [
                    {"bool": {"must_not": [{"bool": {"filter": [{"exists": {"field": "deleted_at"}}]}}]}}
                ]
            }
        }

    def test_callback_may_return_dsl_query(self):
        """测试回调可以返回 elasticsearch.dsl 的 Q 对象."""
        result = query().bool().filter(lambda c: Q("term", category="books")).build()

        assert result == {"query": {"bool": {"filter": [{"term": {"category": "books"}}]}}}

    def test_callback_may_return_query_builder(self):
        """测试回调可以返回 QueryBuilder，取其根查询."""
        inner = query().range("price", {"lte": 100})
        result = query().bool().must(lambda c: inner).build()

        assert result == {"query": {"bool": {"must": [{"range": {"price": {"lte": 100}}}]}}}

    def test_bool_builder_is_immutable(self):
        """测试 BoolBuilder 分支互不干扰."""
        base = BoolBuilder().must(lambda c: c.term("a", 1))
        left = base.should(lambda c: c.term("b", 2))
        right = base.must_not(lambda c: c.term("c", 3))

        assert base.build() == {"bool": {"must": [{"term": {"a": 1}}]}}
        assert "must_not" not in left.build()["bool"]
        assert "should" not in right.build()["bool"]
