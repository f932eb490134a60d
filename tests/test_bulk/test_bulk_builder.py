"""批量操作构建器单元测试."""

import json
import unittest

from elasticfluent import bulk
from elasticfluent.bulk import BulkAction, BulkBuilder, BulkOperation


class TestBulkBuilder(unittest.TestCase):
    """BulkBuilder 类单元测试."""

    def test_single_index_operation(self):
        """测试单个 index 操作的 NDJSON."""
        result = bulk().index({"name": "laptop", "price": 999}, {"_id": "1"}).build()

        self.assertEqual(result, '{"index":{"_id":"1"}}\n{"name":"laptop","price":999}\n')

    def test_index_without_meta(self):
        """测试 index 元数据缺省为空对象."""
        self.assertEqual(bulk().index({"a": 1}).build_array(), [{"index": {}}, {"a": 1}])

    def test_create_with_metadata(self):
        """测试 create 操作."""
        result = bulk().create({"name": "x"}, {"_index": "products", "_id": "2"}).build_array()

        self.assertEqual(result, [{"create": {"_index": "products", "_id": "2"}}, {"name": "x"}])

    def test_update_splits_header_and_body(self):
        """测试 update 把元数据拆成动作行与文档行."""
        result = (
            bulk()
            .update(
                {
                    "_index": "products",
                    "_id": "3",
                    "routing": "r1",
                    "retry_on_conflict": 3,
                    "doc": {"price": 10},
                    "doc_as_upsert": True,
                }
            )
            .build_array()
        )

        self.assertEqual(
            result,
            [
                {
                    "update": {
                        "_index": "products",
                        "_id": "3",
                        "routing": "r1",
                        "retry_on_conflict": 3,
                    }
                },
                {"doc": {"price": 10}, "doc_as_upsert": True},
            ],
        )

    def test_update_with_script_and_upsert(self):
        """测试脚本更新与 upsert."""
        script = {"source": "ctx._source.count += params.n", "params": {"n": 1}}
        result = (
            bulk()
            .update({"_id": "4", "script": script, "upsert": {"count": 1}})
            .build_array()
        )

        self.assertEqual(result[0], {"update": {"_id": "4"}})
        self.assertEqual(result[1], {"script": script, "upsert": {"count": 1}})

    def test_update_keeps_false_doc_as_upsert(self):
        """测试 doc_as_upsert 为 False 时仍输出."""
        result = bulk().update({"_id": "5", "doc": {}, "doc_as_upsert": False}).build_array()

        self.assertEqual(result[1], {"doc": {}, "doc_as_upsert": False})

    def test_delete_has_no_body(self):
        """测试 delete 只有动作行."""
        result = bulk().delete({"_index": "products", "_id": "6"})

        self.assertEqual(result.build_array(), [{"delete": {"_index": "products", "_id": "6"}}])
        self.assertEqual(result.build(), '{"delete":{"_index":"products","_id":"6"}}\n')

    def test_mixed_operations_line_count(self):
        """测试混合操作的行数：delete 一行，其余两行."""
        builder = (
            bulk()
            .index({"id": "1"}, {"_id": "1"})
            .create({"id": "2"}, {"_id": "2"})
            .update({"_id": "3", "doc": {"name": "Updated"}})
            .delete({"_id": "4"})
        )
        lines = builder.build().split("\n")

        self.assertEqual(lines[-1], "")
        self.assertEqual(len([line for line in lines if line]), 7)
        self.assertEqual(len(builder.build_array()), 7)
        self.assertEqual([json.loads(line) for line in lines if line], builder.build_array())

    def test_empty_bulk(self):
        """测试空批量操作."""
        self.assertEqual(bulk().build(), "\n")
        self.assertEqual(bulk().build_array(), [])

    def test_immutability(self):
        """测试追加操作不修改原构建器."""
        base = BulkBuilder().index({"a": 1}, {"_id": "1"})
        first = base.delete({"_id": "2"})
        second = base.index({"b": 2}, {"_id": "3"})

        self.assertEqual(len(base.operations), 1)
        self.assertEqual(first.operations[-1].action, BulkAction.DELETE)
        self.assertEqual(second.operations[-1].action, BulkAction.INDEX)

    def test_operation_lines(self):
        """测试 BulkOperation 的行输出."""
        op = BulkOperation(BulkAction.DELETE, {"_id": "1"})

        self.assertFalse(op.has_body)
        self.assertEqual(op.lines(), [{"delete": {"_id": "1"}}])
