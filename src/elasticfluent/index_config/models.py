"""索引配置数据模型定义模块."""

from typing import Any, TypedDict


class IndexSettings(TypedDict, total=False):
    """索引设置类型定义.

    Attributes:
        number_of_shards: 主分片数量
        number_of_replicas: 副本分片数量
        refresh_interval: 刷新间隔
        max_result_window: 最大结果窗口大小
        analysis: 分析器配置
        lifecycle: ILM 生命周期设置
        codec: 编解码器
        mapping: 映射相关设置（如 total_fields.limit）
    """

    number_of_shards: int
    number_of_replicas: int
    refresh_interval: str
    max_result_window: int
    analysis: dict[str, Any]
    lifecycle: dict[str, Any]
    codec: str
    mapping: dict[str, Any]


class DenseVectorIndexOptions(TypedDict, total=False):
    """dense_vector 索引算法参数."""

    type: str  # hnsw, int8_hnsw, flat, int8_flat
    m: int
    ef_construction: int


class MappingProperty(TypedDict, total=False):
    """映射属性类型定义.

    Attributes:
        type: 字段类型（keyword, text, date, nested, dense_vector 等）
        fields: 多字段定义
        properties: object / nested 的子字段
        analyzer: 分析器
        search_analyzer: 搜索分析器
        dims: 向量维度（dense_vector）
        similarity: 相似度（dense_vector）
        index_options: 索引算法参数（dense_vector）
        scaling_factor: 缩放因子（scaled_float）
    """

    type: str
    fields: dict[str, "MappingProperty"]
    properties: dict[str, "MappingProperty"]
    analyzer: str
    search_analyzer: str
    boost: float
    index: bool
    store: bool
    doc_values: bool
    dims: int
    similarity: str
    index_options: DenseVectorIndexOptions
    scaling_factor: float


class IndexMappings(TypedDict, total=False):
    """索引映射类型定义.

    Attributes:
        properties: 字段属性映射
        dynamic: 动态映射策略（True、False、"strict"、"runtime"）
        dynamic_templates: 动态模板
    """

    properties: dict[str, MappingProperty]
    dynamic: str | bool
    dynamic_templates: list[dict[str, Any]]


class AliasOptions(TypedDict, total=False):
    """别名选项."""

    filter: dict[str, Any]
    routing: str
    is_write_index: bool


class CreateIndexOptions(TypedDict, total=False):
    """创建索引请求体."""

    mappings: IndexMappings
    settings: IndexSettings
    aliases: dict[str, AliasOptions]
