"""多重搜索模块.

构建 Elasticsearch ``_msearch`` 接口的请求体，头部行与请求体行交替出现。
"""

from .builder import MSearchBuilder
from .models import MSearchHeader, MSearchRequest

__all__ = [
    "MSearchBuilder",
    "MSearchHeader",
    "MSearchRequest",
]
