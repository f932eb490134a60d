"""持久化状态容器模块.

所有构建器共享的不可变状态模型：每个操作都基于旧状态和一个增量生成新状态，
旧状态永远不会被修改。沿修改路径逐层浅拷贝，未修改的子树在新旧状态之间共享。

示例:
    >>> base = {"size": 10}
    >>> evolve(base, {"from": 0})
    {'size': 10, 'from': 0}
    >>> base
    {'size': 10}
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence
from typing import Any


def evolve(state: dict[str, Any], delta: dict[str, Any]) -> dict[str, Any]:
    """浅合并增量，返回新状态.

    Args:
        state: 旧状态
        delta: 增量，同名键覆盖旧值

    Returns:
        新状态字典
    """
    return {**state, **delta}


def without(state: dict[str, Any], *keys: str) -> dict[str, Any]:
    """返回去掉指定键的新状态."""
    return {k: v for k, v in state.items() if k not in keys}


def append(state: dict[str, Any], key: str, item: Any) -> dict[str, Any]:
    """向 state[key] 列表追加一项，返回新状态.

    键不存在时视为空列表。追加的项原样保留（包括 None）。
    """
    existing = state.get(key) or []
    return {**state, key: [*existing, item]}


def get_in(state: dict[str, Any], path: Sequence[str], default: Any = None) -> Any:
    """按路径读取嵌套值，任意一层缺失或不是字典时返回 default."""
    node: Any = state
    for key in path:
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def update_in(
    state: dict[str, Any],
    path: Sequence[str],
    fn: Callable[[Any], Any],
) -> dict[str, Any]:
    """沿路径复制并用 fn 替换叶子值，返回新状态.

    路径上缺失或不是字典的中间节点按空字典处理。

    Args:
        state: 旧状态
        path: 键路径，至少包含一个键
        fn: 接收旧叶子值（缺失时为 None），返回新叶子值

    Returns:
        新状态字典
    """
    key, rest = path[0], path[1:]
    if not rest:
        return {**state, key: fn(state.get(key))}
    child = state.get(key)
    if not isinstance(child, dict):
        child = {}
    return {**state, key: update_in(child, rest, fn)}


def assoc_in(state: dict[str, Any], path: Sequence[str], value: Any) -> dict[str, Any]:
    """沿路径复制并设置叶子值，返回新状态."""
    return update_in(state, path, lambda _: value)


def snapshot(state: Any) -> Any:
    """导出状态的独立副本.

    build() 的返回值由调用方持有，调用方修改它不能影响构建器内部共享的子树。
    """
    return copy.deepcopy(state)
