"""Expansion of nested metric trees into flat leaf paths."""

from __future__ import annotations

from typing import Iterable, Sequence

from mock_datasource.config.models import Branch, ConfigTree, GeneratorParams, Leaf, LeafPath
from mock_datasource.utils.errors import Err, MockDataError


def make_tuples(tree: ConfigTree, prefix: Sequence[str], max_depth: int) -> list[LeafPath]:
    """Return one path of length ``max_depth`` per leaf below ``tree``.

    Nodes are assumed to end exactly at ``max_depth``; anything nested deeper
    is not explored. Output follows stack order and is not sorted.
    """

    paths: list[LeafPath] = []
    stack: list[tuple[LeafPath, ConfigTree]] = [(tuple(prefix), tree)]

    while stack:
        path, node = stack.pop()
        if len(path) >= max_depth:
            paths.append(path)
            continue

        if not isinstance(node, Branch):
            raise MockDataError(
                Err.CONFIG_MALFORMED,
                ctx={
                    "node": "/".join(path),
                    "depth": len(path),
                    "max_depth": max_depth,
                    "error": "expected dimension branch",
                },
            )
        for value, child in node.children.items():
            stack.append((path + (value,), child))

    return paths


def resolve_tuple(tree: ConfigTree, path: LeafPath, offset: int) -> GeneratorParams:
    """Walk ``path[offset:]`` down ``tree`` and return the leaf parameters."""

    node = tree
    for value in path[offset:]:
        if not isinstance(node, Branch) or value not in node.children:
            raise MockDataError(
                Err.CONFIG_MALFORMED,
                ctx={"node": "/".join(path), "missing": value},
            )
        node = node.children[value]

    if isinstance(node, Leaf):
        return node.params
    return GeneratorParams()


def filter_tuples(paths: Iterable[LeafPath], prefix: Sequence[str]) -> list[LeafPath]:
    head = tuple(prefix)
    return [path for path in paths if path[: len(head)] == head]
