from __future__ import annotations

import pytest

from mock_datasource.config.models import Branch, GeneratorParams, Leaf
from mock_datasource.generation.tuples import filter_tuples, make_tuples, resolve_tuple
from mock_datasource.utils.errors import Err, MockDataError

PREFIX = ("web", "metrics", "views")


def _two_level_tree() -> Branch:
    return Branch(
        {
            "us": Branch({"mobile": Leaf(GeneratorParams(1, 0)), "desktop": Leaf(GeneratorParams(2, 0))}),
            "eu": Branch({"mobile": Leaf(GeneratorParams(3, 0))}),
        }
    )


def test_make_tuples_one_path_per_combination() -> None:
    paths = make_tuples(_two_level_tree(), PREFIX, max_depth=5)

    assert sorted(paths) == [
        ("web", "metrics", "views", "eu", "mobile"),
        ("web", "metrics", "views", "us", "desktop"),
        ("web", "metrics", "views", "us", "mobile"),
    ]
    assert all(len(path) == 5 for path in paths)


def test_make_tuples_without_dimensions_returns_prefix() -> None:
    assert make_tuples(Leaf(), PREFIX, max_depth=3) == [PREFIX]


def test_make_tuples_stops_at_max_depth() -> None:
    deeper = Branch({"us": Branch({"mobile": Leaf()})})
    assert make_tuples(deeper, PREFIX, max_depth=4) == [("web", "metrics", "views", "us")]


def test_make_tuples_empty_branch_yields_nothing() -> None:
    assert make_tuples(Branch({}), PREFIX, max_depth=4) == []


def test_make_tuples_rejects_leaf_above_max_depth() -> None:
    shallow = Branch({"us": Leaf()})

    with pytest.raises(MockDataError) as exc:
        make_tuples(shallow, PREFIX, max_depth=5)
    assert exc.value.code is Err.CONFIG_MALFORMED
    assert exc.value.ctx["node"] == "web/metrics/views/us"


def test_make_tuples_handles_deep_trees_without_recursion() -> None:
    depth = 3000
    tree = Leaf(GeneratorParams(7, 0))
    for level in range(depth):
        tree = Branch({f"v{level}": tree})

    paths = make_tuples(tree, PREFIX, max_depth=len(PREFIX) + depth)
    assert len(paths) == 1
    assert resolve_tuple(tree, paths[0], len(PREFIX)) == GeneratorParams(7, 0)


def test_resolve_tuple_returns_leaf_params() -> None:
    tree = _two_level_tree()
    assert resolve_tuple(tree, PREFIX + ("us", "desktop"), len(PREFIX)) == GeneratorParams(2, 0)


def test_resolve_tuple_branch_at_depth_uses_defaults() -> None:
    tree = _two_level_tree()
    assert resolve_tuple(tree, PREFIX + ("us",), len(PREFIX)) == GeneratorParams()


def test_resolve_tuple_missing_child() -> None:
    with pytest.raises(MockDataError) as exc:
        resolve_tuple(_two_level_tree(), PREFIX + ("apac", "mobile"), len(PREFIX))
    assert exc.value.ctx["missing"] == "apac"


def test_filter_tuples_by_prefix() -> None:
    paths = [
        ("web", "metrics", "views", "us"),
        ("web", "metrics", "clicks", "us"),
        ("app", "metrics", "views", "us"),
    ]
    assert filter_tuples(paths, PREFIX) == [("web", "metrics", "views", "us")]
