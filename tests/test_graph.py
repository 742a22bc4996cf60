import pytest

from supertd.graph import GraphSize, TargetNode, TargetsSize, requires_sudo_recursively


def mk_label(name):
    return f"none//:{name}"


def build(graph):
    return [TargetNode(mk_label(name), [mk_label(d) for d in deps]) for name, deps in graph]


def test_graph_size():
    graph = [
        ("a", ["b", "c"]),
        ("b", ["d"]),
        ("c", ["d", "e"]),
        ("d", ["f"]),
        ("f", ["g"]),
    ]
    size = TargetsSize(build(graph))
    assert size.get(mk_label("g")) == 1
    assert size.get(mk_label("f")) == 2
    assert size.get(mk_label("e")) == 1
    assert size.get(mk_label("d")) == 3
    assert size.get(mk_label("c")) == 5
    assert size.get(mk_label("b")) == 4
    assert size.get(mk_label("a")) == 7


def test_graph_size_cycle():
    graph = [("a", ["b", "c"]), ("b", ["a"])]
    size = TargetsSize(build(graph))
    assert size.get(mk_label("a")) == 3
    assert size.get(mk_label("b")) == 3
    assert size.get(mk_label("c")) == 1


def test_graph_size_before_and_after():
    base = build([("a", ["b"])])
    diff = build([("a", ["b", "c"]), ("c", ["d"])])
    graph = GraphSize(base, diff)
    assert graph.sizes(mk_label("a")) == (2, 4)
    assert graph.sizes(mk_label("b")) == (1, 1)


def test_target_node_name_and_normalisation():
    node = TargetNode("foo//bar:baz", ["foo//:x"], ["l1", "l1"])
    assert node.name == "baz"
    assert node.deps == ("foo//:x",)
    assert node.labels == frozenset({"l1"})


def sudo_target(name, deps, uses_sudo):
    return TargetNode(
        f"foo//:{name}",
        [f"foo//:{d}" for d in deps],
        ["uses_sudo"] if uses_sudo else [],
    )


def test_requires_sudo_recursively():
    targets = [
        sudo_target("1", [], True),
        sudo_target("1a", ["1"], False),
        sudo_target("1b", ["1a"], False),
        sudo_target("2", [], False),
        sudo_target("2a", ["2"], True),
        sudo_target("2b", ["2a"], False),
        sudo_target("3", [], False),
        sudo_target("3a", ["3"], False),
        sudo_target("3b", ["3a"], True),
        sudo_target("4", [], False),
        sudo_target("4a", ["4"], False),
        sudo_target("4b", ["4a"], False),
        sudo_target("5", [], False),
        sudo_target("5a", ["5"], False),
        sudo_target("5b", [], True),
        sudo_target("5c", ["5a", "5b"], False),
        sudo_target("6", [], True),
        sudo_target("6a", ["6"], True),
        sudo_target("6b", ["6a"], False),
    ]
    by_label = {t.label: t for t in targets}
    result = sorted(by_label[x].name for x in requires_sudo_recursively(targets))
    assert result == ["1", "1a", "1b", "2a", "2b", "3b", "5b", "5c", "6", "6a", "6b"]


@pytest.mark.parametrize("targets", [[], [sudo_target("x", [], False)]])
def test_requires_sudo_none(targets):
    assert requires_sudo_recursively(targets) == set()