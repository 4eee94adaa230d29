"""Dependency Graph tests — cycle guard, depth and balance, pure inputs where possible.

Tests cover:
    - Reachability and the cycle guard (including self-links)
    - link_components idempotence and no-mutation on rejection
    - Max depth: leaves, chains, diamonds, external deps, corrupted cycles
    - Balance score: single component, chain, star, clamping
    - Aggregate metrics for empty and populated problems
"""

import itertools
import random

import pytest

from decomposition_engine.core.dependency_graph import (
    build_dependency_graph,
    calculate_balance_score,
    calculate_in_degrees,
    calculate_max_depth,
    calculate_metrics,
    can_reach,
    check_dependency_set,
    link_components,
    would_create_cycle,
)
from decomposition_engine.core.entities import Component, DecompositionMetrics, Problem
from decomposition_engine.core.errors import CycleDetectedError, ResourceNotFoundError


def _problem(store, problem_id="p1"):
    return store.create_problem(Problem(problem_id=problem_id, problem_statement="P"))


def _component(store, component_id, deps=(), problem_id="p1", complexity=5):
    return store.create_component(Component(
        component_id=component_id, parent_problem_id=problem_id,
        name=component_id.upper(), description=f"{component_id} desc",
        dependencies=list(deps), complexity=complexity,
    ))


# --- Reachability -------------------------------------------------------------

def test_can_reach_follows_transitive_edges():
    graph = {"a": ["b"], "b": ["c"], "c": []}
    assert can_reach(graph, "a", "c")
    assert not can_reach(graph, "c", "a")


def test_can_reach_node_reaches_itself():
    assert can_reach({"a": []}, "a", "a")


def test_can_reach_tolerates_unknown_nodes():
    assert not can_reach({"a": ["ghost"]}, "a", "b")


def test_would_create_cycle_detects_back_edge():
    graph = {"c2": ["c1"], "c1": []}
    assert would_create_cycle(graph, "c1", "c2")
    assert not would_create_cycle(graph, "c2", "c1")


def test_can_reach_handles_long_chain_without_recursion():
    n = 5_000
    graph = {f"n{i}": [f"n{i + 1}"] for i in range(n)}
    graph[f"n{n}"] = []
    assert can_reach(graph, "n0", f"n{n}")


def test_check_dependency_set_rejects_self_dependency():
    with pytest.raises(CycleDetectedError):
        check_dependency_set({"a": []}, "a", ["a"])


def test_check_dependency_set_rejects_transitive_cycle():
    graph = {"a": [], "b": ["a"], "c": ["b"]}
    with pytest.raises(CycleDetectedError):
        check_dependency_set(graph, "a", ["c"])


def test_check_dependency_set_accepts_acyclic_set():
    graph = {"a": [], "b": ["a"], "c": []}
    check_dependency_set(graph, "a", ["c"])


# --- link_components ------------------------------------------------------------

def test_link_adds_edge_and_refreshes_updated_at(store, clock):
    _problem(store)
    _component(store, "c1")
    _component(store, "c2")
    clock.tick(50)
    component = link_components(store, "c2", "c1")
    assert component.dependencies == ["c1"]
    assert component.updated_at == clock.now
    assert component.created_at < component.updated_at


def test_link_twice_is_idempotent(store, clock):
    _problem(store)
    _component(store, "c1")
    _component(store, "c2")
    link_components(store, "c2", "c1")
    stamp = store.get_component("c2").updated_at
    clock.tick(10)
    component = link_components(store, "c2", "c1")
    assert component.dependencies == ["c1"]
    assert component.updated_at == stamp


def test_link_rejects_cycle_without_mutation(store):
    _problem(store)
    _component(store, "c1")
    _component(store, "c2", deps=["c1"])
    with pytest.raises(CycleDetectedError):
        link_components(store, "c1", "c2")
    assert store.get_component("c1").dependencies == []
    assert store.get_component("c2").dependencies == ["c1"]


def test_link_rejects_self_link(store):
    _problem(store)
    _component(store, "c1")
    with pytest.raises(CycleDetectedError):
        link_components(store, "c1", "c1")
    assert store.get_component("c1").dependencies == []


def test_link_rejects_transitive_cycle(store):
    _problem(store)
    _component(store, "a")
    _component(store, "b", deps=["a"])
    _component(store, "c", deps=["b"])
    with pytest.raises(CycleDetectedError):
        link_components(store, "a", "c")


def test_link_missing_source_or_target_raises_not_found(store):
    _problem(store)
    _component(store, "c1")
    with pytest.raises(ResourceNotFoundError, match="Source component"):
        link_components(store, "ghost", "c1")
    with pytest.raises(ResourceNotFoundError, match="Target component"):
        link_components(store, "c1", "ghost")


def test_link_across_problems_is_cycle_checked(store):
    _problem(store, "p1")
    _problem(store, "p2")
    _component(store, "a", problem_id="p1")
    _component(store, "b", deps=["a"], problem_id="p2")
    with pytest.raises(CycleDetectedError):
        link_components(store, "a", "b")


def test_random_link_sequences_stay_acyclic(store):
    rng = random.Random(7)
    _problem(store)
    ids = [f"c{i}" for i in range(8)]
    for cid in ids:
        _component(store, cid)
    for _ in range(200):
        source, target = rng.choice(ids), rng.choice(ids)
        try:
            link_components(store, source, target)
        except CycleDetectedError:
            pass
    graph = store.adjacency()
    for cid in ids:
        assert not any(can_reach(graph, dep, cid) for dep in graph[cid])


# --- Max depth ------------------------------------------------------------------

def test_depth_of_leaf_is_one():
    assert calculate_max_depth({"a": []}) == 1


def test_depth_of_empty_graph_is_zero():
    assert calculate_max_depth({}) == 0


def test_depth_of_chain_counts_nodes():
    graph = {"a": ["b"], "b": ["c"], "c": []}
    assert calculate_max_depth(graph) == 3


def test_depth_of_diamond_takes_longest_branch():
    graph = {"top": ["left", "right"], "left": ["base"], "right": [], "base": []}
    assert calculate_max_depth(graph) == 3


def test_depth_treats_out_of_scope_dependency_as_leaf():
    assert calculate_max_depth({"a": ["external"]}) == 2


def test_depth_handles_deep_chain_iteratively():
    n = 3_000
    graph = {f"n{i}": [f"n{i + 1}"] for i in range(n)}
    graph[f"n{n}"] = []
    assert calculate_max_depth(graph) == n + 1


def test_depth_cycle_contributes_zero_instead_of_failing():
    graph = {"a": ["b"], "b": ["a"]}
    assert calculate_max_depth(graph) == 2


def test_depth_self_loop_counts_node_once():
    assert calculate_max_depth({"a": ["a"]}) == 1


def test_depth_strict_mode_raises_on_cycle():
    with pytest.raises(CycleDetectedError):
        calculate_max_depth({"a": ["b"], "b": ["a"]}, strict=True)


# --- Balance --------------------------------------------------------------------

def test_in_degrees_count_out_of_scope_targets():
    graph = {"a": ["b", "external"], "b": []}
    assert calculate_in_degrees(["a", "b"], graph) == {"a": 0, "b": 1, "external": 1}


def test_balance_includes_out_of_scope_target_entries():
    # in-degrees {a: 0, b: 0, x: 1}: sigma sqrt(2/9), normalized by (2 - 1)
    score = calculate_balance_score(["a", "b"], {"a": ["x"], "b": []})
    assert score == pytest.approx(10 * (1 - (2 / 9) ** 0.5))
    assert score == pytest.approx(5.286, abs=1e-3)


def test_balance_single_component_is_perfect():
    assert calculate_balance_score(["a"], {"a": []}) == 10


def test_balance_empty_is_perfect():
    assert calculate_balance_score([], {}) == 10


def test_balance_two_node_chain_is_five():
    # in-degrees {1, 0}: sigma 0.5, normalized by (2 - 1)
    score = calculate_balance_score(["a", "b"], {"a": ["b"], "b": []})
    assert score == pytest.approx(5.0)


def test_balance_no_edges_is_perfect():
    graph = {"a": [], "b": [], "c": []}
    assert calculate_balance_score(list(graph), graph) == 10


def test_balance_star_scores_lower_than_chain():
    star = {"hub": [], "a": ["hub"], "b": ["hub"], "c": ["hub"]}
    chain = {"hub": [], "a": ["hub"], "b": ["a"], "c": ["b"]}
    assert calculate_balance_score(list(star), star) < calculate_balance_score(
        list(chain), chain,
    )


def test_balance_always_within_bounds():
    ids = [f"n{i}" for i in range(5)]
    for edges in itertools.combinations(itertools.permutations(ids, 2), 4):
        graph = {cid: [] for cid in ids}
        for source, target in edges:
            graph[source].append(target)
        assert 1 <= calculate_balance_score(ids, graph) <= 10


# --- Aggregate metrics ------------------------------------------------------------

def test_metrics_for_problem_without_components(store):
    _problem(store)
    assert calculate_metrics(store, "p1") == DecompositionMetrics(
        component_count=0, average_complexity=0, max_depth=0,
        dependency_count=0, balance_score=10,
    )


def test_metrics_two_component_chain(store):
    _problem(store)
    _component(store, "c1", complexity=2)
    _component(store, "c2", deps=["c1"], complexity=6)
    metrics = calculate_metrics(store, "p1")
    assert metrics.component_count == 2
    assert metrics.average_complexity == 4
    assert metrics.max_depth == 2
    assert metrics.dependency_count == 1
    assert metrics.balance_score == pytest.approx(5.0)


def test_metrics_scoped_to_problem(store):
    _problem(store, "p1")
    _problem(store, "p2")
    _component(store, "a", problem_id="p1")
    _component(store, "b", deps=["a"], problem_id="p2")
    _component(store, "c", deps=["b"], problem_id="p2")
    p1 = calculate_metrics(store, "p1")
    p2 = calculate_metrics(store, "p2")
    assert p1.component_count == 1
    assert p1.max_depth == 1
    assert p2.component_count == 2
    assert p2.dependency_count == 2
    # b's dependency on a lies outside p2: a counts as a leaf
    assert p2.max_depth == 3
    # in-degrees {b: 1, c: 0, a: 1}: a sits in p1 but still joins the statistics
    assert p2.balance_score == pytest.approx(10 * (1 - (2 / 9) ** 0.5))


def test_build_dependency_graph_copies_edges(store):
    _problem(store)
    c1 = _component(store, "c1")
    graph = build_dependency_graph([c1])
    graph["c1"].append("x")
    assert c1.dependencies == []


def test_metrics_cross_problem_dependency_lowers_balance(store):
    _problem(store, "p1")
    _problem(store, "p2")
    _component(store, "x", problem_id="p2")
    _component(store, "a", deps=["x"], problem_id="p1")
    _component(store, "b", problem_id="p1")
    metrics = calculate_metrics(store, "p1")
    assert metrics.component_count == 2
    assert metrics.dependency_count == 1
    assert metrics.balance_score == pytest.approx(5.286, abs=1e-3)
