from collections import deque

import pytest

from algorithms.bfs import bfs
from algorithms.dfs import dfs
from algorithms.frames import FrameEvent
from graph import Graph


def _hop_distances(graph, start):
    adj = graph.adjacency()
    dist = {start: 0}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for nbr, _ in adj.get(node, []):
            if nbr not in dist:
                dist[nbr] = dist[node] + 1
                queue.append(nbr)
    return dist


SEEDS = range(15)


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("tracer", [bfs, dfs])
def test_visits_exactly_the_reachable_set(seed, tracer):
    graph = Graph.generate_random_connected(node_count=7, edge_density=0.25, seed=seed)
    for start in graph.node_ids():
        last = list(tracer(graph, start))[-1]
        assert set(last.visited_nodes) == graph.reachable_from(start)
        assert len(last.visited_nodes) == len(set(last.visited_nodes))


@pytest.mark.parametrize("seed", SEEDS)
def test_bfs_visits_in_hop_order(seed):
    graph = Graph.generate_random_connected(node_count=8, edge_density=0.3, seed=seed)
    dist = _hop_distances(graph, 0)
    order = list(list(bfs(graph, 0))[-1].visited_nodes)
    levels = [dist[n] for n in order]
    assert levels == sorted(levels)


def test_bfs_frames(diamond_graph):
    frames = list(bfs(diamond_graph, 0))
    assert frames[0].event is FrameEvent.START
    assert frames[1].event is FrameEvent.ENQUEUE and frames[1].queue == (0,)
    last = frames[-1]
    assert last.event is FrameEvent.CONCLUDE
    assert last.current_node is None
    assert last.queue == ()
    assert list(last.visited_nodes) == [0, 1, 2, 3]
    assert last.stack is None and last.distances is None


def test_bfs_never_enqueues_a_node_twice(diamond_graph):
    # 1 and 3 are both reachable along two routes
    frames = list(bfs(diamond_graph, 0))
    for frame in frames:
        assert len(frame.queue) == len(set(frame.queue))
    enqueues = [f for f in frames if f.event is FrameEvent.ENQUEUE]
    assert len(enqueues) == 4
    assert any("already been enqueued" in f.description for f in frames)


def test_dfs_allows_duplicate_pushes_and_skips_on_pop():
    g = Graph()
    for i in range(3):
        g.create_node(i)
    g.create_edge(0, 1)
    g.create_edge(0, 2)
    g.create_edge(1, 2)

    frames = list(dfs(g, 0))
    pushed = [f.stack[-1] for f in frames if f.event is FrameEvent.PUSH]
    assert pushed == [0, 2, 1, 2]
    assert any(f.event is FrameEvent.SKIP and "skipping" in f.description for f in frames)
    assert list(frames[-1].visited_nodes) == [0, 1, 2]


def test_dfs_pops_in_forward_adjacency_order(diamond_graph):
    frames = list(dfs(diamond_graph, 0))
    # adjacency of 0 is [1, 2]; reversed push means 1 is popped first
    visits = [f.current_node for f in frames if f.event is FrameEvent.VISIT]
    assert visits[:2] == [0, 1]
    assert frames[-1].stack == ()
    assert frames[-1].queue is None


def test_graph_is_shared_and_untouched(diamond_graph):
    before = diamond_graph.to_dict()
    frames = list(bfs(diamond_graph, 0)) + list(dfs(diamond_graph, 0))
    assert all(f.graph is diamond_graph for f in frames)
    assert diamond_graph.to_dict() == before


def test_isolated_start_visits_only_itself(diamond_graph):
    last = list(bfs(diamond_graph, 4))[-1]
    assert last.visited_nodes == (4,)


def test_frames_do_not_alias_each_other(diamond_graph):
    frames = list(bfs(diamond_graph, 0))
    assert frames[1].visited_nodes == ()
    assert frames[-1].visited_nodes == (0, 1, 2, 3)


def test_to_dict_is_json_safe(diamond_graph):
    d = list(bfs(diamond_graph, 0))[-1].to_dict(include_graph=True)
    assert d["event"] == "conclude"
    assert d["queue"] == []
    assert "stack" not in d
    assert len(d["graph"]["nodes"]) == 5
