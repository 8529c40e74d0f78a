def _run(client, **body):
    resp = client.post("/api/run", json=body)
    return resp, resp.get_json()


# ---------------------------------------------------------------------------
# Catalog routes
# ---------------------------------------------------------------------------
def test_index_lists_catalog(client):
    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Bubble Sort" in html
    assert "Red-Black Tree" in html


def test_list_algorithms(client):
    data = client.get("/api/algorithms").get_json()
    assert len(data["algorithms"]) == 13
    trees = client.get("/api/algorithms?type=tree").get_json()["algorithms"]
    assert len(trees) == 4
    assert all(entry["type"] == "tree" for entry in trees)


def test_list_algorithms_bad_type(client):
    resp = client.get("/api/algorithms?type=hashing")
    assert resp.status_code == 400
    assert "hashing" in resp.get_json()["error"]


def test_algorithm_detail(client):
    entry = client.get("/api/algorithms?type=graph").get_json()["algorithms"][0]
    data = client.get(f"/api/algorithms/{entry['id']}").get_json()
    assert data["algorithm"]["name"] == entry["name"]
    assert data["tracer"]["key"] == entry["parameters"]["key"]
    assert client.get("/api/algorithms/nope").status_code == 404


# ---------------------------------------------------------------------------
# Samples
# ---------------------------------------------------------------------------
def test_sample_array(client):
    data = client.post("/api/samples/array", json={"size": 12, "sorted": True, "seed": 4}).get_json()
    assert len(data["array"]) == 12
    assert data["array"] == sorted(data["array"])
    again = client.post("/api/samples/array", json={"size": 12, "sorted": True, "seed": 4}).get_json()
    assert again == data


def test_sample_array_too_large(client):
    resp = client.post("/api/samples/array", json={"size": 1000})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Size must be between 1 and 100"


def test_sample_graph(client):
    graph = client.post("/api/samples/graph", json={"nodes": 5, "seed": 1}).get_json()["graph"]
    assert [n["id"] for n in graph["nodes"]] == [0, 1, 2, 3, 4]
    assert len(graph["edges"]) >= 4


# ---------------------------------------------------------------------------
# Running and stepping
# ---------------------------------------------------------------------------
def test_run_and_step(client):
    resp, data = _run(client, algo_key="bubble_sort", array="5,3,8,1")
    assert resp.status_code == 200
    assert data["label"] == "Bubble Sort"
    assert data["currentStep"] == 0
    assert data["frame"]["event"] == "start"
    assert data["metrics"]["comparisons"] == 6
    total = data["totalFrames"]

    assert client.post("/api/step/prev").status_code == 400

    step = client.post("/api/step/next").get_json()
    assert step["currentStep"] == 1

    last = client.post("/api/step/goto", json={"index": total - 1}).get_json()
    assert last["state"] == "finished"
    assert last["frame"]["array"] == [1, 3, 5, 8]

    resp = client.post("/api/step/next")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Already at last step"

    resp = client.post("/api/step/goto", json={"index": total})
    assert resp.get_json()["error"] == "Invalid step index"


def test_run_rejects_bad_array(client):
    resp, data = _run(client, algo_key="bubble_sort", array="5,x")
    assert resp.status_code == 400
    assert data["error"] == "Invalid number: x"


def test_unknown_algorithm_is_404(client):
    resp, data = _run(client, algo_key="bogo_sort", array="1,2")
    assert resp.status_code == 404
    assert "bogo_sort" in data["error"]


def test_search_needs_target(client):
    resp, data = _run(client, algo_key="linear_search", array="1,2")
    assert resp.status_code == 400
    assert data["error"] == "A target value is required"


def test_stepping_without_a_run(client):
    resp = client.post("/api/step/next")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Run an algorithm first"
    assert client.get("/api/export").status_code == 400


def test_run_by_type_and_name_then_export(client):
    resp, _ = _run(client, type="search", name="Binary Search", array=[1, 3, 5, 7, 9, 11, 13], target=11)
    assert resp.status_code == 200
    export = client.get("/api/export").get_json()
    assert export["algoKey"] == "binary_search"
    assert export["frames"][-1]["foundIndex"] == 5
    assert export["metrics"]["found_index"] == 5


def test_run_tree_with_default_keys(client):
    _, data = _run(client, algo_key="avl")
    assert data["metrics"]["tree_size"] == 7
    assert data["frame"]["tree"] is None


def test_run_graph(client, diamond_graph):
    _, data = _run(client, algo_key="dijkstra", graph=diamond_graph.to_dict(), start=0, end=3)
    assert data["metrics"]["path"] == [0, 2, 1, 3]
    assert data["graph"] == diamond_graph.to_dict()


def test_run_graph_from_adjacency_text(client):
    _, data = _run(client, algo_key="bfs", graph="0: 1 2\n1: 3\n2\n3", start=0)
    assert data["metrics"]["path"] == [0, 1, 2, 3]


def test_dijkstra_rejects_negative_weights(client):
    graph = {
        "nodes": [{"id": 0}, {"id": 1}],
        "edges": [{"source": 0, "target": 1, "weight": -3}],
    }
    resp, data = _run(client, algo_key="dijkstra", graph=graph, start=0, end=1)
    assert resp.status_code == 400
    assert "non-negative" in data["error"]


def test_missing_start_node(client, diamond_graph):
    resp, data = _run(client, algo_key="bfs", graph=diamond_graph.to_dict(), start=42)
    assert resp.status_code == 400
    assert data["error"] == "Start node 42 does not exist in the graph"


def test_play_toggles(client):
    _run(client, algo_key="merge_sort", array="4,3,2,1")
    data = client.post("/api/step/play", json={"speed": "fast"}).get_json()
    assert data["isPlaying"] is True
    assert data["speed"] == 0.15
    data = client.post("/api/step/play").get_json()
    assert data["isPlaying"] is False
    assert data["state"] == "paused"
    assert client.post("/api/step/play", json={"speed": "warp"}).status_code == 400


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------
def test_compare_same_input(client):
    data = client.post(
        "/api/compare", json={"left": "bubble_sort", "right": "merge_sort", "array": "9,8,7,6,5,4,3,2,1"}
    ).get_json()
    assert data["left"]["algo_key"] == "bubble_sort"
    assert data["right"]["algo_key"] == "merge_sort"
    assert data["winner_comparisons"] == "Merge Sort"


def test_compare_across_categories(client):
    resp = client.post("/api/compare", json={"left": "bubble_sort", "right": "bfs"})
    assert resp.status_code == 400


def test_compare_needs_both_sides(client):
    assert client.post("/api/compare", json={"left": "bubble_sort"}).status_code == 400


# ---------------------------------------------------------------------------
# Run store and sample seeds
# ---------------------------------------------------------------------------
def test_run_store_is_capped(monkeypatch):
    import main

    monkeypatch.setattr(main.Config, "max_runs", 2)
    monkeypatch.setattr(main, "_RUNS", main.OrderedDict())
    clients = [main.app.test_client() for _ in range(5)]
    for c in clients:
        assert c.post("/api/run", json={"algo_key": "bubble_sort", "array": "2,1"}).status_code == 200
    assert len(main._RUNS) == 2

    # the newest sessions keep their runs, the oldest lost theirs
    assert clients[-1].post("/api/step/next").status_code == 200
    resp = clients[0].post("/api/step/next")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Run an algorithm first"


def test_rerun_replaces_the_session_run(client):
    import main

    before = len(main._RUNS)
    _run(client, algo_key="bubble_sort", array="2,1")
    _run(client, algo_key="bubble_sort", array="3,1")
    assert len(main._RUNS) == before + 1


def test_sample_routes_reject_bad_seeds(client):
    for route in ("/api/samples/array", "/api/samples/graph"):
        for seed in ({"a": 1}, [1, 2], "abc", 1.5):
            resp = client.post(route, json={"seed": seed})
            assert resp.status_code == 400
            assert resp.get_json()["error"].startswith("Invalid seed")
    assert client.post("/api/samples/graph", json={"seed": "7"}).status_code == 200


def test_tree_accepts_fractional_keys(client):
    _, data = _run(client, algo_key="bst", keys="2.5, 1, 4.0")
    assert data["metrics"]["tree_size"] == 3
    last = client.get("/api/export").get_json()["frames"][-1]
    assert last["tree"]["key"] == 2.5
    assert last["tree"]["right"]["key"] == 4
