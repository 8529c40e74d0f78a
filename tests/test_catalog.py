import json

import pytest

import algorithms
from engine import (
    AlgorithmConfig,
    Catalog,
    DuplicateAlgorithmError,
    InvalidInputError,
    UnknownAlgorithmError,
)


@pytest.fixture
def catalog():
    c = Catalog()
    c.seed()
    return c


def test_seed_adds_every_registered_algorithm(catalog):
    assert len(catalog) == len(algorithms.REGISTRY)
    assert {c.type for c in catalog.list()} == set(algorithms.CATEGORIES)


def test_seed_is_idempotent(catalog):
    assert catalog.seed() == 0
    assert len(catalog) == len(algorithms.REGISTRY)


def test_duplicate_type_and_name_is_rejected(catalog):
    with pytest.raises(DuplicateAlgorithmError):
        catalog.add(AlgorithmConfig(type="sorting", name="Bubble Sort"))


def test_same_name_in_another_type_is_allowed(catalog):
    added = catalog.add(AlgorithmConfig(type="search", name="Bubble Sort", created_by="alice"))
    assert added.id
    assert added.created_at
    assert catalog.get(added.id) is added


def test_unknown_type_is_rejected(catalog):
    with pytest.raises(InvalidInputError):
        catalog.add(AlgorithmConfig(type="hashing", name="Cuckoo"))


def test_by_type_and_find(catalog):
    trees = catalog.by_type("tree")
    assert {c.name for c in trees} == {"Binary Search Tree", "AVL Tree", "Red-Black Tree", "BST Lookup"}
    found = catalog.find("graph", "Dijkstra's Algorithm")
    assert found is not None and found.parameters["key"] == "dijkstra"
    assert catalog.find("graph", "A* Search") is None


def test_resolve_maps_back_to_tracer(catalog):
    info = catalog.resolve(catalog.find("search", "Binary Search"))
    assert info.key == "binary_search"


def test_resolve_without_tracer(catalog):
    extra = catalog.add(AlgorithmConfig(type="tree", name="Binary Heap"))
    with pytest.raises(UnknownAlgorithmError):
        catalog.resolve(extra)


def test_json_round_trip(tmp_path, catalog):
    path = tmp_path / "catalog.json"
    catalog.save_json(str(path))
    data = json.loads(path.read_text())
    assert len(data) == len(catalog)
    assert {"id", "type", "name", "description", "parameters", "createdBy", "createdAt"} <= set(data[0])

    again = Catalog()
    assert again.load_json(str(path)) == len(catalog)
    assert again.seed() == 0
    assert [c.id for c in again.list()] == [c.id for c in catalog.list()]


def test_load_rejects_duplicates_in_file(tmp_path):
    path = tmp_path / "catalog.json"
    entry = {"type": "sorting", "name": "Quick Sort"}
    path.write_text(json.dumps([entry, entry]))
    with pytest.raises(DuplicateAlgorithmError):
        Catalog().load_json(str(path))


def test_load_rejects_incomplete_entries(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{"type": "sorting"}]))
    with pytest.raises(InvalidInputError, match="name"):
        Catalog().load_json(str(path))


def test_registry_lookups_by_category():
    trees = algorithms.algorithms_by_category("tree")
    assert [info.key for info in trees] == ["bst", "avl", "red_black", "bst_search"]
    assert algorithms.find_by_label("graph", "Depth-First Search").key == "dfs"
    # labels only match inside their own category
    assert algorithms.find_by_label("sorting", "Depth-First Search") is None
