import pytest

from engine import InvalidInputError
from engine import validation
from graph import Graph


def test_parse_array_from_text():
    assert validation.parse_array("5, 3, 8.5, -1") == [5, 3, 8.5, -1]


def test_parse_array_from_list():
    assert validation.parse_array([1, "2", 3.0]) == [1, 2, 3.0]


@pytest.mark.parametrize("raw, message", [
    ("5, x, 3", "Invalid number: x"),
    ("", "Array cannot be empty"),
    ([], "Array cannot be empty"),
    ("1, nan", "Invalid number: nan"),
])
def test_parse_array_errors(raw, message):
    with pytest.raises(InvalidInputError) as exc:
        validation.parse_array(raw)
    assert str(exc.value) == message


def test_parse_array_size_limit():
    with pytest.raises(InvalidInputError, match="Array size cannot exceed 3 elements"):
        validation.parse_array([1, 2, 3, 4], max_size=3)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        validation.parse_number("abc")


def test_parse_number_rejects_booleans():
    with pytest.raises(InvalidInputError):
        validation.parse_number(True)


def test_parse_keys_accepts_any_finite_number():
    keys = validation.parse_keys("3, 1, 2.0, 4.5")
    assert keys == [3, 1, 2, 4.5]
    assert isinstance(keys[2], int)
    with pytest.raises(InvalidInputError, match="Invalid number: inf"):
        validation.parse_keys("1, inf")


def test_bounded_int_and_probability():
    assert validation.parse_bounded_int("7", "size", 1, 10) == 7
    with pytest.raises(InvalidInputError, match="Size must be between 1 and 10"):
        validation.parse_bounded_int(11, "size", 1, 10)
    assert validation.parse_probability("0.25") == 0.25
    with pytest.raises(InvalidInputError):
        validation.parse_probability(1.5)


def test_parse_graph_from_dict_and_text(diamond_graph):
    assert validation.parse_graph(diamond_graph.to_dict()).edge_count() == 5
    assert validation.parse_graph("0: 1\n1: 0").node_count() == 2


@pytest.mark.parametrize("raw", [
    {"nodes": [{"id": 0}], "edges": [{"source": 0, "target": 9}]},
    {"nodes": [{"id": 0}, {"id": 1}], "edges": [{"source": 0, "target": 1, "weight": "x"}]},
    {"nodes": [{"x": 1}]},
    {"nodes": []},
    "0: q",
    42,
])
def test_parse_graph_rejects_malformed(raw):
    with pytest.raises(InvalidInputError):
        validation.parse_graph(raw)


def test_require_nodes(diamond_graph):
    validation.require_nodes(diamond_graph, 0, 3)
    with pytest.raises(InvalidInputError, match="Start node 9"):
        validation.require_nodes(diamond_graph, 9)
    with pytest.raises(InvalidInputError, match="End node 9"):
        validation.require_nodes(diamond_graph, 0, 9)


def test_require_non_negative():
    g = Graph()
    g.create_node(0)
    g.create_node(1)
    g.create_edge(0, 1, -2)
    with pytest.raises(InvalidInputError, match="non-negative"):
        validation.require_non_negative(g)
