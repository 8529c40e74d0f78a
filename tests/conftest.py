import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from graph import Graph


@pytest.fixture
def diamond_graph() -> Graph:
    """
    0 → 1 (4), 0 → 2 (1), 2 → 1 (2), 1 → 3 (1), 2 → 3 (5); 4 is isolated.
    Shortest 0 → 3 is 0 → 2 → 1 → 3 with weight 4.
    """
    g = Graph()
    for i in range(5):
        g.create_node(i, x=i * 10.0, y=0.0)
    g.create_edge(0, 1, 4)
    g.create_edge(0, 2, 1)
    g.create_edge(2, 1, 2)
    g.create_edge(1, 3, 1)
    g.create_edge(2, 3, 5)
    return g


@pytest.fixture
def client():
    import main

    main.app.config["TESTING"] = True
    main.init_catalog()
    with main.app.test_client() as c:
        yield c
