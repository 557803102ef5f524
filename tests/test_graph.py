from pipeline_compiler import Edge, Node
from pipeline_compiler.graph import generate_node_id, has_cycle, remove_node


def _nodes(*ids):
    return [Node(id=node_id, type="preprocessNode") for node_id in ids]


def test_generate_node_id_uses_type_and_timestamp():
    assert generate_node_id("trainingNode", now_ms=1700000000000) == "trainingNode-1700000000000"


def test_generate_node_id_avoids_collisions():
    taken = ["trainingNode-5", "trainingNode-5-1"]
    assert generate_node_id("training", taken, now_ms=5) == "trainingNode-5-2"


def test_remove_node_cascades_to_edges():
    nodes = _nodes("a", "b", "c")
    edges = [Edge(source="a", target="b"), Edge(source="b", target="c"), Edge(source="a", target="c")]

    kept_nodes, kept_edges = remove_node(nodes, edges, "b")

    assert [node.id for node in kept_nodes] == ["a", "c"]
    assert [(edge.source, edge.target) for edge in kept_edges] == [("a", "c")]


def test_has_cycle_handles_deep_chains():
    count = 5000
    nodes = _nodes(*(f"n{i}" for i in range(count)))
    edges = [Edge(source=f"n{i}", target=f"n{i + 1}") for i in range(count - 1)]

    assert has_cycle(nodes, edges) is False

    edges.append(Edge(source=f"n{count - 1}", target="n0"))
    assert has_cycle(nodes, edges) is True


def test_self_loop_is_a_cycle():
    assert has_cycle(_nodes("a"), [Edge(source="a", target="a")])


def test_edge_id_defaults_from_endpoints():
    assert Edge(source="a", target="b").id == "e-a-b"
