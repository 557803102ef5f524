from pipeline_compiler import Edge, Node, sequence


def _nodes(*ids):
    return [Node(id=node_id, type="preprocessNode") for node_id in ids]


def _ids(nodes):
    return [node.id for node in nodes]


def test_sequence_is_deterministic():
    nodes = _nodes("a", "b", "c", "d")
    edges = [Edge(source="a", target="c"), Edge(source="b", target="c"), Edge(source="c", target="d")]

    assert _ids(sequence(nodes, edges)) == _ids(sequence(nodes, edges))


def test_every_node_follows_its_predecessors():
    nodes = _nodes("deploy", "train", "ingest", "split", "prep")
    edges = [
        Edge(source="ingest", target="prep"),
        Edge(source="prep", target="split"),
        Edge(source="split", target="train"),
        Edge(source="train", target="deploy"),
        Edge(source="ingest", target="split"),
    ]

    order = _ids(sequence(nodes, edges))

    assert sorted(order) == sorted(_ids(nodes))
    for edge in edges:
        assert order.index(edge.source) < order.index(edge.target)


def test_ties_keep_input_order():
    nodes = _nodes("z", "y", "x")
    assert _ids(sequence(nodes, [])) == ["z", "y", "x"]

    nodes = _nodes("root", "second", "first")
    edges = [Edge(source="root", target="second"), Edge(source="root", target="first")]
    assert _ids(sequence(nodes, edges)) == ["root", "second", "first"]


def test_cycle_falls_back_to_input_order():
    nodes = _nodes("a", "b")
    edges = [Edge(source="a", target="b"), Edge(source="b", target="a")]

    result = sequence(nodes, edges)

    assert len(result) == len(nodes)
    assert _ids(result) == ["a", "b"]


def test_partial_cycle_still_falls_back():
    nodes = _nodes("start", "a", "b")
    edges = [
        Edge(source="start", target="a"),
        Edge(source="a", target="b"),
        Edge(source="b", target="a"),
    ]

    assert _ids(sequence(nodes, edges)) == ["start", "a", "b"]


def test_dangling_edges_are_ignored():
    nodes = _nodes("a", "b")
    edges = [Edge(source="a", target="ghost"), Edge(source="ghost", target="b")]

    assert _ids(sequence(nodes, edges)) == ["a", "b"]


def test_empty_input():
    assert sequence([], []) == []
