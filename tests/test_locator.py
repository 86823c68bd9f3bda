import pytest

from graphgeo.config import GeometryConfig, get_geometry_config, set_geometry_config
from graphgeo.errors import MissingAttributeError
from graphgeo.geometry import Box
from graphgeo.graph import Graph, StdAttribute
from graphgeo.locator import BucketGridLocator, LocatorOptions


def _graph(**positions):
    graph = Graph()
    pos_attr = graph.new_node_attribute(StdAttribute.node_position, (0.0, 0.0))
    size_attr = graph.new_node_attribute(StdAttribute.node_size, (1.0, 1.0))
    nodes = {}
    for name, pos in positions.items():
        node = graph.new_node(name)
        pos_attr[node] = pos
        nodes[name] = node
    return graph, nodes, pos_attr, size_attr


def test_auto_sync_follows_node_moves():
    graph, nodes, positions, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0))
    a, b = nodes["a"], nodes["b"]
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0, auto_sync=True))

    assert b in locator.get_close_nodes((0.0, 0.0), 2.0)
    assert locator.get_close_nodes(a, 2.0) == {b}

    positions[b] = (100.0, 100.0)
    assert b not in locator.get_close_nodes((0.0, 0.0), 2.0)
    assert b not in locator.get_close_nodes(a, 2.0)

    positions[b] = (1.0, 1.0)
    assert b in locator.get_close_nodes((0.0, 0.0), 2.0)
    assert b in locator.get_close_nodes(a, 2.0)
    locator.close()


def test_closed_locator_stops_following_the_graph():
    graph, nodes, positions, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0))
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0, auto_sync=True))
    assert graph.subscriber_count == 1
    assert positions.subscriber_count == 1

    locator.close()
    locator.close()

    assert locator.closed
    assert graph.subscriber_count == 0
    assert positions.subscriber_count == 0
    positions[nodes["b"]] = (100.0, 100.0)
    assert nodes["b"] in locator.get_close_nodes((0.0, 0.0), 2.0)


def test_context_manager_closes_the_locator():
    graph, _, positions, sizes = _graph(a=(0.0, 0.0))
    with BucketGridLocator(graph, LocatorOptions(auto_sync=True)) as locator:
        assert sizes.subscriber_count == 1
    assert locator.closed
    assert positions.subscriber_count == 0
    assert sizes.subscriber_count == 0


def test_auto_sync_tracks_insertions_and_removals():
    graph, nodes, positions, _ = _graph(a=(0.0, 0.0))
    with BucketGridLocator(graph, LocatorOptions(cell_size=2.0, auto_sync=True)) as locator:
        c = graph.new_node("c")
        assert c in locator.get_close_nodes((0.0, 0.0), 1.0)
        edge = graph.new_edge(nodes["a"], c)
        assert edge in locator.get_close_edges((0.0, 0.0), 1.0)

        graph.remove(c)
        assert c not in locator.get_close_nodes((0.0, 0.0), 1.0)
        assert edge not in locator.get_close_edges((0.0, 0.0), 1.0)
        assert locator.indexed_edges == set()


def test_auto_sync_indexes_nodes_once_they_are_placed():
    graph = Graph()
    positions = graph.new_node_attribute(StdAttribute.node_position, None)
    graph.new_node_attribute(StdAttribute.node_size, (1.0, 1.0))
    a = graph.new_node("a")
    positions[a] = (0.0, 0.0)
    with BucketGridLocator(graph, LocatorOptions(cell_size=2.0, auto_sync=True)) as locator:
        b = graph.new_node("b")
        edge = graph.new_edge(a, b)
        assert locator.indexed_nodes == {a}
        assert locator.indexed_edges == set()

        positions[b] = (1.0, 0.0)
        assert locator.get_close_nodes((0.0, 0.0), 1.0) == {a, b}
        assert edge in locator.get_close_edges((0.0, 0.0), 1.0)

        positions.reset(b)
        assert locator.indexed_nodes == {a}
        assert locator.indexed_edges == set()


def test_unplaced_nodes_are_left_out_of_a_manual_locator():
    graph = Graph()
    positions = graph.new_node_attribute(StdAttribute.node_position, None)
    a, b = graph.new_node("a"), graph.new_node("b")
    graph.new_edge(a, b)
    positions[a] = (0.0, 0.0)
    locator = BucketGridLocator(graph)
    assert locator.cell_size == 1.0
    assert locator.indexed_nodes == {a}
    assert locator.indexed_edges == set()


def test_auto_sync_refreshes_incident_edges_of_moved_nodes():
    graph, nodes, positions, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0))
    edge = graph.new_edge(nodes["a"], nodes["b"])
    with BucketGridLocator(graph, LocatorOptions(cell_size=2.0, auto_sync=True)) as locator:
        assert edge in locator.get_close_edges((0.0, 0.0), 1.0)

        positions.update({nodes["a"]: (100.0, 100.0), nodes["b"]: (101.0, 100.0)})
        assert edge not in locator.get_close_edges((0.0, 0.0), 1.0)
        assert edge in locator.get_close_edges((100.0, 100.0), 1.0)


def test_auto_sync_follows_size_and_default_changes():
    graph, nodes, positions, sizes = _graph(a=(0.0, 0.0), b=(100.0, 100.0))
    with BucketGridLocator(graph, LocatorOptions(cell_size=2.0, auto_sync=True)) as locator:
        assert nodes["b"] not in locator.get_close_nodes((0.0, 0.0), 1.0)
        sizes[nodes["b"]] = (300.0, 300.0)
        assert nodes["b"] in locator.get_close_nodes((0.0, 0.0), 1.0)

        sizes.set_default((0.0, 0.0))
        positions.set_default((50.0, 50.0))
        positions.reset(nodes["a"])
        assert nodes["a"] in locator.get_close_nodes((50.0, 50.0), 0.5)


def test_auto_sync_follows_edge_bends():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0), b=(10.0, 0.0))
    edge = graph.new_edge(nodes["a"], nodes["b"])
    bends = graph.new_edge_attribute(StdAttribute.edge_points, None)
    with BucketGridLocator(graph, LocatorOptions(cell_size=2.0, auto_sync=True)) as locator:
        assert edge not in locator.get_close_edges((5.0, 50.0), 1.0)
        bends[edge] = [(5.0, 50.0)]
        assert edge in locator.get_close_edges((5.0, 50.0), 1.0)


def test_manual_locator_needs_rebuild():
    graph, nodes, positions, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0))
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0))
    assert graph.subscriber_count == 0

    positions[nodes["b"]] = (100.0, 100.0)
    assert nodes["b"] in locator.get_close_nodes((0.0, 0.0), 2.0)

    locator.rebuild()
    assert nodes["b"] not in locator.get_close_nodes((0.0, 0.0), 2.0)


def test_removed_nodes_are_filtered_even_without_sync():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0))
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0))
    graph.remove(nodes["b"])
    assert locator.get_close_nodes((0.0, 0.0), 2.0) == {nodes["a"]}


def test_edge_queries_exclude_the_query_edge():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0), b=(10.0, 0.0), c=(0.0, 1.0), d=(10.0, 1.0), far=(500.0, 500.0))
    ab = graph.new_edge(nodes["a"], nodes["b"])
    cd = graph.new_edge(nodes["c"], nodes["d"])
    graph.new_edge(nodes["far"], nodes["far"])
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0))

    assert locator.get_close_edges(ab, 1.0) == {cd}
    assert locator.get_close_nodes(ab, 0.5) == {nodes["a"], nodes["b"], nodes["c"], nodes["d"]}
    assert locator.get_close_edges(nodes["a"], 0.5) == {ab, cd}


def test_polyline_queries():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0), b=(55.0, 55.0))
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0))
    assert locator.get_close_nodes([(50.0, 50.0), (60.0, 60.0)], 1.0) == {nodes["b"]}
    with pytest.raises(ValueError):
        locator.get_close_nodes([], 1.0)
    with pytest.raises(ValueError):
        locator.get_close_nodes((0.0, 0.0), -1.0)


def test_box_queries_on_negative_coordinates():
    graph, nodes, _, _ = _graph(a=(-5.0, -5.0), b=(5.0, 5.0))
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0))
    assert locator.get_nodes_in_box(Box(-6.0, -6.0, -4.0, -4.0)) == {nodes["a"]}
    assert locator.get_nodes_in_box(Box(-6.0, -6.0, 6.0, 6.0)) == {nodes["a"], nodes["b"]}
    assert locator.get_edges_in_box(Box(-6.0, -6.0, 6.0, 6.0)) == set()


def test_exclude_predicate_is_applied_at_query_time():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0))
    hidden = set()
    locator = BucketGridLocator(graph, LocatorOptions(cell_size=2.0, exclude_nodes=lambda node: node in hidden))
    assert nodes["b"] in locator.get_close_nodes((0.0, 0.0), 2.0)
    hidden.add(nodes["b"])
    assert nodes["b"] not in locator.get_close_nodes((0.0, 0.0), 2.0)


def test_consider_predicate_limits_indexed_elements():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0), c=(0.0, 1.0))
    ab = graph.new_edge(nodes["a"], nodes["b"])
    graph.new_edge(nodes["a"], nodes["c"])
    options = LocatorOptions(
        cell_size=2.0,
        consider_nodes=lambda node: node.id != "c",
        consider_edges=lambda edge: edge == ab,
    )
    locator = BucketGridLocator(graph, options)
    assert locator.indexed_nodes == {nodes["a"], nodes["b"]}
    assert locator.get_close_edges((0.0, 0.0), 5.0) == {ab}


def test_conflicting_filters_and_bad_cell_size_are_rejected():
    with pytest.raises(ValueError):
        LocatorOptions(consider_nodes=lambda n: True, exclude_nodes=lambda n: False)
    with pytest.raises(ValueError):
        LocatorOptions(consider_edges=lambda e: True, exclude_edges=lambda e: False)
    with pytest.raises(ValueError):
        LocatorOptions(cell_size=0.0)


def test_default_cell_size_derives_from_graph_box():
    graph, _, _, _ = _graph(a=(0.0, 0.0), b=(999.0, 0.0))
    assert BucketGridLocator(graph).cell_size == pytest.approx(10.0)

    small, _, _, _ = _graph(a=(0.0, 0.0), b=(3.0, 0.0))
    assert BucketGridLocator(small).cell_size == 1.0

    empty, _, _, _ = _graph()
    assert BucketGridLocator(empty).cell_size == 1.0


def test_default_cell_size_honours_configuration():
    previous = get_geometry_config()
    try:
        set_geometry_config(GeometryConfig(min_cell_size=5.0, cell_size_divisor=10.0))
        graph, _, _, _ = _graph(a=(0.0, 0.0), b=(199.0, 0.0))
        assert BucketGridLocator(graph).cell_size == pytest.approx(20.0)
        empty, _, _, _ = _graph()
        assert BucketGridLocator(empty).cell_size == 5.0
    finally:
        set_geometry_config(previous)


def test_explicit_positions_override_graph_attribute():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0), b=(1.0, 0.0))
    locator = BucketGridLocator(
        graph,
        LocatorOptions(cell_size=2.0),
        positions={nodes["a"]: (0.0, 0.0), nodes["b"]: (40.0, 40.0)},
    )
    assert locator.get_close_nodes((0.0, 0.0), 2.0) == {nodes["a"]}


def test_auto_sync_requires_observable_positions():
    graph, nodes, _, _ = _graph(a=(0.0, 0.0))
    with pytest.raises(ValueError):
        BucketGridLocator(graph, LocatorOptions(auto_sync=True), positions={nodes["a"]: (0.0, 0.0)})


def test_missing_positions_are_reported():
    graph = Graph()
    graph.new_node("a")
    with pytest.raises(MissingAttributeError):
        BucketGridLocator(graph, LocatorOptions(cell_size=1.0))
