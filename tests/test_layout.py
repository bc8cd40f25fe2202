"""Tests for the union-node diagram payload."""

import pytest

from kintree.layout import (
    GroupContainerNode,
    PersonNode,
    UnionAnchorNode,
    anchor_x,
    build_layout_graph,
    group_id,
    lineage_edge_id,
    slot_x,
    spouse_edge_id,
    to_layout_digraph,
    to_payload,
    union_id,
)
from kintree.settings import DEFAULT_LAYOUT, LayoutSettings


def lineage_edges(graph):
    return [e for e in graph.edges if e.kind == "lineage"]


def test_remarriage_chain_gets_one_group_and_two_anchors(builder):
    builder.add("A").add("B", "female").add("C")
    builder.couple("A", "B").couple("B", "C")

    graph = build_layout_graph(builder.people, builder.relationships)

    assert [g.id for g in graph.groups] == ["group_A_B_C"]
    group = graph.groups[0]
    assert group.members == ("A", "B", "C")
    assert group.width == 3 * DEFAULT_LAYOUT.slot_width
    assert group.height == DEFAULT_LAYOUT.group_height

    assert sorted(u.id for u in graph.unions) == ["union_A_B", "union_B_C"]
    assert all(u.parent == "group_A_B_C" for u in graph.unions)

    members = [n for n in graph.nodes if isinstance(n, PersonNode)]
    assert [(n.id, n.position.x, n.position.y) for n in members] == [
        ("A", 50.0, 50),
        ("B", 230.0, 50),
        ("C", 410.0, 50),
    ]


def test_anchor_sits_between_the_partners():
    assert slot_x(0) == 50.0
    assert slot_x(1) == 230.0
    assert anchor_x(0, 1) == 184.0
    assert anchor_x(1, 0) == 184.0
    assert anchor_x(1, 2) == 364.0


def test_anchor_does_not_depend_on_relationship_direction(builder):
    builder.add("a").add("b", "female")
    builder.couple("a", "b")
    forward = build_layout_graph(builder.people, builder.relationships)

    builder.relationships.clear()
    builder.couple("b", "a")
    backward = build_layout_graph(builder.people, builder.relationships)

    assert forward.node("union_a_b") == backward.node("union_a_b")
    assert forward.node("union_a_b").position.x == 184.0
    assert forward.node("union_a_b").position.y == DEFAULT_LAYOUT.anchor_top


def test_spouse_edge_runs_left_to_right(builder):
    builder.add("zed").add("amy", "female")
    builder.couple("zed", "amy")

    graph = build_layout_graph(builder.people, builder.relationships)

    (edge,) = graph.edges
    assert edge.id == "edge_amy_zed"
    assert (edge.source, edge.target) == ("amy", "zed")
    assert (edge.source_handle, edge.target_handle) == ("right", "left")
    assert edge.weight == DEFAULT_LAYOUT.spouse_weight
    assert edge.variant == "active"
    assert not edge.dashed


def test_children_hang_from_the_union_anchor(builder):
    builder.add("dad").add("mom", "female").add("kid").add("kid2", "female")
    builder.couple("dad", "mom", "kid", "kid2")

    graph = build_layout_graph(builder.people, builder.relationships)

    edges = lineage_edges(graph)
    assert [(e.id, e.source, e.target) for e in edges] == [
        ("edge_lineage_union%5Fdad%5Fmom_kid", "union_dad_mom", "kid"),
        ("edge_lineage_union%5Fdad%5Fmom_kid2", "union_dad_mom", "kid2"),
    ]
    for e in edges:
        assert e.weight == DEFAULT_LAYOUT.lineage_weight
        assert e.animated
        assert (e.source_handle, e.target_handle) == ("bottom", "top")


def test_child_of_a_remarriage_uses_the_right_union(builder):
    builder.add("A").add("B", "female").add("C").add("kid")
    builder.couple("A", "B").couple("B", "C", "kid")

    graph = build_layout_graph(builder.people, builder.relationships)

    assert [e.source for e in lineage_edges(graph)] == ["union_B_C"]


def test_single_parent_and_unmarried_co_parents(builder):
    builder.add("solo").add("kid").add("p1").add("p2", "female").add("kid2")
    builder.parent("solo", "kid").parent("p1", "kid2").parent("p2", "kid2")

    graph = build_layout_graph(builder.people, builder.relationships)

    assert graph.groups == []
    assert graph.unions == []
    assert sorted((e.source, e.target) for e in lineage_edges(graph)) == [
        ("p1", "kid2"),
        ("p2", "kid2"),
        ("solo", "kid"),
    ]


def test_duplicate_relationships_give_one_edge(builder):
    builder.add("dad").add("mom", "female").add("kid")
    builder.couple("dad", "mom", "kid").couple("mom", "dad", "kid")

    graph = build_layout_graph(builder.people, builder.relationships)

    assert len(graph.unions) == 1
    assert [e.kind for e in graph.edges] == ["spouse", "lineage"]


@pytest.mark.parametrize(
    "dad_status, mom_died, variant, faded",
    [
        (None, None, "active", False),
        ("Deceased", None, "widowed", False),
        ("殁", "2001-01-01", "deceased", True),
    ],
)
def test_union_variant_and_faded_lineage(builder, dad_status, mom_died, variant, faded):
    builder.add("dad", status=dad_status).add("mom", "female", died=mom_died).add("kid")
    builder.couple("dad", "mom", "kid")

    graph = build_layout_graph(builder.people, builder.relationships)

    assert graph.node("union_dad_mom").variant == variant
    spouse = graph.edges[0]
    assert spouse.variant == variant
    assert spouse.dashed is faded
    assert spouse.opacity == (0.5 if faded else 1.0)

    (lineage,) = lineage_edges(graph)
    assert lineage.dashed is faded
    assert lineage.animated is not faded
    assert lineage.opacity == (0.6 if faded else 1.0)


def test_deceased_single_parent_fades_lineage(builder):
    builder.add("dad", died="1990").add("kid")
    builder.parent("dad", "kid")

    (edge,) = build_layout_graph(builder.people, builder.relationships).edges

    assert edge.dashed
    assert not edge.animated


def test_single_people_get_default_size_and_highlight(builder):
    builder.add("a").add("b", "female").add("loner")
    builder.couple("a", "b")

    graph = build_layout_graph(builder.people, builder.relationships, highlighted_id="loner")

    loner = graph.node("loner")
    assert loner.parent is None
    assert (loner.width, loner.height) == (220, 220)
    assert loner.highlighted
    assert not graph.node("a").highlighted
    assert graph.node("a").width == DEFAULT_LAYOUT.member_width


def test_custom_settings(builder):
    builder.add("a").add("b")
    builder.couple("a", "b")
    settings = LayoutSettings(slot_width=200, group_padding=0)

    graph = build_layout_graph(builder.people, builder.relationships, settings=settings)

    assert graph.groups[0].width == 400
    assert graph.node("a").position.x == 40.0


def test_layout_digraph_lifts_edges_to_groups(family):
    graph = build_layout_graph(family.people, family.relationships)
    D = to_layout_digraph(graph)

    top_level = {n.id for n in graph.nodes if n.parent is None}
    assert set(D.nodes) == top_level
    assert "union_root_wife" not in D
    assert D.nodes["grandson"] == {"width": 220, "height": 220}

    parents = graph.top_level_id("father")
    kids = graph.top_level_id("root")
    assert D[parents][kids]["weight"] == DEFAULT_LAYOUT.lineage_weight
    assert all(u != v for u, v in D.edges)


def test_payload_shape(builder):
    builder.add("dad").add("mom", "female").add("kid")
    builder.couple("dad", "mom", "kid")

    payload = to_payload(build_layout_graph(builder.people, builder.relationships))

    by_id = {n["id"]: n for n in payload["nodes"]}
    assert by_id["group_dad_mom"]["type"] == "group"
    assert by_id["group_dad_mom"]["members"] == ["dad", "mom"]
    assert by_id["union_dad_mom"]["type"] == "union"
    assert by_id["union_dad_mom"]["variant"] == "active"
    assert by_id["kid"]["type"] == "person"
    assert by_id["kid"]["parent"] is None
    assert by_id["mom"]["gender"] == "female"
    assert by_id["mom"]["parent"] == "group_dad_mom"

    lineage = payload["edges"][-1]
    assert lineage["sourceHandle"] == "bottom"
    assert lineage["targetHandle"] == "top"


def test_union_id_is_order_free():
    assert union_id("b", "a") == union_id("a", "b") == "union_a_b"


def test_ids_with_underscores_stay_distinct():
    assert union_id("a_b", "c") == "union_a%5Fb_c"
    assert union_id("a_b", "c") != union_id("a", "b_c")
    assert union_id("a%5Fb", "c") != union_id("a_b", "c")
    assert group_id(["a_b", "c"]) != group_id(["a", "b_c"])
    assert spouse_edge_id("x_y", "z") != spouse_edge_id("x", "y_z")
    assert lineage_edge_id("a_b", "c") != lineage_edge_id("a", "b_c")


def test_couples_with_underscored_ids_get_their_own_nodes(builder):
    builder.add("a_b").add("c", "female").add("a").add("b_c", "female")
    builder.add("kid1").add("kid2")
    builder.couple("a_b", "c", "kid1").couple("a", "b_c", "kid2")

    graph = build_layout_graph(builder.people, builder.relationships)

    assert len({g.id for g in graph.groups}) == 2
    assert sorted(u.spouses for u in graph.unions) == [("a", "b_c"), ("a_b", "c")]
    assert len({u.id for u in graph.unions}) == 2
    assert len({e.id for e in graph.edges}) == len(graph.edges) == 4
    sources = {e.target: e.source for e in lineage_edges(graph)}
    assert sources == {"kid1": union_id("a_b", "c"), "kid2": union_id("a", "b_c")}


def test_node_types(family):
    graph = build_layout_graph(family.people, family.relationships)
    kinds = {type(n) for n in graph.nodes}
    assert kinds == {PersonNode, UnionAnchorNode, GroupContainerNode}
    assert graph.top_level_id("root") == "group_root_wife"
    with pytest.raises(KeyError):
        graph.node("nobody")
