"""Tests for the typed relationship graph."""

from kintree.relations import adjacency, build_relation_graph, children_of, edge_kind, parents_of


def test_parent_edges_are_typed_by_gender(builder):
    builder.add("dad").add("mom", "female").add("girl", "female").add("kid", "other")
    builder.parent("dad", "girl").parent("mom", "kid")
    adj = adjacency(build_relation_graph(builder.people, builder.relationships))

    assert adj["dad"] == [("girl", "daughter")]
    assert adj["girl"] == [("dad", "father")]
    assert adj["mom"] == [("kid", "son")]
    assert adj["kid"] == [("mom", "mother")]


def test_spouse_edges_are_typed_by_the_other_person(builder):
    builder.add("h").add("w", "female").add("x", "other")
    builder.couple("h", "w").couple("w", "x")
    adj = adjacency(build_relation_graph(builder.people, builder.relationships))

    assert adj["h"] == [("w", "wife")]
    assert sorted(adj["w"]) == [("h", "husband"), ("x", "spouse")]
    assert adj["x"] == [("w", "wife")]


def test_repeated_relationships_are_kept(builder):
    builder.add("dad").add("kid")
    builder.parent("dad", "kid").parent("dad", "kid")
    G = build_relation_graph(builder.people, builder.relationships)

    assert adjacency(G)["dad"] == [("kid", "son"), ("kid", "son")]
    assert edge_kind(G, "kid", "dad") == "father"


def test_unknown_people_are_skipped(builder):
    builder.add("kid").parent("ghost", "kid")
    G = build_relation_graph(builder.people, builder.relationships)
    assert list(G.nodes) == ["kid"]
    assert G.number_of_edges() == 0


def test_parents_and_children(family):
    G = build_relation_graph(family.people, family.relationships)
    assert parents_of(G, "root") == ["father", "mother"]
    assert children_of(G, "father") == ["brother", "root", "sister"]
    assert children_of(G, "grandson") == []
