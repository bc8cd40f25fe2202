"""Typed relationship graph used for kinship traversal."""

import logging
from typing import Iterable, Mapping

import networkx as nx

from kintree.models import Person, Relationship

logger = logging.getLogger(__name__)

PARENT_KINDS = frozenset({"father", "mother"})
CHILD_KINDS = frozenset({"son", "daughter"})
SPOUSE_KINDS = frozenset({"husband", "wife", "spouse"})


def parent_kind(parent: Person) -> str:
    return "father" if parent.gender == "male" else "mother"


def child_kind(child: Person) -> str:
    return "daughter" if child.gender == "female" else "son"


def spouse_kind(spouse: Person) -> str:
    if spouse.gender == "male":
        return "husband"
    if spouse.gender == "female":
        return "wife"
    return "spouse"


def build_relation_graph(
    people: Mapping[str, Person], relationships: Iterable[Relationship]
) -> nx.MultiDiGraph:
    """
    Build a bidirectional, typed graph from raw parent/spouse facts.

    Every person becomes a node carrying a ``person`` attribute. Each
    relationship adds one edge per direction; the edge ``kind`` names what
    the edge's target is to its source:

    - parent P -> child C: P->C is ``son``/``daughter`` (by C's gender,
      ``son`` when unknown), C->P is ``father``/``mother`` (by P's gender)
    - spouse A <-> B: each direction is ``husband``/``wife`` by the other
      person's gender, ``spouse`` when that gender is "other"

    Relationships that reference people missing from `people` are skipped.
    Parallel edges from repeated relationships are kept.
    """
    G = nx.MultiDiGraph()
    for person_id, person in people.items():
        G.add_node(person_id, person=person)

    for rel in relationships:
        source = people.get(rel.source_id)
        target = people.get(rel.target_id)
        if source is None or target is None:
            logger.debug("Skipping relationship %s with unknown member", rel.id)
            continue

        if rel.kind == "parent":
            G.add_edge(rel.source_id, rel.target_id, key=rel.id, kind=child_kind(target))
            G.add_edge(rel.target_id, rel.source_id, key=rel.id, kind=parent_kind(source))
        elif rel.kind == "spouse":
            G.add_edge(rel.source_id, rel.target_id, key=rel.id, kind=spouse_kind(target))
            G.add_edge(rel.target_id, rel.source_id, key=rel.id, kind=spouse_kind(source))

    logger.debug(
        "Relation graph has %d nodes and %d edges", G.number_of_nodes(), G.number_of_edges()
    )
    return G


def adjacency(G: nx.MultiDiGraph) -> dict[str, list[tuple[str, str]]]:
    """Adjacency map: person id -> list of (target id, edge kind)."""
    return {
        node: [(target, data["kind"]) for _, target, data in G.out_edges(node, data=True)]
        for node in G.nodes
    }


def edge_kind(G: nx.MultiDiGraph, source: str, target: str) -> str:
    """The kind of the step source->target; the alphabetically first if several."""
    return min(data["kind"] for data in G.get_edge_data(source, target).values())


def parents_of(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    return sorted(
        {t for _, t, kind in G.out_edges(person_id, data="kind") if kind in PARENT_KINDS}
    )


def children_of(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    return sorted(
        {t for _, t, kind in G.out_edges(person_id, data="kind") if kind in CHILD_KINDS}
    )
