"""Marriage clusters: people linked transitively through spouse relationships."""

import logging
from typing import Iterable, Mapping

import networkx as nx

from kintree.models import Person, Relationship

logger = logging.getLogger(__name__)


def spouse_pairs(
    people: Mapping[str, Person], relationships: Iterable[Relationship]
) -> list[tuple[str, str]]:
    """Unique spouse pairs as sorted (a, b) tuples, in sorted order."""
    pairs: set[tuple[str, str]] = set()
    for r in relationships:
        if r.kind != "spouse" or r.source_id == r.target_id:
            continue
        if r.source_id not in people or r.target_id not in people:
            continue
        a, b = sorted((r.source_id, r.target_id))
        pairs.add((a, b))
    return sorted(pairs)


def build_spouse_graph(
    people: Mapping[str, Person], relationships: Iterable[Relationship]
) -> nx.Graph:
    """Undirected graph of every person with an edge per spouse pair."""
    S = nx.Graph()
    S.add_nodes_from(people)
    S.add_edges_from(spouse_pairs(people, relationships))
    return S


def find_marriage_clusters(
    people: Mapping[str, Person], relationships: Iterable[Relationship]
) -> list[list[str]]:
    """
    Partition people into marriage clusters.

    A cluster is a maximal set of people connected through spouse edges, so a
    remarriage chain A-B, B-C is a single cluster {A, B, C}. People without a
    spouse form clusters of size 1.

    Returns:
        Clusters with sorted member ids, ordered by their first member id
    """
    S = build_spouse_graph(people, relationships)
    clusters = sorted(sorted(component) for component in nx.connected_components(S))
    logger.debug(
        "Found %d marriage clusters (%d with spouses)",
        len(clusters),
        sum(1 for c in clusters if len(c) > 1),
    )
    return clusters
