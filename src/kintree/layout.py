"""
Diagram payload built on the union-node model.

Spouses are grouped into one container per marriage cluster and every spouse
pair gets a small union anchor between the two partners. Children hang from
the union anchor of their parents, so siblings line up under the couple
rather than under one parent. The payload is plain data: positions are
filled in later by a layered layout (see positioning.py).
"""

from dataclasses import dataclass, field
import logging
from typing import Iterable, Mapping, Union

import networkx as nx

from kintree.clusters import find_marriage_clusters, spouse_pairs
from kintree.models import Person, Relationship
from kintree.settings import DEFAULT_LAYOUT, LayoutSettings

logger = logging.getLogger(__name__)

ACTIVE = "active"  # both partners living
WIDOWED = "widowed"  # one partner deceased
DECEASED = "deceased"  # both partners deceased


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class PersonNode:
    id: str
    person: Person
    width: float
    height: float
    highlighted: bool = False
    parent: str | None = None  # group container id, None for single people
    position: Point = field(default_factory=Point)

    @property
    def gender(self) -> str:
        return self.person.gender

    @property
    def deceased(self) -> bool:
        return self.person.is_deceased


@dataclass(frozen=True)
class UnionAnchorNode:
    id: str
    spouses: tuple[str, str]
    variant: str
    width: float
    height: float
    parent: str | None = None
    position: Point = field(default_factory=Point)


@dataclass(frozen=True)
class GroupContainerNode:
    id: str
    members: tuple[str, ...]
    width: float
    height: float
    parent: str | None = None
    position: Point = field(default_factory=Point)


LayoutNode = Union[PersonNode, UnionAnchorNode, GroupContainerNode]


@dataclass(frozen=True)
class LayoutEdge:
    id: str
    source: str
    target: str
    kind: str  # spouse, lineage
    weight: int
    dashed: bool = False
    opacity: float = 1.0
    animated: bool = False
    variant: str | None = None
    source_handle: str | None = None
    target_handle: str | None = None


@dataclass
class LayoutGraph:
    nodes: list[LayoutNode] = field(default_factory=list)
    edges: list[LayoutEdge] = field(default_factory=list)

    def node(self, node_id: str) -> LayoutNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def top_level_id(self, node_id: str) -> str:
        """The id of the node itself, or of the container it sits in."""
        n = self.node(node_id)
        return n.parent or n.id

    @property
    def unions(self) -> list[UnionAnchorNode]:
        return [n for n in self.nodes if isinstance(n, UnionAnchorNode)]

    @property
    def groups(self) -> list[GroupContainerNode]:
        return [n for n in self.nodes if isinstance(n, GroupContainerNode)]


def composite_id(prefix: str, *parts: str) -> str:
    """
    Join a prefix and member ids into one node or edge id.

    "_" separates the parts, so it is percent-escaped inside each part (along
    with "%" itself). Different member tuples therefore never share an id.
    """
    escaped = [p.replace("%", "%25").replace("_", "%5F") for p in parts]
    return "_".join([prefix, *escaped])


def union_id(a: str, b: str) -> str:
    return composite_id("union", *sorted((a, b)))


def group_id(members: Iterable[str]) -> str:
    return composite_id("group", *members)


def spouse_edge_id(a: str, b: str) -> str:
    return composite_id("edge", *sorted((a, b)))


def lineage_edge_id(source: str, child: str) -> str:
    return composite_id("edge_lineage", source, child)


def union_variant(a: Person, b: Person) -> str:
    if a.is_deceased and b.is_deceased:
        return DECEASED
    if a.is_deceased or b.is_deceased:
        return WIDOWED
    return ACTIVE


def slot_x(index: int, settings: LayoutSettings = DEFAULT_LAYOUT) -> float:
    """Left edge of the member in slot `index`, relative to its group."""
    return (
        index * settings.slot_width
        + (settings.slot_width - settings.member_width) / 2
        + settings.group_padding
    )


def anchor_x(index_a: int, index_b: int, settings: LayoutSettings = DEFAULT_LAYOUT) -> float:
    """
    Left edge of a union anchor between two slots.

    The anchor is centred between the two member boxes:
    (x1 + x2) / 2 + (member_width - anchor_width) / 2
    """
    return (slot_x(index_a, settings) + slot_x(index_b, settings)) / 2 + (
        settings.member_width - settings.anchor_width
    ) / 2


def build_layout_graph(
    people: Mapping[str, Person],
    relationships: Iterable[Relationship],
    highlighted_id: str | None = None,
    settings: LayoutSettings = DEFAULT_LAYOUT,
) -> LayoutGraph:
    """
    Build the node/edge payload for a family diagram.

    Creates:
    - one group container per marriage cluster (size >= 2), as wide as
      `slot_width` times the number of members
    - one person node per member, at a fixed slot inside its group
    - one union anchor per spouse pair (a remarriage chain A-B-C gets two)
    - a spouse edge per pair, styled by whether the partners are living
    - a person node for everyone without a spouse
    - lineage edges from each child's parents' union anchor, or from the
      parent directly when the co-parent is not a spouse

    Args:
        people: Person map keyed by id
        relationships: Parent and spouse relationships
        highlighted_id: Person to mark as highlighted
        settings: Diagram geometry

    Returns:
        A LayoutGraph with unpositioned top-level nodes
    """
    relationships = [
        r for r in relationships if r.source_id in people and r.target_id in people
    ]
    graph = LayoutGraph()
    edges: dict[tuple[str, str, str], LayoutEdge] = {}

    pairs = spouse_pairs(people, relationships)
    clusters = [c for c in find_marriage_clusters(people, relationships) if len(c) > 1]
    grouped: set[str] = set()
    variants: dict[tuple[str, str], str] = {}

    # 1. Group containers, member slots and union anchors
    for cluster in clusters:
        container = group_id(cluster)
        graph.nodes.append(
            GroupContainerNode(
                id=container,
                members=tuple(cluster),
                width=len(cluster) * settings.slot_width,
                height=settings.group_height,
            )
        )

        slots = {member_id: index for index, member_id in enumerate(cluster)}
        for member_id, index in slots.items():
            grouped.add(member_id)
            graph.nodes.append(
                PersonNode(
                    id=member_id,
                    person=people[member_id],
                    width=settings.member_width,
                    height=settings.member_width,
                    highlighted=member_id == highlighted_id,
                    parent=container,
                    position=Point(slot_x(index, settings), settings.member_top),
                )
            )

        for a, b in pairs:
            if a not in slots or b not in slots:
                continue
            variant = union_variant(people[a], people[b])
            variants[(a, b)] = variant
            graph.nodes.append(
                UnionAnchorNode(
                    id=union_id(a, b),
                    spouses=(a, b),
                    variant=variant,
                    width=settings.anchor_width,
                    height=settings.anchor_width,
                    parent=container,
                    position=Point(anchor_x(slots[a], slots[b], settings), settings.anchor_top),
                )
            )

            left, right = (a, b) if slots[a] < slots[b] else (b, a)
            edges[("spouse", a, b)] = LayoutEdge(
                id=spouse_edge_id(a, b),
                source=left,
                target=right,
                kind="spouse",
                weight=settings.spouse_weight,
                dashed=variant == DECEASED,
                opacity=0.5 if variant == DECEASED else 1.0,
                variant=variant,
                source_handle="right",
                target_handle="left",
            )

    # 2. Single people
    for person_id, person in people.items():
        if person_id not in grouped:
            graph.nodes.append(
                PersonNode(
                    id=person_id,
                    person=person,
                    width=settings.default_node_width,
                    height=settings.default_node_height,
                    highlighted=person_id == highlighted_id,
                )
            )

    # 3. Lineage edges, routed through the parents' union anchor
    parents_by_child: dict[str, list[str]] = {}
    for r in relationships:
        if r.kind == "parent":
            parents_by_child.setdefault(r.target_id, []).append(r.source_id)

    for r in relationships:
        if r.kind != "parent":
            continue
        parent_id, child_id = r.source_id, r.target_id

        source = parent_id
        faded = people[parent_id].is_deceased
        co_parents = sorted(set(parents_by_child[child_id]) - {parent_id})
        for other in co_parents:
            pair = tuple(sorted((parent_id, other)))
            if pair in variants:
                source = union_id(*pair)
                faded = variants[pair] == DECEASED
                break

        key = ("lineage", source, child_id)
        if key in edges:
            continue
        edges[key] = LayoutEdge(
            id=lineage_edge_id(source, child_id),
            source=source,
            target=child_id,
            kind="lineage",
            weight=settings.lineage_weight,
            dashed=faded,
            opacity=0.6 if faded else 1.0,
            animated=not faded,
            source_handle="bottom",
            target_handle="top",
        )

    graph.edges = list(edges.values())
    logger.debug(
        "Layout graph: %d groups, %d unions, %d nodes, %d edges",
        len(clusters),
        len(variants),
        len(graph.nodes),
        len(graph.edges),
    )
    return graph


def to_layout_digraph(graph: LayoutGraph) -> nx.DiGraph:
    """
    Top-level graph handed to the layered layout.

    Only group containers and single people are nodes (with `width` and
    `height`). Edges are lifted to the containers of their endpoints; edges
    inside one container are dropped and parallel edges keep the larger
    `weight`.
    """
    D = nx.DiGraph()
    top_level = {n.id: n.parent or n.id for n in graph.nodes}
    for n in graph.nodes:
        if n.parent is None:
            D.add_node(n.id, width=n.width, height=n.height)

    for e in graph.edges:
        source = top_level[e.source]
        target = top_level[e.target]
        if source == target:
            continue
        if D.has_edge(source, target):
            D[source][target]["weight"] = max(D[source][target]["weight"], e.weight)
        else:
            D.add_edge(source, target, weight=e.weight)
    return D


def to_payload(graph: LayoutGraph) -> dict:
    """JSON-ready node/edge lists for a diagram renderer."""
    nodes = []
    for n in graph.nodes:
        item = {
            "id": n.id,
            "width": n.width,
            "height": n.height,
            "position": {"x": n.position.x, "y": n.position.y},
            "parent": n.parent,
        }
        if isinstance(n, PersonNode):
            item.update(
                type="person",
                name=n.person.display_name,
                gender=n.gender,
                deceased=n.deceased,
                highlighted=n.highlighted,
            )
        elif isinstance(n, UnionAnchorNode):
            item.update(type="union", spouses=list(n.spouses), variant=n.variant)
        else:
            item.update(type="group", members=list(n.members))
        nodes.append(item)

    edges = [
        {
            "id": e.id,
            "source": e.source,
            "target": e.target,
            "kind": e.kind,
            "weight": e.weight,
            "dashed": e.dashed,
            "opacity": e.opacity,
            "animated": e.animated,
            "variant": e.variant,
            "sourceHandle": e.source_handle,
            "targetHandle": e.target_handle,
        }
        for e in graph.edges
    ]
    return {"nodes": nodes, "edges": edges}
