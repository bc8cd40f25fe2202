"""Visualization of the diagram payload with Graphviz."""

from pathlib import Path
from typing import Mapping

import pydot

from kintree.dates import age_in_years, parse_date_string
from kintree.layout import (
    GroupContainerNode,
    LayoutEdge,
    LayoutGraph,
    PersonNode,
    UnionAnchorNode,
    spouse_edge_id,
)

SPOUSE_COLORS = {
    "active": "#F59E0B",
    "widowed": "#EC4899",
    "deceased": "#78716C",
}
LINEAGE_COLOR = "#8D6E63"


def _person_label(node: PersonNode, title: str | None) -> str:
    person = node.person
    birth = parse_date_string(person.birth_date)
    death = parse_date_string(person.death_date)
    lines = [person.display_name]
    if title:
        lines.append(title)
    if birth or death:
        years = f"{birth[:4] if birth else '?'}-{death[:4] if death else ''}"
        age = age_in_years(birth, death)
        if age is not None:
            years += f" ({age})"
        lines.append(years)
    return "\n".join(lines)


def _person_node(node: PersonNode, title: str | None) -> pydot.Node:
    # Color by gender
    if node.gender == "male":
        fillcolor = "lightblue"
    elif node.gender == "female":
        fillcolor = "lightpink"
    else:
        fillcolor = "lightgray"

    style = "rounded,filled"
    if node.deceased:
        style += ",dashed"

    return pydot.Node(
        node.id,
        label=_person_label(node, title),
        shape="box",
        style=style,
        fillcolor=fillcolor,
        penwidth="3" if node.highlighted else "1",
        fontsize="10",
    )


def _edge_style(edge: LayoutEdge) -> dict[str, str]:
    if edge.kind == "spouse":
        color = SPOUSE_COLORS.get(edge.variant or "active", SPOUSE_COLORS["active"])
    else:
        color = LINEAGE_COLOR
    return {
        "color": color,
        "penwidth": "2",
        "style": "dashed" if edge.dashed else "solid",
    }


def to_dot(graph: LayoutGraph, titles: Mapping[str, str] | None = None) -> pydot.Dot:
    """
    Convert the diagram payload into a Graphviz hierarchical graph.

    Creates a proper genealogical chart where:
    - Each marriage group is a cluster with its members on one rank
    - Union anchors are small points between the two partners
    - Lineage edges run from union anchors (or single parents) to children
    - Dashed edges mark deceased parents or couples

    Args:
        graph: Payload from build_layout_graph
        titles: Optional kinship titles keyed by person id, added to labels
    """
    titles = titles or {}

    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("splines", "ortho")
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    spouse_edges = {e.id: e for e in graph.edges if e.kind == "spouse"}
    clusters: dict[str, pydot.Cluster] = {}

    for node in graph.nodes:
        if isinstance(node, GroupContainerNode):
            cluster = pydot.Cluster(node.id, label="", style="rounded", color="lightgray")
            clusters[node.id] = cluster
            P.add_subgraph(cluster)

    for node in graph.nodes:
        if isinstance(node, PersonNode):
            target = clusters[node.parent] if node.parent else P
            target.add_node(_person_node(node, titles.get(node.id)))

    # Each couple sits on one rank with its anchor between the partners
    for i, node in enumerate(graph.unions):
        cluster = clusters[node.parent]
        cluster.add_node(pydot.Node(node.id, shape="point", width="0.1", height="0.1", label=""))

        a, b = node.spouses
        edge = spouse_edges[spouse_edge_id(a, b)]
        style = _edge_style(edge)
        couple = pydot.Subgraph(f"couple_{i}", rank="same")
        couple.add_node(pydot.Node(edge.source))
        couple.add_node(pydot.Node(node.id))
        couple.add_node(pydot.Node(edge.target))
        couple.add_edge(pydot.Edge(edge.source, node.id, dir="none", **style))
        couple.add_edge(pydot.Edge(node.id, edge.target, dir="none", **style))
        cluster.add_subgraph(couple)

    for edge in graph.edges:
        if edge.kind == "lineage":
            P.add_edge(pydot.Edge(edge.source, edge.target, **_edge_style(edge)))

    return P


def render_diagram(
    graph: LayoutGraph,
    output_path: Path | None = None,
    titles: Mapping[str, str] | None = None,
):
    """
    Render the family diagram with Graphviz.

    Args:
        graph: Payload from build_layout_graph
        output_path: Path to save the output (png, svg, pdf or dot). If None,
            displays interactively.
        titles: Optional kinship titles keyed by person id
    """
    P = to_dot(graph, titles)

    if output_path:
        # Determine format from extension
        ext = output_path.suffix.lower().lstrip(".")
        if ext == "dot":
            P.write(str(output_path), format="raw", encoding="utf-8")
        else:
            if ext not in ("png", "svg", "pdf"):
                ext = "png"
            P.write(str(output_path), format=ext)
        return output_path

    # Save to temporary file and display
    import tempfile

    import matplotlib.image as mpimg
    import matplotlib.pyplot as plt

    with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
        P.write(f.name, format="png")
        img = mpimg.imread(f.name)
        plt.figure(figsize=(20, 16))
        plt.imshow(img)
        plt.axis("off")
        plt.tight_layout()
        plt.show()
    return None
