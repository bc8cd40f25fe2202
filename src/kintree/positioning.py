"""Layered (Graphviz dot) positioning of the diagram payload."""

from dataclasses import replace
import logging

import networkx as nx

from kintree.layout import LayoutGraph, Point, to_layout_digraph
from kintree.settings import DEFAULT_LAYOUT, LayoutSettings

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72


def layered_positions(
    graph: LayoutGraph, settings: LayoutSettings = DEFAULT_LAYOUT, prog: str = "dot"
) -> dict[str, tuple[float, float]]:
    """
    Run Graphviz on the top-level graph and return node centers.

    Node sizes are given to Graphviz in inches at 72 pixels per inch, so the
    returned coordinates are in pixels. Graphviz puts y = 0 at the bottom;
    the result is flipped so that y grows downward (ancestors on top).
    """
    D = to_layout_digraph(graph)
    if D.number_of_nodes() == 0:
        return {}

    # Graphviz attributes are strings in inches
    G = nx.DiGraph()
    G.graph["graph"] = {
        "rankdir": "TB",
        "nodesep": str(settings.nodesep / POINTS_PER_INCH),
        "ranksep": str(settings.ranksep / POINTS_PER_INCH),
    }
    for node, data in D.nodes(data=True):
        G.add_node(
            node,
            shape="box",
            fixedsize="true",
            width=str(data["width"] / POINTS_PER_INCH),
            height=str(data["height"] / POINTS_PER_INCH),
        )
    for u, v, data in D.edges(data=True):
        G.add_edge(u, v, weight=str(data["weight"]))

    raw = nx.nx_pydot.pydot_layout(G, prog=prog)
    top = max(y for _, y in raw.values())
    logger.debug("Graphviz placed %d top-level nodes", len(raw))
    return {node: (x, top - y) for node, (x, y) in raw.items()}


def apply_layered_layout(
    graph: LayoutGraph, settings: LayoutSettings = DEFAULT_LAYOUT, prog: str = "dot"
) -> LayoutGraph:
    """
    Position top-level nodes (groups and single people) with a layered layout.

    Each top-level node gets its top-left corner from the layout center.
    Nodes inside a group keep their positions relative to the group.
    """
    centers = layered_positions(graph, settings, prog)

    nodes = []
    for n in graph.nodes:
        if n.parent is None and n.id in centers:
            cx, cy = centers[n.id]
            n = replace(n, position=Point(cx - n.width / 2, cy - n.height / 2))
        nodes.append(n)
    return LayoutGraph(nodes=nodes, edges=list(graph.edges))
