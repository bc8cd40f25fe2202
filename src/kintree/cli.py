"""
Command line entry point.

1) Load a family snapshot (JSON store export or GEDCOM file).
2) Print kinship titles relative to a root person, or between two people.
3) Print generation groups.
4) Build the diagram payload, optionally positioned by Graphviz.
5) Render the diagram.
"""

import argparse
import json
import logging
from pathlib import Path
import sys

from kintree.gedcom import load_gedcom
from kintree.generations import compute_generations, group_by_generation
from kintree.kinship import describe_relationship, resolve_all
from kintree.layout import build_layout_graph, to_payload
from kintree.models import FamilySnapshot

logger = logging.getLogger(__name__)


def load_snapshot(path: Path) -> FamilySnapshot:
    """Read a snapshot from a .ged file or a JSON store export."""
    if path.suffix.lower() == ".ged":
        return load_gedcom(path)
    return FamilySnapshot.from_dict(json.loads(path.read_text(encoding="utf-8")))


# ============================================================================
# Commands
# ============================================================================


def cmd_titles(snapshot: FamilySnapshot, args: argparse.Namespace) -> int:
    root_id = args.root or snapshot.root_id
    if not root_id or root_id not in snapshot.people:
        print("No root member set; use --root", file=sys.stderr)
        return 2

    found = resolve_all(root_id, snapshot.people, snapshot.relationships)
    for person_id in sorted(snapshot.people):
        person = snapshot.people[person_id]
        print(f"{person_id}\t{person.display_name}\t{found.get(person_id, '')}")
    return 0


def cmd_title(snapshot: FamilySnapshot, args: argparse.Namespace) -> int:
    print(describe_relationship(args.a, args.b, snapshot.people, snapshot.relationships))
    return 0


def cmd_generations(snapshot: FamilySnapshot, args: argparse.Namespace) -> int:
    generations = compute_generations(snapshot.people, snapshot.relationships)
    for gen, members in group_by_generation(generations).items():
        names = ", ".join(snapshot.people[m].display_name for m in members)
        print(f"Generation {gen}: {names}")
    return 0


def cmd_layout(snapshot: FamilySnapshot, args: argparse.Namespace) -> int:
    graph = build_layout_graph(snapshot.people, snapshot.relationships, args.highlight)
    if args.positions:
        from kintree.positioning import apply_layered_layout

        graph = apply_layered_layout(graph)
    print(json.dumps(to_payload(graph), ensure_ascii=False, indent=2))
    return 0


def cmd_plot(snapshot: FamilySnapshot, args: argparse.Namespace) -> int:
    from kintree.plotting import render_diagram

    graph = build_layout_graph(snapshot.people, snapshot.relationships, args.highlight)
    titles = None
    root_id = args.root or snapshot.root_id
    if root_id:
        titles = resolve_all(root_id, snapshot.people, snapshot.relationships)

    print(f"Plotting {len(snapshot.people)} people")
    render_diagram(graph, args.output, titles)
    if args.output:
        print(f"Graph saved to {args.output}")
    return 0


# ============================================================================
# Main
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kintree", description="Kinship titles and family diagrams"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("titles", help="titles of everyone relative to the root member")
    p.add_argument("file", type=Path)
    p.add_argument("--root", help="root member id (defaults to the snapshot's)")
    p.set_defaults(func=cmd_titles)

    p = sub.add_parser("title", help="what member A calls member B")
    p.add_argument("file", type=Path)
    p.add_argument("a")
    p.add_argument("b")
    p.set_defaults(func=cmd_title)

    p = sub.add_parser("generations", help="members grouped by generation")
    p.add_argument("file", type=Path)
    p.set_defaults(func=cmd_generations)

    p = sub.add_parser("layout", help="diagram nodes and edges as JSON")
    p.add_argument("file", type=Path)
    p.add_argument("--positions", action="store_true", help="position with Graphviz dot")
    p.add_argument("--highlight", help="member id to highlight")
    p.set_defaults(func=cmd_layout)

    p = sub.add_parser("plot", help="render the family diagram")
    p.add_argument("file", type=Path)
    p.add_argument("-o", "--output", type=Path, help="png, svg, pdf or dot file")
    p.add_argument("--root", help="label members with titles relative to this member")
    p.add_argument("--highlight", help="member id to highlight")
    p.set_defaults(func=cmd_plot)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        snapshot = load_snapshot(args.file)
    except (OSError, ValueError, KeyError) as e:
        print(f"Could not read {args.file}: {e}", file=sys.stderr)
        return 1

    logger.debug(
        "Loaded %d people and %d relationships",
        len(snapshot.people),
        len(snapshot.relationships),
    )
    return args.func(snapshot, args)


if __name__ == "__main__":
    sys.exit(main())
