"""Generation numbers for grouping members by depth in the family."""

import logging
from typing import Iterable, Mapping

from kintree.models import Person, Relationship

logger = logging.getLogger(__name__)


def compute_generations(
    people: Mapping[str, Person],
    relationships: Iterable[Relationship],
    max_passes: int | None = None,
) -> dict[str, int]:
    """
    Assign every person a generation number (1 = oldest known ancestors).

    People without a recorded parent start at generation 1. Each pass then
    pushes every child to at least one below its parent and lifts both
    spouses of a couple to the deeper of their two values. Passes repeat
    until nothing changes.

    Cyclic parent data would keep pushing values down forever, so the number
    of passes is bounded (default ``2 * len(people) + 1``). When the bound is
    reached the current values are returned.

    Args:
        people: Person map keyed by id
        relationships: Parent and spouse relationships
        max_passes: Override for the pass bound

    Returns:
        A mapping of person id to generation number (>= 1)
    """
    rels = [
        r for r in relationships if r.source_id in people and r.target_id in people
    ]
    parent_edges = [(r.source_id, r.target_id) for r in rels if r.kind == "parent"]
    spouse_edges = [(r.source_id, r.target_id) for r in rels if r.kind == "spouse"]

    generation = {person_id: 1 for person_id in people}

    if max_passes is None:
        max_passes = 2 * len(people) + 1

    for _ in range(max_passes):
        changed = False

        # Propagate parent -> child
        for parent, child in parent_edges:
            if generation[parent] + 1 > generation[child]:
                generation[child] = generation[parent] + 1
                changed = True

        # Sync spouses (take max)
        for a, b in spouse_edges:
            deeper = max(generation[a], generation[b])
            if generation[a] != deeper or generation[b] != deeper:
                generation[a] = generation[b] = deeper
                changed = True

        if not changed:
            break
    else:
        logger.warning(
            "Generation numbers did not settle after %d passes; parent data may contain a cycle",
            max_passes,
        )

    return generation


def group_by_generation(generations: Mapping[str, int]) -> dict[int, list[str]]:
    """Group person ids by generation number, both in ascending order."""
    groups: dict[int, list[str]] = {}
    for person_id, gen in generations.items():
        groups.setdefault(gen, []).append(person_id)
    return {gen: sorted(groups[gen]) for gen in sorted(groups)}
