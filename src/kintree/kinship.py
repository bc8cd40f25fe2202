"""
Kinship titles between two people.

The root person's relatives are found with a breadth-first search over the
typed relationship graph. The shortest path is described by the sequence of
edge kinds walked (``("father", "son")`` is a brother or half-brother) and the
people passed on the way. A table of step patterns maps each path shape to a
title; some titles also compare birth dates of people on the path.
"""

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, Mapping

import networkx as nx

from kintree import titles
from kintree.dates import birth_order_key, is_older
from kintree.models import Person, Relationship
from kintree.relations import (
    CHILD_KINDS,
    PARENT_KINDS,
    build_relation_graph,
    children_of,
    edge_kind,
    parents_of,
)
from kintree.settings import DISTANT_RELATIVE_DEPTH, MAX_KINSHIP_DEPTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KinshipPath:
    """Shortest path from the root: edge kinds walked and the people reached."""

    steps: tuple[str, ...]
    via: tuple[str, ...]  # person ids after the root; the last one is the target


@dataclass(frozen=True)
class _Context:
    path: KinshipPath
    root: Person
    target: Person
    people: Mapping[str, Person]
    graph: nx.MultiDiGraph

    def person_at(self, index: int) -> Person:
        return self.people[self.path.via[index]]


# ============================================================================
# Path search
# ============================================================================


def _bfs_predecessors(G: nx.MultiDiGraph, root_id: str, max_depth: int) -> dict[str, str]:
    # Neighbors are expanded in sorted id order so that ties between equally
    # short paths do not depend on the order of the relationship list.
    preds: dict[str, str] = {}
    for parent, child in nx.bfs_edges(G, root_id, depth_limit=max_depth, sort_neighbors=sorted):
        preds[child] = parent
    return preds


def _path_to(G: nx.MultiDiGraph, preds: dict[str, str], root_id: str, target_id: str) -> KinshipPath:
    via = [target_id]
    while via[-1] != root_id:
        via.append(preds[via[-1]])
    via.reverse()
    steps = tuple(edge_kind(G, u, v) for u, v in zip(via, via[1:]))
    return KinshipPath(steps=steps, via=tuple(via[1:]))


def kinship_path(
    root_id: str | None,
    target_id: str | None,
    people: Mapping[str, Person],
    relationships: Iterable[Relationship],
    max_depth: int = MAX_KINSHIP_DEPTH,
) -> KinshipPath | None:
    """Shortest typed path from root to target, or None if out of reach."""
    if not root_id or not target_id or root_id not in people or target_id not in people:
        return None
    if root_id == target_id:
        return KinshipPath(steps=(), via=())

    G = build_relation_graph(people, relationships)
    preds = _bfs_predecessors(G, root_id, max_depth)
    if target_id not in preds:
        return None
    return _path_to(G, preds, root_id, target_id)


# ============================================================================
# Sibling ranking
# ============================================================================


def _siblings_of(G: nx.MultiDiGraph, person_id: str) -> set[str]:
    """All children of the person's parents, the person included."""
    siblings = {person_id}
    for parent in parents_of(G, person_id):
        siblings.update(children_of(G, parent))
    return siblings


def _sibling_title(ctx: _Context, gender: str, older: bool) -> str:
    """
    Sibling title with a birth-order rank once the parents have more than two
    children. The rank comes from the birth order of all siblings and the
    suffix from the target's gender and age relative to the root.
    """
    if gender == "male":
        plain = titles.OLDER_BROTHER if older else titles.YOUNGER_BROTHER
        suffix = titles.OLDER_BROTHER_SUFFIX if older else titles.YOUNGER_BROTHER_SUFFIX
    else:
        plain = titles.OLDER_SISTER if older else titles.YOUNGER_SISTER
        suffix = titles.OLDER_SISTER_SUFFIX if older else titles.YOUNGER_SISTER_SUFFIX

    peers = [ctx.people[i] for i in _siblings_of(ctx.graph, ctx.root.id)]
    peers.sort(key=lambda p: (birth_order_key(p), p.id))
    ranked = [p.id for p in peers]
    if ctx.target.id not in ranked or len(ranked) <= 2:
        return plain

    index = ranked.index(ctx.target.id)
    if index == 0:
        return f"{titles.RANK_PREFIXES[0]}{suffix}"
    if index == len(ranked) - 1:
        return f"{titles.YOUNGEST_PREFIX}{suffix}"
    if index < len(titles.RANK_PREFIXES):
        return f"{titles.RANK_PREFIXES[index]}{suffix}"
    return f"{index + 1}{suffix}"


# ============================================================================
# Path classification
# ============================================================================

FATHER = frozenset({"father"})
MOTHER = frozenset({"mother"})
SON = frozenset({"son"})
DAUGHTER = frozenset({"daughter"})
PARENT = PARENT_KINDS
CHILD = CHILD_KINDS
HUSBAND = frozenset({"husband"})
WIFE = frozenset({"wife"})
WIFE_OR_SPOUSE = frozenset({"wife", "spouse"})
HUSBAND_OR_SPOUSE = frozenset({"husband", "spouse"})
ANY_SPOUSE = frozenset({"husband", "wife", "spouse"})

# Paths whose title needs no further inspection
EXACT_TITLES: dict[tuple[str, ...], str] = {
    ("father",): titles.FATHER,
    ("mother",): titles.MOTHER,
    ("son",): titles.SON,
    ("daughter",): titles.DAUGHTER,
    ("husband",): titles.HUSBAND,
    ("wife",): titles.WIFE,
    ("spouse",): titles.SPOUSE,
    ("father", "father"): titles.PATERNAL_GRANDFATHER,
    ("father", "mother"): titles.PATERNAL_GRANDMOTHER,
    ("mother", "father"): titles.MATERNAL_GRANDFATHER,
    ("mother", "mother"): titles.MATERNAL_GRANDMOTHER,
    ("father", "father", "father"): titles.GREAT_GRANDFATHER,
    ("father", "father", "mother"): titles.GREAT_GRANDMOTHER,
    ("father", "mother", "father"): titles.GREAT_GRANDFATHER_MATERNAL,
    ("father", "mother", "mother"): titles.GREAT_GRANDMOTHER_MATERNAL,
    ("son", "son"): titles.GRANDSON,
    ("son", "daughter"): titles.GRANDDAUGHTER,
    ("daughter", "son"): titles.DAUGHTERS_SON,
    ("daughter", "daughter"): titles.DAUGHTERS_DAUGHTER,
    ("son", "son", "son"): titles.GREAT_GRANDSON,
    ("son", "son", "daughter"): titles.GREAT_GRANDDAUGHTER,
    ("son", "wife"): titles.SONS_WIFE,
    ("son", "spouse"): titles.SONS_WIFE,
    ("daughter", "husband"): titles.DAUGHTERS_HUSBAND,
    ("daughter", "spouse"): titles.DAUGHTERS_HUSBAND,
}


def _sibling_spouse(ctx: _Context) -> str:
    sibling_older = is_older(ctx.person_at(1), ctx.root)
    if ctx.path.steps[1] == "son":
        return titles.OLDER_BROTHERS_WIFE if sibling_older else titles.YOUNGER_BROTHERS_WIFE
    return titles.OLDER_SISTERS_HUSBAND if sibling_older else titles.YOUNGER_SISTERS_HUSBAND


def _sibling(ctx: _Context) -> str:
    gender = "male" if ctx.path.steps[1] == "son" else "female"
    return _sibling_title(ctx, gender, is_older(ctx.target, ctx.root))


def _nephew_niece(ctx: _Context) -> str:
    male = ctx.target.gender == "male"
    if ctx.path.steps[1] == "son":
        return titles.BROTHERS_SON if male else titles.BROTHERS_DAUGHTER
    return titles.SISTERS_SON if male else titles.SISTERS_DAUGHTER


def _uncle_aunt(ctx: _Context) -> str:
    paternal = ctx.path.steps[0] == "father"
    if ctx.path.steps[2] == "son":
        if not paternal:
            return titles.MOTHERS_BROTHER
        # Father's brothers split by age relative to the father
        if is_older(ctx.target, ctx.person_at(0)):
            return titles.FATHERS_OLDER_BROTHER
        return titles.FATHERS_YOUNGER_BROTHER
    return titles.FATHERS_SISTER if paternal else titles.MOTHERS_SISTER


def _uncle_aunt_spouse(ctx: _Context) -> str:
    paternal = ctx.path.steps[0] == "father"
    if ctx.path.steps[2] == "son":
        return titles.FATHERS_BROTHERS_WIFE if paternal else titles.MOTHERS_BROTHERS_WIFE
    return titles.FATHERS_SISTERS_HUSBAND if paternal else titles.MOTHERS_SISTERS_HUSBAND


def _cousin_prefix(steps: tuple[str, ...]) -> str:
    # Only children of the father's brothers share the family line
    if steps[0] == "father" and steps[2] == "son":
        return titles.PATERNAL_LINE_PREFIX
    return titles.OTHER_LINE_PREFIX


def _cousin(ctx: _Context) -> str:
    older = is_older(ctx.target, ctx.root)
    if ctx.target.gender == "male":
        suffix = titles.OLDER_MALE_COUSIN if older else titles.YOUNGER_MALE_COUSIN
    else:
        suffix = titles.OLDER_FEMALE_COUSIN if older else titles.YOUNGER_FEMALE_COUSIN
    return f"{_cousin_prefix(ctx.path.steps)}{suffix}"


def _cousin_spouse(ctx: _Context) -> str:
    cousin_older = is_older(ctx.person_at(3), ctx.root)
    if ctx.target.gender == "male":
        suffix = titles.OLDER_COUSINS_HUSBAND if cousin_older else titles.YOUNGER_COUSINS_HUSBAND
    else:
        suffix = titles.OLDER_COUSINS_WIFE if cousin_older else titles.YOUNGER_COUSINS_WIFE
    return f"{_cousin_prefix(ctx.path.steps)}{suffix}"


def _cousin_child(ctx: _Context) -> str:
    child_male = ctx.target.gender == "male"
    if ctx.path.steps[3] == "son":
        base = titles.MALE_COUSINS_SON if child_male else titles.MALE_COUSINS_DAUGHTER
    else:
        base = titles.FEMALE_COUSINS_SON if child_male else titles.FEMALE_COUSINS_DAUGHTER
    return f"{_cousin_prefix(ctx.path.steps)}{base}"


def _parent_in_law(ctx: _Context) -> str:
    through_husband = ctx.path.steps[0] == "husband"
    if ctx.path.steps[1] == "father":
        return titles.HUSBANDS_FATHER if through_husband else titles.WIFES_FATHER
    return titles.HUSBANDS_MOTHER if through_husband else titles.WIFES_MOTHER


def _spouses_brother(ctx: _Context) -> str:
    spouse_title = EXACT_TITLES[ctx.path.steps[:1]]
    return titles.SPOUSES_BROTHER.format(spouse=spouse_title)


# Checked in order; the first pattern with a matching step set at every
# position decides the title.
PATTERN_RULES: list[tuple[tuple[frozenset[str], ...], Callable[[_Context], str]]] = [
    ((PARENT, SON, WIFE_OR_SPOUSE), _sibling_spouse),
    ((PARENT, DAUGHTER, HUSBAND_OR_SPOUSE), _sibling_spouse),
    ((PARENT, CHILD), _sibling),
    ((PARENT, CHILD, CHILD), _nephew_niece),
    ((PARENT, PARENT, CHILD), _uncle_aunt),
    ((PARENT, PARENT, SON, WIFE_OR_SPOUSE), _uncle_aunt_spouse),
    ((PARENT, PARENT, DAUGHTER, HUSBAND_OR_SPOUSE), _uncle_aunt_spouse),
    ((PARENT, PARENT, CHILD, CHILD), _cousin),
    ((PARENT, PARENT, CHILD, CHILD, ANY_SPOUSE), _cousin_spouse),
    ((PARENT, PARENT, CHILD, CHILD, CHILD), _cousin_child),
    ((ANY_SPOUSE, PARENT), _parent_in_law),
    ((ANY_SPOUSE, PARENT, SON), _spouses_brother),
]


def _matches(pattern: tuple[frozenset[str], ...], steps: tuple[str, ...]) -> bool:
    return len(pattern) == len(steps) and all(s in allowed for allowed, s in zip(pattern, steps))


def classify_path(
    path: KinshipPath,
    root_id: str,
    people: Mapping[str, Person],
    graph: nx.MultiDiGraph,
) -> str:
    """Map a root-to-target path onto a kinship title."""
    steps = path.steps
    if not steps:
        return titles.SELF

    title = EXACT_TITLES.get(steps)
    if title is not None:
        return title

    # Four or more generations straight up the father's line
    if len(steps) >= 4 and all(s == "father" for s in steps[:4]):
        return titles.PATRILINEAL_ANCESTOR

    ctx = _Context(
        path=path,
        root=people[root_id],
        target=people[path.via[-1]],
        people=people,
        graph=graph,
    )
    for pattern, rule in PATTERN_RULES:
        if _matches(pattern, steps):
            return rule(ctx)

    if len(steps) >= DISTANT_RELATIVE_DEPTH:
        return titles.DISTANT_RELATIVE
    return titles.RELATIVE


# ============================================================================
# Public entry points
# ============================================================================


def resolve(
    root_id: str | None,
    target_id: str | None,
    people: Mapping[str, Person],
    relationships: Iterable[Relationship],
    max_depth: int = MAX_KINSHIP_DEPTH,
) -> str:
    """
    Title of `target_id` as seen from `root_id`.

    Returns an empty string when either id is unset or unknown, or when no
    path exists within `max_depth` steps. Never raises for malformed data.
    """
    if not root_id or not target_id or root_id not in people or target_id not in people:
        return ""
    if root_id == target_id:
        return titles.SELF

    G = build_relation_graph(people, relationships)
    preds = _bfs_predecessors(G, root_id, max_depth)
    if target_id not in preds:
        return ""
    return classify_path(_path_to(G, preds, root_id, target_id), root_id, people, G)


def resolve_all(
    root_id: str | None,
    people: Mapping[str, Person],
    relationships: Iterable[Relationship],
    max_depth: int = MAX_KINSHIP_DEPTH,
) -> dict[str, str]:
    """
    Titles of everyone reachable from `root_id`, from a single search.

    Produces the same titles as calling resolve() per person. People out of
    reach are omitted; an unknown root yields an empty mapping.
    """
    if not root_id or root_id not in people:
        return {}

    G = build_relation_graph(people, relationships)
    preds = _bfs_predecessors(G, root_id, max_depth)
    result = {root_id: titles.SELF}
    for target_id in preds:
        path = _path_to(G, preds, root_id, target_id)
        result[target_id] = classify_path(path, root_id, people, G)

    logger.debug("Resolved %d titles from root %s", len(result), root_id)
    return result


def describe_relationship(
    person_a: str | None,
    person_b: str | None,
    people: Mapping[str, Person],
    relationships: Iterable[Relationship],
) -> str:
    """What `person_a` calls `person_b`, or NO_RELATION when unrelated."""
    return resolve(person_a, person_b, people, relationships) or titles.NO_RELATION
