"""Kinship titles and family diagram layout over parent/spouse relationships."""

from kintree.clusters import find_marriage_clusters
from kintree.generations import compute_generations
from kintree.kinship import describe_relationship, resolve, resolve_all
from kintree.layout import build_layout_graph
from kintree.models import FamilySnapshot, Person, Relationship

__all__ = [
    "FamilySnapshot",
    "Person",
    "Relationship",
    "build_layout_graph",
    "compute_generations",
    "describe_relationship",
    "find_marriage_clusters",
    "resolve",
    "resolve_all",
]
