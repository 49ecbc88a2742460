"""Wedding guest relationship graph: inferred roles and connection paths."""

from kinship_graph.models import PathResult, Person, Relationship
from kinship_graph.store import FamilyGraph, Snapshot

__all__ = ["FamilyGraph", "PathResult", "Person", "Relationship", "Snapshot"]
