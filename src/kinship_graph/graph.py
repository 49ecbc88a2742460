"""NetworkX graph building and kinship predicates."""

from collections.abc import Iterable, Sequence

import networkx as nx

from kinship_graph.models import Person, Relationship


def build_graph(people: Iterable[Person], relationships: Iterable[Relationship]) -> nx.Graph:
    """
    Build an undirected NetworkX graph for traversal.

    Every relationship becomes an edge regardless of its type; direction is only
    meaningful to the kinship predicates below, which read the relationship list.
    Nodes are added in person order and edges in relationship order, so neighbour
    iteration follows insertion order. Relationships pointing at unknown ids are skipped.
    """
    G = nx.Graph()

    for p in people:
        G.add_node(p.id, person_name=p.name, gender=p.gender, role=p.role)

    for r in relationships:
        if r.source not in G or r.target not in G:
            continue
        # First relationship between a pair wins; later ones of other types keep the edge
        if not G.has_edge(r.source, r.target):
            G.add_edge(r.source, r.target, relationship_type=r.type)

    return G


def parents_of(person_id: str, relationships: Iterable[Relationship]) -> list[str]:
    """Ids that are the `parent` source of person_id, in relationship order."""
    return [r.source for r in relationships if r.type == "parent" and r.target == person_id]


def children_of(person_id: str, relationships: Iterable[Relationship]) -> list[str]:
    return [r.target for r in relationships if r.type == "parent" and r.source == person_id]


def is_parent_of(parent_id: str, child_id: str, relationships: Iterable[Relationship]) -> bool:
    return any(
        r.type == "parent" and r.source == parent_id and r.target == child_id for r in relationships
    )


def are_spouses(a: str, b: str, relationships: Iterable[Relationship]) -> bool:
    return any(r.type == "spouse" and r.connects(a, b) for r in relationships)


def are_siblings(a: str, b: str, relationships: Sequence[Relationship]) -> bool:
    """Two people are siblings when they share at least one parent."""
    return bool(set(parents_of(a, relationships)) & set(parents_of(b, relationships)))


def siblings_of(person_id: str, relationships: Sequence[Relationship]) -> list[str]:
    """
    Everyone sharing a parent with person_id, excluding person_id itself.

    Order follows the parents' relationship order, then each parent's children in
    relationship order, with duplicates removed.
    """
    siblings: dict[str, None] = {}
    for parent_id in parents_of(person_id, relationships):
        for child_id in children_of(parent_id, relationships):
            if child_id != person_id:
                siblings.setdefault(child_id)
    return list(siblings)
