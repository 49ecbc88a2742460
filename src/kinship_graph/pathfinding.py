"""Shortest connection paths between two people, described in plain English."""

from collections.abc import Sequence

import networkx as nx

from kinship_graph.graph import build_graph
from kinship_graph.models import PathResult, Person, Relationship

ARROW = " -> "

SPOUSE_TERMS = {"male": "husband", "female": "wife"}
PARENT_TERMS = {"male": "father", "female": "mother"}
CHILD_TERMS = {"male": "son", "female": "daughter"}


def find_path(
    people: Sequence[Person],
    relationships: Sequence[Relationship],
    start_id: str,
    end_id: str,
) -> PathResult | None:
    """
    Find the first shortest path between two people.

    The graph is searched breadth-first and undirected, with neighbours expanded in
    relationship insertion order; among equally short paths the first one discovered
    is returned. Returns None when either id is unknown or the two are not connected.
    """
    if start_id == end_id:
        return PathResult(path=[start_id], description="Self")

    G = build_graph(people, relationships)
    if start_id not in G or end_id not in G:
        return None

    # BFS parent pointers from the start; the first discovery of a node fixes its path
    predecessors: dict[str, str] = {}
    for parent, child in nx.bfs_edges(G, start_id):
        predecessors[child] = parent
        if child == end_id:
            break
    else:
        return None

    path = [end_id]
    while path[-1] != start_id:
        path.append(predecessors[path[-1]])
    path.reverse()

    return PathResult(path=path, description=describe_path(path, people, relationships))


def _hop_clause(person: Person, rel: Relationship) -> str:
    if rel.type == "spouse":
        term = SPOUSE_TERMS.get(person.gender, "spouse")
    elif rel.type == "friend":
        term = "friend"
    elif rel.source == person.id:
        term = PARENT_TERMS.get(person.gender, "parent")
    else:
        term = CHILD_TERMS.get(person.gender, "child")
    return f"{person.name} is {term} of"


def describe_path(
    path: Sequence[str], people: Sequence[Person], relationships: Sequence[Relationship]
) -> str:
    """
    Render a path as a chain of clauses, e.g. "Alice is mother of -> Bob is husband of -> Carol".

    Each hop uses the first relationship (in insertion order) joining the two people,
    read from the point of view of the earlier person on the path.
    """
    by_id = {p.id: p for p in people}
    clauses = []
    for a, b in zip(path, path[1:]):
        person = by_id.get(a)
        rel = next((r for r in relationships if r.connects(a, b)), None)
        if person is None or b not in by_id or rel is None:
            continue
        clauses.append(_hop_clause(person, rel))

    last = by_id.get(path[-1]) if path else None
    return f"{ARROW.join(clauses)} {last.name if last else ''}".strip()
