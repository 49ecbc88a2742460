"""Graph validation for wedding guest data."""

from collections import Counter
from collections.abc import Sequence

import networkx as nx

from kinship_graph.models import ANCHOR_ROLES, Person, Relationship


def validate_graph(people: Sequence[Person], relationships: Sequence[Relationship]) -> list[str]:
    """
    Validate the graph for:
    - Cycles in parent-child relationships
    - Relationships from a person to themselves
    - Relationships referencing people who do not exist
    - Missing or duplicated groom/bride

    None of these stop role inference or path finding; they are reported so the
    user can fix the data. Returns a list of warning messages.
    """
    warnings: list[str] = []
    names = {p.id: p.name for p in people}

    # Create a graph with only parent edges for cycle detection
    parent_graph = nx.DiGraph(
        [(r.source, r.target) for r in relationships if r.type == "parent" and r.source != r.target]
    )

    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_names = [names.get(edge[0], edge[0]) for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_names}")
    except nx.NetworkXNoCycle:
        pass  # No cycle found, which is good

    for r in relationships:
        if r.source == r.target:
            warnings.append(f"Self-referential {r.type} relationship on {names.get(r.source, r.source)}")
        missing = [pid for pid in (r.source, r.target) if pid not in names]
        if missing:
            warnings.append(f"{r.type} relationship references unknown people: {missing}")

    role_counts = Counter(p.role for p in people)
    for role in ANCHOR_ROLES:
        if role_counts[role] == 0:
            warnings.append(f"No {role} assigned; {role}-side roles cannot be inferred")
        elif role_counts[role] > 1:
            holders = [p.name for p in people if p.role == role]
            warnings.append(f"More than one {role} ({', '.join(holders)}); only {holders[0]} is used")

    return warnings
