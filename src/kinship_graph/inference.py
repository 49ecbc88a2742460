"""Role inference: labels and sides for every person relative to the groom and the bride."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

import networkx as nx

from kinship_graph.graph import (
    are_siblings,
    are_spouses,
    build_graph,
    is_parent_of,
    siblings_of,
)
from kinship_graph.models import ANCHOR_ROLES, Person, Relationship

logger = logging.getLogger(__name__)

MAX_DEPTH = 4

ANCHOR_LABELS = {"groom": "The Groom", "bride": "The Bride"}


def find_anchor(people: Sequence[Person], role: str) -> Person | None:
    """Return the first person holding `role`, or None. Later duplicates are ignored."""
    return next((p for p in people if p.role == role), None)


def reachable_within(
    G: nx.Graph, anchor_id: str, max_depth: int = MAX_DEPTH, blocked: Iterable[str] = ()
) -> list[str]:
    """
    Ids reached by a breadth-first search from anchor_id, in discovery order, excluding the anchor.

    Nodes in `blocked` are neither visited nor expanded through.
    """
    if anchor_id not in G:
        return []
    view = nx.restricted_view(G, [n for n in blocked if n != anchor_id], [])
    return [v for _, v in nx.bfs_edges(view, anchor_id, depth_limit=max_depth)]


def _gendered(gender: str, female: str, male: str, neutral: str) -> str:
    if gender == "female":
        return female
    if gender == "male":
        return male
    return neutral


def label_for(
    person: Person, anchor_id: str, side: str, relationships: Sequence[Relationship]
) -> str | None:
    """
    Derive the inferred role of `person` relative to the anchor on `side`.

    Rules are checked in a fixed order and the first match decides:
    parent, child, sibling, spouse, spouse of a sibling. Returns None when
    nothing matches.
    """
    who = side.capitalize()

    if is_parent_of(person.id, anchor_id, relationships):
        term = _gendered(person.gender, "Mother", "Father", "Parent")
        return f"{term} of {who}"

    if is_parent_of(anchor_id, person.id, relationships):
        term = _gendered(person.gender, "Daughter", "Son", "Child")
        return f"{term} of {who}"

    if are_siblings(person.id, anchor_id, relationships):
        term = _gendered(person.gender, "Sister", "Brother", "Sibling")
        return f"{term} of {who}"

    if are_spouses(person.id, anchor_id, relationships):
        # A spouse who is themselves an anchor keeps their own label
        if person.role in ANCHOR_ROLES:
            return None
        return f"Spouse of {who}"

    siblings = siblings_of(anchor_id, relationships)
    if any(are_spouses(sibling_id, person.id, relationships) for sibling_id in siblings):
        term = _gendered(person.gender, "Sister-in-law", "Brother-in-law", "In-law")
        return f"{term} of {who}"

    return None


def infer_roles(people: Sequence[Person], relationships: Sequence[Relationship]) -> list[Person]:
    """
    Recompute `inferred_role` and `side` for everyone from scratch.

    Returns fresh copies of the people; the inputs are left untouched. The groom's
    traversal runs before the bride's, so a relative reachable from both keeps the
    groom-side label while their side becomes "mutual".
    """
    refreshed = []
    for p in people:
        if p.role in ANCHOR_LABELS:
            refreshed.append(replace(p, inferred_role=ANCHOR_LABELS[p.role], side=p.role))
        else:
            refreshed.append(replace(p, inferred_role=None, side=None))

    by_id = {p.id: p for p in refreshed}
    anchors = [find_anchor(refreshed, role) for role in ANCHOR_ROLES]
    anchor_ids = {a.id for a in anchors if a is not None}

    G = build_graph(refreshed, relationships)

    for side, anchor in zip(ANCHOR_ROLES, anchors):
        if anchor is None:
            logger.debug("No %s present, skipping %s-side traversal", side, side)
            continue

        # The opposite anchor is a barrier: their relatives belong to their own side
        labelled = 0
        for person_id in reachable_within(G, anchor.id, blocked=anchor_ids - {anchor.id}):
            person = by_id[person_id]
            # Extra grooms or brides keep their own label and side
            if person.role in ANCHOR_ROLES:
                continue

            if person.side is None:
                person.side = side
            elif person.side != side:
                person.side = "mutual"

            if not person.inferred_role:
                person.inferred_role = label_for(person, anchor.id, side, relationships)
                if person.inferred_role:
                    labelled += 1

        logger.debug("Labelled %d people on the %s side", labelled, side)

    return refreshed
