"""The family graph: authoritative people and relationships, kept consistent after every change."""

import copy
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace

from kinship_graph.graph import parents_of
from kinship_graph.inference import infer_roles
from kinship_graph.models import RELATIONSHIP_TYPES, PathResult, Person, Relationship
from kinship_graph.pathfinding import find_path

logger = logging.getLogger(__name__)

RELATIVE_KINDS = ("parent", "child", "spouse", "friend", "sibling")


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of the graph at one point in time."""

    people: tuple[Person, ...]
    relationships: tuple[Relationship, ...]

    def person(self, person_id: str) -> Person | None:
        return next((p for p in self.people if p.id == person_id), None)


ChangeHandler = Callable[[Snapshot], None]


def default_people() -> tuple[list[Person], list[Relationship]]:
    """The seed state: a groom and a bride married to each other."""
    groom = Person(id=str(uuid.uuid4()), name="Arthur", role="groom", gender="male")
    bride = Person(id=str(uuid.uuid4()), name="Molly", role="bride", gender="female")
    return [groom, bride], [Relationship(groom.id, bride.id, "spouse")]


class FamilyGraph:
    """
    Single-writer store for people and relationships.

    Every mutating call finishes by recomputing inferred roles and sides for
    everyone, then notifies change handlers. Callers embedding this in a
    concurrent host must serialize mutations themselves.
    """

    def __init__(
        self,
        people: list[Person] | None = None,
        relationships: list[Relationship] | None = None,
    ):
        self._handlers: list[ChangeHandler] = []
        if people:
            self.people = [replace(p) for p in people]
            self.relationships = list(relationships or [])
        else:
            self.people, self.relationships = default_people()
        self.recompute()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_person(self, person_id: str) -> Person | None:
        return next((p for p in self.people if p.id == person_id), None)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            people=tuple(copy.deepcopy(p) for p in self.people),
            relationships=tuple(self.relationships),
        )

    def find_path(self, start_id: str, end_id: str) -> PathResult | None:
        return find_path(self.people, self.relationships, start_id, end_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def recompute(self) -> None:
        """Replace every person's inferred role and side with freshly derived values."""
        self.people = infer_roles(self.people, self.relationships)

    def add_person(self, person: Person) -> None:
        self.people.append(replace(person))
        self._changed()

    def update_person(self, person: Person) -> None:
        """Replace the record with the same id. Unknown ids are ignored."""
        for i, existing in enumerate(self.people):
            if existing.id == person.id:
                self.people[i] = replace(person)
                break
        else:
            return
        self._changed()

    def delete_person(self, person_id: str) -> None:
        """Remove a person and every relationship mentioning them."""
        if self.get_person(person_id) is None:
            return
        self.people = [p for p in self.people if p.id != person_id]
        self.relationships = [r for r in self.relationships if not r.involves(person_id)]
        self._changed()

    def add_relationship(self, source_id: str, target_id: str, rel_type: str) -> None:
        """
        Add a relationship unless the exact (source, target, type) triple already exists.

        Ids that do not belong to a person are ignored.
        """
        if rel_type not in RELATIONSHIP_TYPES:
            raise ValueError(f"Unknown relationship type: {rel_type!r}")
        if self.get_person(source_id) is None or self.get_person(target_id) is None:
            return

        rel = Relationship(source_id, target_id, rel_type)
        if rel in self.relationships:
            return
        self.relationships.append(rel)
        self._changed()

    def remove_relationship(self, source_id: str, target_id: str) -> None:
        """Remove every relationship, of any type, from source_id to target_id."""
        kept = [
            r for r in self.relationships if not (r.source == source_id and r.target == target_id)
        ]
        if len(kept) == len(self.relationships):
            return
        self.relationships = kept
        self._changed()

    def add_relative(self, person: Person, relative_of: str, kind: str) -> None:
        """
        Add `person` and connect them to an existing person.

        kind is one of parent, child, spouse, friend or sibling. A sibling
        inherits every parent of `relative_of`; with no known parents the
        new person is added unconnected. Nothing is added when `relative_of`
        is unknown.
        """
        if kind not in RELATIVE_KINDS:
            raise ValueError(f"Unknown relative kind: {kind!r}")
        if self.get_person(relative_of) is None:
            return

        self.add_person(person)
        if kind == "parent":
            self.add_relationship(person.id, relative_of, "parent")
        elif kind == "child":
            self.add_relationship(relative_of, person.id, "parent")
        elif kind in ("spouse", "friend"):
            self.add_relationship(person.id, relative_of, kind)
        else:
            for parent_id in parents_of(relative_of, self.relationships):
                self.add_relationship(parent_id, person.id, "parent")

    def reset(self) -> None:
        """Drop everything and reseed the default groom and bride."""
        self.people, self.relationships = default_people()
        logger.info("Graph reset to default groom and bride")
        self._changed()

    # ------------------------------------------------------------------
    # Persistence document
    # ------------------------------------------------------------------

    def to_document(self) -> dict:
        return {
            "people": [p.to_dict() for p in self.people],
            "relationships": [r.to_dict() for r in self.relationships],
        }

    def load_document(self, doc: dict | None) -> None:
        """
        Replace the whole graph with the contents of a persisted document.

        The document is assumed well formed (see database.parse_document);
        None or an empty people list reseeds the defaults.
        """
        if not doc or not doc.get("people"):
            self.people, self.relationships = default_people()
            logger.info("No stored people, seeded default groom and bride")
        else:
            self.people = [Person.from_dict(d) for d in doc["people"]]
            self.relationships = [Relationship.from_dict(d) for d in doc.get("relationships") or []]
            logger.info(
                "Loaded %d people and %d relationships",
                len(self.people),
                len(self.relationships),
            )
        self._changed()

    @classmethod
    def from_document(cls, doc: dict | None) -> "FamilyGraph":
        graph = cls()
        graph.load_document(doc)
        return graph

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def on_change(self, handler: ChangeHandler) -> Callable[[], None]:
        """Register a handler called with a snapshot after each mutation. Returns an unsubscribe function."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def _changed(self) -> None:
        self.recompute()
        if not self._handlers:
            return
        snap = self.snapshot()
        for handler in list(self._handlers):
            handler(snap)
