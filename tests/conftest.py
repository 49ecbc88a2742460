"""Shared fixtures: a small wedding graph with stable ids."""
from __future__ import annotations

import pytest

from kinship_graph.models import Person, Relationship
from kinship_graph.store import FamilyGraph


@pytest.fixture
def couple() -> FamilyGraph:
    """Arthur (groom) married to Molly (bride), nobody else."""
    return FamilyGraph(
        people=[
            Person(id="arthur", name="Arthur", role="groom", gender="male"),
            Person(id="molly", name="Molly", role="bride", gender="female"),
        ],
        relationships=[Relationship("arthur", "molly", "spouse")],
    )


@pytest.fixture
def family(couple: FamilyGraph) -> FamilyGraph:
    """The couple plus Arthur's mother Clara, brother Sam and Sam's wife Dana."""
    couple.add_person(Person(id="clara", name="Clara", gender="female"))
    couple.add_relationship("clara", "arthur", "parent")
    couple.add_person(Person(id="sam", name="Sam", gender="male"))
    couple.add_relationship("clara", "sam", "parent")
    couple.add_person(Person(id="dana", name="Dana", gender="female"))
    couple.add_relationship("dana", "sam", "spouse")
    return couple
