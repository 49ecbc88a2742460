"""
Command-line interface for the wedding guest graph.

1) Load the graph document from the SQLite key-value store (or seed the groom and bride).
2) Apply the requested change; roles and sides are recomputed immediately.
3) Save the document back and print the result.
"""

import logging
import uuid
from pathlib import Path

import typer

from kinship_graph.database import attach_autosave, load_document, open_database, save_document
from kinship_graph.models import GENDERS, RELATIONSHIP_TYPES, ROLES, Person
from kinship_graph.store import RELATIVE_KINDS, FamilyGraph
from kinship_graph.validation import validate_graph

app = typer.Typer(
    name="kinship-graph",
    help="Wedding guest relationship graph",
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    db: Path = typer.Option(
        Path("kinship.db"), "--db", envvar="KINSHIP_DB", help="SQLite file holding the graph"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Open the graph stored in DB; changes are saved back automatically."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    conn = open_database(db)
    ctx.call_on_close(conn.close)

    doc = load_document(conn)
    graph = FamilyGraph.from_document(doc)
    if doc is None:
        # Persist the seed so ids stay stable between invocations
        save_document(conn, graph.to_document())
    attach_autosave(graph, conn)
    ctx.obj = graph


def resolve_person(graph: FamilyGraph, ref: str) -> Person:
    """Find a person by id, or by name when the name is unique."""
    person = graph.get_person(ref)
    if person is not None:
        return person

    matches = [p for p in graph.people if p.name == ref]
    if len(matches) == 1:
        return matches[0]

    if matches:
        print(f"Error: '{ref}' matches {len(matches)} people, use an id instead")
    else:
        print(f"Error: no person named or identified by '{ref}'")
    raise typer.Exit(1)


def _check_choice(value: str, choices: tuple[str, ...], what: str):
    if value not in choices:
        print(f"Error: unknown {what} '{value}', expected one of: {', '.join(choices)}")
        raise typer.Exit(1)


@app.command()
def show(ctx: typer.Context):
    """List everyone with their inferred role and side."""
    graph: FamilyGraph = ctx.obj
    snap = graph.snapshot()
    print(f"{len(snap.people)} people, {len(snap.relationships)} relationships")
    for p in snap.people:
        role = p.inferred_role or "-"
        side = p.side or "-"
        print(f"  {p.id}  {p.name:<20} {role:<28} {side}")


@app.command()
def path(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="Id or name of the first person"),
    end: str = typer.Argument(..., help="Id or name of the second person"),
):
    """Describe the shortest connection between two people."""
    graph: FamilyGraph = ctx.obj
    a = resolve_person(graph, start)
    b = resolve_person(graph, end)

    result = graph.find_path(a.id, b.id)
    if result is None:
        print(f"No connection between {a.name} and {b.name}")
        raise typer.Exit(1)

    print(f"{len(result.path) - 1} hops: {result.description}")


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Display name"),
    gender: str = typer.Option("other", "--gender", "-g", help="Gender identity"),
    role: str = typer.Option("relative", "--role", "-r", help="groom, bride, relative or friend"),
    relative_of: str = typer.Option(None, "--relative-of", help="Id or name to connect to"),
    kind: str = typer.Option("friend", "--as", help="parent, child, spouse, friend or sibling"),
):
    """Add a person, optionally connected to someone already in the graph."""
    graph: FamilyGraph = ctx.obj
    _check_choice(gender, GENDERS, "gender")
    _check_choice(role, ROLES, "role")

    person = Person(id=str(uuid.uuid4()), name=name, role=role, gender=gender)
    if relative_of:
        _check_choice(kind, RELATIVE_KINDS, "relative kind")
        other = resolve_person(graph, relative_of)
        graph.add_relative(person, other.id, kind)
    else:
        graph.add_person(person)

    added = graph.get_person(person.id)
    print(f"Added {added.name} ({added.id}): {added.inferred_role or 'no inferred role'}")


@app.command()
def relate(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Id or name; the parent for parent relationships"),
    target: str = typer.Argument(..., help="Id or name; the child for parent relationships"),
    rel_type: str = typer.Argument(..., help="parent, spouse or friend"),
):
    """Add a relationship between two people."""
    graph: FamilyGraph = ctx.obj
    _check_choice(rel_type, RELATIONSHIP_TYPES, "relationship type")
    a = resolve_person(graph, source)
    b = resolve_person(graph, target)
    graph.add_relationship(a.id, b.id, rel_type)
    print(f"{a.name} -[{rel_type}]-> {b.name}")


@app.command()
def unrelate(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Id or name"),
    target: str = typer.Argument(..., help="Id or name"),
):
    """Remove every relationship from SOURCE to TARGET."""
    graph: FamilyGraph = ctx.obj
    a = resolve_person(graph, source)
    b = resolve_person(graph, target)
    before = len(graph.relationships)
    graph.remove_relationship(a.id, b.id)
    print(f"Removed {before - len(graph.relationships)} relationships")


@app.command()
def delete(ctx: typer.Context, person: str = typer.Argument(..., help="Id or name")):
    """Delete a person and all of their relationships."""
    graph: FamilyGraph = ctx.obj
    p = resolve_person(graph, person)
    graph.delete_person(p.id)
    print(f"Deleted {p.name}")


@app.command()
def reset(ctx: typer.Context):
    """Start over with just the groom and the bride."""
    graph: FamilyGraph = ctx.obj
    graph.reset()
    print("Reset to default groom and bride")


@app.command()
def validate(ctx: typer.Context):
    """Report data problems such as parent cycles or duplicate anchors."""
    graph: FamilyGraph = ctx.obj
    warnings = validate_graph(graph.people, graph.relationships)
    if warnings:
        print(f"Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"  - {w}")
        if len(warnings) > 10:
            print(f"  ... and {len(warnings) - 10} more")
    else:
        print("No validation issues found")


if __name__ == "__main__":
    app()
