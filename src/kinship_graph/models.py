"""Data classes for wedding guest graph entities."""

from dataclasses import dataclass

ROLES = ("groom", "bride", "relative", "friend")
ANCHOR_ROLES = ("groom", "bride")
SIDES = ("groom", "bride", "mutual")
GENDERS = ("male", "female", "non-binary", "genderqueer", "agender", "two-spirit", "other")
RELATIONSHIP_TYPES = ("parent", "spouse", "friend")

# Person attribute name -> key in the persisted document
_PERSON_KEYS = {
    "id": "id",
    "name": "name",
    "role": "role",
    "gender": "gender",
    "inferred_role": "inferredRole",
    "side": "side",
    "photo_url": "photoUrl",
    "notes": "notes",
    "occupation": "occupation",
    "location": "location",
}


@dataclass
class Person:
    id: str
    name: str
    role: str = "relative"  # groom, bride, relative, friend
    gender: str = "other"
    inferred_role: str | None = None
    side: str | None = None  # groom, bride, mutual or None
    photo_url: str | None = None
    notes: str | None = None
    occupation: str | None = None
    location: str | None = None

    def to_dict(self) -> dict:
        """Serialize to the camelCase layout of the persisted document, omitting empty fields."""
        out = {}
        for attr, key in _PERSON_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        """Build a Person from a document entry. Unknown keys (e.g. layout x/y) are ignored."""
        kwargs = {attr: data[key] for attr, key in _PERSON_KEYS.items() if key in data}
        return cls(**kwargs)


@dataclass(frozen=True)
class Relationship:
    source: str
    target: str
    type: str  # parent (source is parent of target), spouse, friend

    def involves(self, person_id: str) -> bool:
        return self.source == person_id or self.target == person_id

    def connects(self, a: str, b: str) -> bool:
        """True if the relationship joins a and b in either direction."""
        return (self.source == a and self.target == b) or (self.source == b and self.target == a)

    def to_dict(self) -> dict:
        return {"source": self.source, "target": self.target, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict) -> "Relationship":
        return cls(source=data["source"], target=data["target"], type=data["type"])


@dataclass
class PathResult:
    path: list[str]
    description: str
