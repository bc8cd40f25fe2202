"""Data classes for family members, relationships and snapshots."""

from dataclasses import dataclass, field
from typing import Any

from kintree.settings import DECEASED_STATUSES

GENDERS = ("male", "female", "other")
RELATIONSHIP_KINDS = ("parent", "spouse")


@dataclass(frozen=True)
class Person:
    id: str
    first_name: str
    last_name: str | None = None
    gender: str = "other"  # male, female, other
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    death_date: str | None = None
    status: str | None = None
    job_title: str | None = None
    location: str | None = None

    @property
    def is_deceased(self) -> bool:
        return bool(self.death_date) or self.status in DECEASED_STATUSES

    @property
    def display_name(self) -> str:
        return f"{self.last_name or ''}{self.first_name}"


@dataclass(frozen=True)
class Relationship:
    id: str
    source_id: str
    target_id: str
    kind: str  # parent (source is parent of target), spouse


@dataclass(frozen=True)
class FamilySnapshot:
    """An immutable view of the family data handed to the engines."""

    people: dict[str, Person] = field(default_factory=dict)
    relationships: tuple[Relationship, ...] = ()
    root_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FamilySnapshot":
        """
        Build a snapshot from the persisted store layout.

        Expects ``{"members": {id: {...}}, "relationships": [...], "rootMemberId": id}``
        with camelCase member keys. Raises ValueError on unknown genders or
        relationship types.
        """
        people: dict[str, Person] = {}
        for member_id, m in (data.get("members") or {}).items():
            gender = m.get("gender") or "other"
            if gender not in GENDERS:
                raise ValueError(f"Unknown gender {gender!r} for member {member_id}")
            people[member_id] = Person(
                id=member_id,
                first_name=m.get("firstName", ""),
                last_name=m.get("lastName") or None,
                gender=gender,
                birth_date=m.get("dateOfBirth") or None,
                death_date=m.get("dateOfDeath") or None,
                status=m.get("status") or None,
                job_title=m.get("jobTitle") or None,
                location=m.get("location") or None,
            )

        relationships: list[Relationship] = []
        for r in data.get("relationships") or []:
            if r.get("type") not in RELATIONSHIP_KINDS:
                raise ValueError(f"Unknown relationship type {r.get('type')!r} in {r.get('id')}")
            relationships.append(
                Relationship(
                    id=str(r["id"]),
                    source_id=r["sourceMemberId"],
                    target_id=r["targetMemberId"],
                    kind=r["type"],
                )
            )

        return cls(
            people=people,
            relationships=tuple(relationships),
            root_id=data.get("rootMemberId") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        members = {}
        for p in self.people.values():
            members[p.id] = {
                "id": p.id,
                "firstName": p.first_name,
                "lastName": p.last_name or "",
                "gender": p.gender,
                "dateOfBirth": p.birth_date,
                "dateOfDeath": p.death_date,
                "status": p.status,
                "jobTitle": p.job_title,
                "location": p.location,
            }
        return {
            "members": members,
            "relationships": [
                {
                    "id": r.id,
                    "sourceMemberId": r.source_id,
                    "targetMemberId": r.target_id,
                    "type": r.kind,
                }
                for r in self.relationships
            ],
            "rootMemberId": self.root_id,
        }
