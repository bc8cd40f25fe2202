"""GEDCOM import into a family snapshot."""

import logging
from pathlib import Path

from ged4py import GedcomReader

from kintree.dates import parse_date_string
from kintree.models import FamilySnapshot, Person, Relationship

logger = logging.getLogger(__name__)

SEX_TO_GENDER = {"M": "male", "F": "female"}


def xref_to_id(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I12@' into a member id 'I12'."""
    return xref_id.strip("@")


def extract_name_parts(indi) -> tuple[str, str | None]:
    """Extract given name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", None)

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        given, surname, _ = name_rec.value
        return (given or "Unknown", surname or None)

    # Fallback: string format "Given /Surname/"
    givn = name_rec.sub_tag("GIVN")
    surn = name_rec.sub_tag("SURN")
    given = givn.value if givn else str(name_rec.value).replace("/", " ").strip()
    return (given or "Unknown", surn.value if surn else None)


def extract_event_date(indi, tag: str) -> str | None:
    """ISO date of an event tag (BIRT, DEAT), if it can be parsed."""
    event = indi.sub_tag(tag)
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    if date_rec is None or not date_rec.value:
        return None
    return parse_date_string(str(date_rec.value))


def load_gedcom(filepath: Path) -> FamilySnapshot:
    """
    Read people and relationships from a GEDCOM file.

    INDI records become people and FAM records become one spouse relationship
    (when both HUSB and WIFE are present) plus one parent relationship per
    parent and child. Non-standard tags are ignored.
    """
    people: dict[str, Person] = {}
    relationships: list[Relationship] = []

    reader = GedcomReader(str(filepath))
    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue
        person_id = xref_to_id(rec.xref_id)
        given, surname = extract_name_parts(rec)
        sex = rec.sub_tag("SEX")
        people[person_id] = Person(
            id=person_id,
            first_name=given,
            last_name=surname,
            gender=SEX_TO_GENDER.get(sex.value if sex else None, "other"),
            birth_date=extract_event_date(rec, "BIRT"),
            death_date=extract_event_date(rec, "DEAT"),
        )

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue
        fam_id = xref_to_id(rec.xref_id)

        parents = []
        for tag in ("HUSB", "WIFE"):
            sub = rec.sub_tag(tag)
            if sub is not None and sub.xref_id:
                parents.append(xref_to_id(sub.xref_id))

        if len(parents) == 2:
            relationships.append(
                Relationship(
                    id=f"{fam_id}:spouse",
                    source_id=parents[0],
                    target_id=parents[1],
                    kind="spouse",
                )
            )

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = xref_to_id(child.xref_id)
            for parent_id in parents:
                relationships.append(
                    Relationship(
                        id=f"{fam_id}:parent:{parent_id}:{child_id}",
                        source_id=parent_id,
                        target_id=child_id,
                        kind="parent",
                    )
                )

    logger.debug(
        "Loaded %d people and %d relationships from %s",
        len(people),
        len(relationships),
        filepath,
    )
    return FamilySnapshot(people=people, relationships=tuple(relationships))
