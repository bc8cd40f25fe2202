"""Shared family fixtures.

The extended family used across the kinship tests, from the root's view:

    gf (1920) = gm (1922)                       mgf (1925) = mgm (1927)
      |-- uncle_old (1945) = uncle_old_wife       |-- mother (1952)
      |     `-- cousin_old (f, 1975)              |-- m_uncle (1950)
      |-- father (1950) = mother                  `-- m_aunt (f, 1955)
      |-- aunt (f, 1952) = aunt_husband
      |     `-- cousin_biao (1979)
      `-- uncle_young (1955) = uncle_wife
            `-- cousin_tang (1982) = cousin_tang_wife
                  `-- cousin_tang_son

    father = mother
      |-- brother (1978) = brother_wife -> nephew
      |-- root (1980) = wife (1981)       wife's parents wife_father = wife_mother
      |     |-- son (2010) = son_wife           `-- wife_brother
      |     |     `-- grandson
      |     `-- daughter (f, 2012) = daughter_husband
      `-- sister (f, 1983) = sister_husband -> niece (f)
"""

import pytest

from kintree.models import Person, Relationship


def make_person(person_id, gender="male", born=None, died=None, status=None):
    return Person(
        id=person_id,
        first_name=person_id,
        gender=gender,
        birth_date=born,
        death_date=died,
        status=status,
    )


class FamilyBuilder:
    """Collects people and relationships with generated relationship ids."""

    def __init__(self):
        self.people: dict[str, Person] = {}
        self.relationships: list[Relationship] = []

    def add(self, person_id, gender="male", born=None, died=None, status=None):
        self.people[person_id] = make_person(person_id, gender, born, died, status)
        return self

    def parent(self, parent_id, child_id):
        self.relationships.append(
            Relationship(
                id=f"r{len(self.relationships)}",
                source_id=parent_id,
                target_id=child_id,
                kind="parent",
            )
        )
        return self

    def couple(self, a, b, *children):
        self.relationships.append(
            Relationship(id=f"r{len(self.relationships)}", source_id=a, target_id=b, kind="spouse")
        )
        for child in children:
            self.parent(a, child)
            self.parent(b, child)
        return self


@pytest.fixture
def builder():
    return FamilyBuilder()


@pytest.fixture
def family():
    b = FamilyBuilder()
    b.add("gf", born="1920-01-01").add("gm", "female", born="1922-01-01")
    b.add("mgf", born="1925-01-01").add("mgm", "female", born="1927-01-01")
    b.add("father", born="1950-05-01").add("mother", "female", born="1952-01-01")
    b.add("uncle_old", born="1945-01-01").add("uncle_old_wife", "female")
    b.add("aunt", "female", born="1952-03-01").add("aunt_husband")
    b.add("uncle_young", born="1955-01-01").add("uncle_wife", "female")
    b.add("m_uncle", born="1950-01-01").add("m_aunt", "female", born="1955-01-01")
    b.add("cousin_old", "female", born="1975-01-01")
    b.add("cousin_biao", born="1979-01-01")
    b.add("cousin_tang", born="1982-01-01").add("cousin_tang_wife", "female")
    b.add("cousin_tang_son")
    b.add("brother", born="1978-01-01").add("brother_wife", "female").add("nephew")
    b.add("root", born="1980-01-01").add("wife", "female", born="1981-01-01")
    b.add("sister", "female", born="1983-01-01").add("sister_husband")
    b.add("niece", "female")
    b.add("wife_father").add("wife_mother", "female").add("wife_brother")
    b.add("son", born="2010-01-01").add("son_wife", "female")
    b.add("daughter", "female", born="2012-01-01").add("daughter_husband")
    b.add("grandson")

    b.couple("gf", "gm", "uncle_old", "father", "aunt", "uncle_young")
    b.couple("mgf", "mgm", "mother", "m_uncle", "m_aunt")
    b.couple("uncle_old", "uncle_old_wife", "cousin_old")
    b.couple("aunt_husband", "aunt", "cousin_biao")
    b.couple("uncle_young", "uncle_wife", "cousin_tang")
    b.couple("cousin_tang", "cousin_tang_wife", "cousin_tang_son")
    b.couple("father", "mother", "brother", "root", "sister")
    b.couple("brother", "brother_wife", "nephew")
    b.couple("sister_husband", "sister", "niece")
    b.couple("wife_father", "wife_mother", "wife", "wife_brother")
    b.couple("root", "wife", "son", "daughter")
    b.couple("son", "son_wife", "grandson")
    b.couple("daughter", "daughter_husband")
    return b
