"""
party.py - Owners named in a provenance record.

Module: art_provenance.party
Last updated: 2026-10-18
"""

__all__ = ['Party']

from typing import Optional

from .provenance_date import ProvenanceDate


class Party:
    """
    A person or institution that owned a work.

    Attributes:
        name (str): Name as written, titles and suffixes included.
        birth (Optional[ProvenanceDate]): Birth date, if given.
        death (Optional[ProvenanceDate]): Death date, if given.
        certainty (bool): False if the name was marked doubtful ('Smith?').
    """
    __slots__ = ['name', 'birth', 'death', 'certainty']

    def __init__(self, name: str = "", birth: Optional[ProvenanceDate] = None,
                 death: Optional[ProvenanceDate] = None, certainty: bool = True):
        self.name: str = name or ""
        self.birth: Optional[ProvenanceDate] = birth
        self.death: Optional[ProvenanceDate] = death
        self.certainty: bool = certainty

    def __repr__(self) -> str:
        return f"Party({self.name!r}, birth={self.birth!r}, death={self.death!r})"

    def __eq__(self, other):
        if not isinstance(other, Party):
            return NotImplemented
        return ((self.name, self.birth, self.death, self.certainty) ==
                (other.name, other.birth, other.death, other.certainty))

    __hash__ = None

    @property
    def life_dates_str(self) -> str:
        """
        Life dates in the parenthetical form the extractor reads back.

        Returns '(1900-1950)', '(born 1900)', '(died 1950)' or '' for a party
        without life dates.
        """
        if self.birth and self.death:
            return f"({self.birth.value}{_mark(self.birth)}-{self.death.value}{_mark(self.death)})"
        if self.birth:
            return f"(born {self.birth.value}{_mark(self.birth)})"
        if self.death:
            return f"(died {self.death.value}{_mark(self.death)})"
        return ""

    def __str__(self) -> str:
        name = self.name if self.certainty else f"{self.name}?"
        life = self.life_dates_str
        return f"{name} {life}" if life else name


def _mark(date: ProvenanceDate) -> str:
    return "" if date.certainty else "?"
