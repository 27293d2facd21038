"""
acquisition_method.py - Lexicon-driven acquisition method classification.

Maps the phrase variants found in provenance prose ('sold to', 'by descent',
'bequeathed to') to a canonical AcquisitionMethod, and renders a method back
to prose around a party name.

Module: art_provenance.acquisition_method
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple

logger = logging.getLogger(__name__)

__all__ = ['AcquisitionMethod', 'AcquisitionMethodClassifier']


@dataclass(frozen=True)
class AcquisitionMethod:
    """
    A canonical way in which a party came to own a work.

    Attributes:
        id (str): Stable identifier used in structured output ('sale').
        name (str): Display name ('Sale').
        preferred (str): Form used when writing provenance ('Sold to').
        placement (str): 'prefix' if the form precedes the party name,
            'suffix' if it follows it after a comma.
        forms (Tuple[str, ...]): Every textual form recognised in prose.
    """
    id: str
    name: str
    preferred: str
    placement: Literal["prefix", "suffix"] = "prefix"
    forms: Tuple[str, ...] = ()

    @property
    def forms_longest_first(self) -> List[str]:
        """All forms, including the preferred one, longest first."""
        forms = set(self.forms) | {self.preferred}
        return sorted(forms, key=lambda f: (-len(f), f))

    def render(self, party_text: str) -> str:
        """
        Write the method around a party description.

        Args:
            party_text: Party name, possibly with life dates.

        Returns:
            'Sold to John Doe' for prefix methods, 'John Doe, by exchange'
            for suffix methods.
        """
        if self.placement == "suffix":
            return f"{party_text}, {self.preferred}" if party_text else self.preferred
        return f"{self.preferred} {party_text}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AcquisitionMethod:
        forms = tuple(data.get('forms') or ())
        return cls(
            id=str(data['id']),
            name=str(data.get('name', data['id'])),
            preferred=str(data.get('preferred') or (forms[0] if forms else data['id'])),
            placement=data.get('placement', 'prefix'),
            forms=forms,
        )


def _phrase_pattern(form: str) -> str:
    return r"(?<!\w)" + re.escape(form) + r"(?!\w)"


class AcquisitionMethodClassifier:
    """
    Identifies the acquisition method named in a text fragment.

    The classifier is built from an ordered collection of methods; when the
    forms of several methods occur in the same fragment the longest form wins,
    and ties go to the method listed first.
    """

    def __init__(self, methods: Iterable[AcquisitionMethod]) -> None:
        self.methods: Tuple[AcquisitionMethod, ...] = tuple(methods)
        self._by_id: Dict[str, AcquisitionMethod] = {m.id: m for m in self.methods}
        self._patterns: List[Tuple[int, int, re.Pattern, AcquisitionMethod]] = []
        for order, method in enumerate(self.methods):
            for form in method.forms_longest_first:
                self._patterns.append((len(form), -order, re.compile(_phrase_pattern(form), re.I), method))
        self._patterns.sort(key=lambda p: (p[0], p[1]), reverse=True)

    def find(self, text: str) -> Optional[AcquisitionMethod]:
        """
        Return the method whose longest form appears in the text, or None.

        Args:
            text (str): Provenance fragment.
        """
        if not text:
            return None
        for _, _, pattern, method in self._patterns:
            if pattern.search(text):
                return method
        return None

    def get(self, method_id: str) -> Optional[AcquisitionMethod]:
        """Look a method up by id."""
        return self._by_id.get(method_id)

    def strip(self, text: str, method: AcquisitionMethod) -> str:
        """
        Remove the method's phrase from the text.

        Forms are tried longest first; the first form that changes the text
        is removed everywhere it occurs, together with a leading ', '.

        Args:
            text (str): Provenance fragment.
            method (AcquisitionMethod): Method previously found in the text.

        Returns:
            str: The text without the method phrase.
        """
        for form in method.forms_longest_first:
            new_text = re.sub(r"(?:,\s)?" + _phrase_pattern(form), "", text, flags=re.I)
            if new_text != text:
                logger.debug('AcquisitionMethodClassifier: stripped "%s" (%s)', form, method.id)
                return new_text.strip()
        return text.strip()

    def render(self, method: Optional[AcquisitionMethod], party_text: str) -> str:
        """Write party text with the method's preferred form, if any."""
        return method.render(party_text) if method is not None else party_text
