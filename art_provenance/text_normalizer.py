"""
text_normalizer.py - Protects non-terminating periods in provenance text.

Periods end provenance periods, so the periods inside abbreviations ('Mr.',
'St.', 'no.') and initials ('J. P. Morgan') are swapped for a reserved
placeholder before the text is split, and swapped back afterwards.

Module: art_provenance.text_normalizer
"""

import re
from typing import Optional

from .lexicon import ProvenanceLexicon

__all__ = ['TextNormalizer', 'FAKE_PERIOD']

# ONE DOT LEADER, used internally in place of a protected '.'
FAKE_PERIOD = "\u2024"


class TextNormalizer:
    """
    Replaces the '.' of abbreviations and initials with FAKE_PERIOD.

    Attributes:
        lexicon (ProvenanceLexicon): Supplies the abbreviation list.
    """
    BORN_RE = re.compile(r"\bb\.\s(\d{4})")
    DIED_RE = re.compile(r"\bd\.\s(\d{4})")
    INITIAL_RE = re.compile(r"(\s[A-Z])\.")
    LEADING_INITIAL_RE = re.compile(r"^([A-Z])\.")

    def __init__(self, lexicon: Optional[ProvenanceLexicon] = None) -> None:
        self.lexicon = lexicon or ProvenanceLexicon.default()
        # Longest first so 'D.C.' is protected before 'DC.'
        abbreviations = sorted(self.lexicon.abbreviations, key=len, reverse=True)
        self._abbreviation_re = re.compile(
            "|".join(r"(?<![A-Za-z])" + re.escape(a) for a in abbreviations)
        ) if abbreviations else None

    def protect(self, text: str) -> str:
        """
        Protect every period in the text that does not end a sentence.

        'b. 1850' and 'd. 1920' become 'BORN 1850' and 'DIED 1920' so that
        the life-date markers survive sentence splitting.

        Args:
            text (str): Provenance body text.

        Returns:
            str: Text with protected periods replaced by FAKE_PERIOD.
        """
        modified = self.BORN_RE.sub(r"BORN \1", text)
        modified = self.DIED_RE.sub(r"DIED \1", modified)
        if self._abbreviation_re is not None:
            modified = self._abbreviation_re.sub(lambda m: m.group(0).replace(".", FAKE_PERIOD), modified)
        modified = self.INITIAL_RE.sub(r"\1" + FAKE_PERIOD, modified)
        modified = self.LEADING_INITIAL_RE.sub(r"\1" + FAKE_PERIOD, modified)
        return modified

    @staticmethod
    def restore(text: str) -> str:
        """Put back the periods replaced by protect()."""
        return text.replace(FAKE_PERIOD, ".")
