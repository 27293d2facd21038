"""
segmenter.py - Splits a provenance record into per-owner fragments and footnotes.

Provides the RecordSegmenter class, which:
    - Separates the ownership narrative from its footnote block
    - Parses bracketed ('[1] text') and enumerated ('1. text') footnotes
    - Splits the narrative into ordered fragments on '.' and ';'
    - Marks fragments that follow the previous owner directly (after ';')

Module: art_provenance.segmenter
Last updated: 2026-10-18
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .lexicon import ProvenanceLexicon
from .text_normalizer import TextNormalizer

logger = logging.getLogger(__name__)

__all__ = ['Fragment', 'Segmentation', 'RecordSegmenter']


@dataclass(frozen=True)
class Fragment:
    """
    One ownership fragment of the narrative.

    Attributes:
        index (int): Position of the fragment in the record, from 0.
        text (str): Fragment text with periods restored.
        follows_directly (bool): True if the fragment came after a ';', i.e.
            the transfer from the previous owner was immediate.
    """
    index: int
    text: str
    follows_directly: bool = False


@dataclass
class Segmentation:
    """Fragments and footnotes of one provenance record."""
    fragments: List[Fragment] = field(default_factory=list)
    notes: Dict[int, str] = field(default_factory=dict)


class RecordSegmenter:
    """
    Segments normalized provenance text.

    Attributes:
        lexicon (ProvenanceLexicon): Supplies the footnote divider.
        normalizer (TextNormalizer): Protects abbreviation periods.
    """
    NUMBERED_OPENER = " 1. "

    BRACKETED_NOTE_RE = re.compile(r"^(\d+)\]?\s*(.*)", re.S)
    NUMBERED_NOTE_RE = re.compile(
        r"""
        (\d+)\.\s          # digits, period, space
        (.*?)              # everything until...
        (?=(?<!\d)\d+\.\s  # the next 'digits, period, space'
            (?:\D|\d+(?!\.))   # not itself followed by 'digits, period', which
                               # avoids splitting '1. Sold in 1950. 2. Lent.'
          |$)
        """,
        re.X | re.S)

    def __init__(self, lexicon: Optional[ProvenanceLexicon] = None,
                 normalizer: Optional[TextNormalizer] = None) -> None:
        self.lexicon = lexicon or ProvenanceLexicon.default()
        self.normalizer = normalizer or TextNormalizer(self.lexicon)

    def segment(self, text: str) -> Segmentation:
        """
        Split a record into ordered fragments and parsed footnotes.

        Args:
            text (str): Full provenance record, newlines already collapsed.

        Returns:
            Segmentation: Fragments in source order and footnotes by number.
        """
        body, note_block = self.split_text_and_notes(text)
        notes = self.split_notes(note_block) if note_block else {}
        return Segmentation(fragments=self.split_fragments(body), notes=notes)

    def split_text_and_notes(self, text: str) -> Tuple[str, Optional[str]]:
        """
        Separate the narrative from the footnote block.

        The footnote divider is tried first, then the first ' 1. ' opener.

        Returns:
            Tuple[str, Optional[str]]: (body, note block or None)
        """
        divider = self.lexicon.footnote_divider
        if divider and divider in text:
            body, notes = text.split(divider, 1)
        elif self.NUMBERED_OPENER in text:
            body, notes = text.split(self.NUMBERED_OPENER, 1)
            notes = "1. " + notes
        else:
            body, notes = text, None
        notes = notes.strip() if notes is not None else None
        return body.strip(), notes or None

    def split_notes(self, notes: str) -> Dict[int, str]:
        """
        Parse a footnote block into a mapping from footnote number to text.

        Args:
            notes (str): Footnote block, '[1] ... [2] ...' or '1. ... 2. ...'.

        Returns:
            Dict[int, str]: Footnote text by number, in block order.
        """
        notes = notes.strip()
        parsed: Dict[int, str] = {}
        if notes.startswith("["):
            for piece in notes.split("["):
                match = self.BRACKETED_NOTE_RE.match(piece)
                if match:
                    parsed[int(match.group(1))] = match.group(2).strip()
        elif notes[:2] == "1.":
            for number, note in self.NUMBERED_NOTE_RE.findall(notes):
                parsed[int(number)] = note.strip()
        else:
            logger.warning('RecordSegmenter: unrecognised footnote block: "%s"', notes[:40])
        logger.debug("RecordSegmenter: parsed %d footnotes", len(parsed))
        return parsed

    def split_fragments(self, body: str) -> List[Fragment]:
        """
        Split the narrative on sentence and direct-transfer boundaries.

        Every ';'-delimited clause after the first in a sentence is marked
        as following its predecessor directly.

        Args:
            body (str): Narrative text.

        Returns:
            List[Fragment]: Non-blank fragments in source order.
        """
        fragments: List[Fragment] = []
        protected = self.normalizer.protect(body)
        for sentence in protected.split("."):
            for position, clause in enumerate(sentence.split(";")):
                restored = self.normalizer.restore(clause).strip()
                if not restored:
                    continue
                fragments.append(Fragment(
                    index=len(fragments),
                    text=restored,
                    follows_directly=position > 0 and bool(fragments),
                ))
        return fragments
