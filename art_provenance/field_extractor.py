"""
field_extractor.py - Builds a Period from one provenance fragment.

The FieldExtractor pulls structured fields out of a fragment in a fixed order,
removing each match before the next step runs:
    1. footnote references ('[1]', '[see note 2]')
    2. a leading certainty qualifier ('Possibly')
    3. the acquisition method phrase ('sold to')
    4. life dates ('(1900-1950)', '(BORN 1850)')
    5. stock or lot number ('stock no. 1234')
    6. the date clause ('between 1920 and 1925')
    7. party name and location, split on ','

Module: art_provenance.field_extractor
Last updated: 2026-10-18
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from .date_extractor import DateExtractor
from .lexicon import ProvenanceLexicon
from .model import Issue
from .party import Party
from .period import Period
from .provenance_date import Precision, ProvenanceDate
from .time_span import TimeSpanParser

logger = logging.getLogger(__name__)

__all__ = ['FieldExtractor']

_LIFE_YEAR = r"(?:c\.\s*)?\d{1,4}\s*\??"


class FieldExtractor:
    """
    Extracts the fields of a single ownership fragment.

    Attributes:
        lexicon (ProvenanceLexicon): Certainty words, name extenders and
            acquisition methods.
        date_extractor (DateExtractor): Resolves life dates.
        time_span_parser (TimeSpanParser): Resolves the date clause.
    """
    FOOTNOTE_RE = re.compile(r"\s*\[(?:[^\[\]]*?\bnote\s+)?(\d+)\]", re.I)

    LIFE_DATES_RE = re.compile(
        rf"\s*\(\s*(?P<birth>{_LIFE_YEAR})\s*[-–]\s*(?P<death>{_LIFE_YEAR})\s*\)")
    DIED_RE = re.compile(rf"\s*\(\s*(?:DIED|died|d\.)\s+(?P<death>{_LIFE_YEAR})\s*\)")
    BORN_RE = re.compile(rf"\s*\(\s*(?:BORN|born|b\.)\s+(?P<birth>{_LIFE_YEAR})\s*\)")

    STOCK_RE = re.compile(r"\b(?:stock\s)?no\.\s.*\b", re.I)
    LOT_RE = re.compile(r"\blot\s.*\b", re.I)

    def __init__(self, lexicon: Optional[ProvenanceLexicon] = None,
                 date_extractor: Optional[DateExtractor] = None,
                 time_span_parser: Optional[TimeSpanParser] = None) -> None:
        self.lexicon = lexicon or ProvenanceLexicon.default()
        self.date_extractor = date_extractor or DateExtractor()
        self.time_span_parser = time_span_parser or TimeSpanParser(self.date_extractor)

    def extract(self, text: str, notes: Optional[Dict[int, str]] = None,
                fragment_index: int = 0) -> Tuple[Period, List[Issue]]:
        """
        Build a Period from a fragment.

        Date-clause failures do not abort the fragment: the period is returned
        without a time span, marked unparsable, and the failure is reported
        as an Issue.

        Args:
            text (str): Fragment text, as produced by RecordSegmenter.
            notes (Optional[Dict[int, str]]): Footnotes of the record by
                number, used to resolve references.
            fragment_index (int): Position of the fragment, for diagnostics.

        Returns:
            Tuple[Period, List[Issue]]: The period and any issues found.
        """
        issues: List[Issue] = []
        working, note, note_refs = self._footnotes(text, notes or {}, fragment_index, issues)
        working, certain = self._certainty(working)

        method = self.lexicon.classifier.find(working)
        if method is not None:
            working = self.lexicon.classifier.strip(working, method)

        working, birth, death = self._life_dates(working)
        working, stock_number = self._stock_number(working)

        time_span = None
        parsable = True
        if working.strip():
            result = self.time_span_parser.resolve(working)
            if result.ok:
                time_span, working = result.time_span, result.text
            else:
                parsable = False
                issues.append(Issue(
                    issue_type="unparsable_date",
                    severity="warning",
                    message=result.error,
                    fragment_index=fragment_index,
                    text=text,
                ))

        name, location = self._split_name_and_location(working)
        name, party_certainty = _strip_doubt(name)
        location_certainty = True
        if location is not None:
            location, location_certainty = _strip_doubt(location)

        period = Period(
            Party(name, birth, death, party_certainty),
            certain=certain,
            original_text=text,
            acquisition_method=method,
            note=note,
            note_refs=note_refs,
            stock_number=stock_number,
            location=location or None,
            location_certainty=location_certainty,
            parsable=parsable,
            time_span=time_span,
        )
        logger.debug("FieldExtractor: fragment %d -> %r", fragment_index, period)
        return period, issues

    def _footnotes(self, text: str, notes: Dict[int, str], fragment_index: int,
                   issues: List[Issue]) -> Tuple[str, List[str], List[int]]:
        resolved = []
        numbers = []
        for ref in self.FOOTNOTE_RE.findall(text):
            number = int(ref)
            numbers.append(number)
            if number in notes:
                resolved.append(notes[number])
                continue
            logger.warning("FieldExtractor: footnote [%d] not found in the note block", number)
            issues.append(Issue(
                issue_type="unresolved_footnote",
                severity="warning",
                message=f"Footnote [{number}] is not in the note block",
                fragment_index=fragment_index,
                text=text,
            ))
            resolved.append(str(number))
        return self.FOOTNOTE_RE.sub("", text).strip(), resolved, numbers

    def _certainty(self, text: str) -> Tuple[str, bool]:
        tokens = text.split(None, 1)
        if not tokens:
            return text, True
        word = self.lexicon.certainty_word(tokens[0])
        if word is None:
            return text, True
        remainder = tokens[0][len(word):]
        rest = tokens[1] if len(tokens) > 1 else ""
        return f"{remainder} {rest}".strip().lstrip(",").strip(), False

    def _life_dates(self, text: str) -> Tuple[str, Optional[ProvenanceDate], Optional[ProvenanceDate]]:
        for pattern in (self.LIFE_DATES_RE, self.DIED_RE, self.BORN_RE):
            match = pattern.search(text)
            if match is None:
                continue
            groups = match.groupdict()
            birth = self._life_date(groups.get('birth'))
            death = self._life_date(groups.get('death'))
            return text[:match.start()] + text[match.end():], birth, death
        return text, None, None

    def _life_date(self, phrase: Optional[str]) -> Optional[ProvenanceDate]:
        if not phrase:
            return None
        phrase = phrase.strip()
        dates = self.date_extractor.find_dates_in_string(phrase)
        if dates:
            return dates[0]
        # one to three digit years carry no era, so the extractor skips them
        year = int(re.search(r"\d+", phrase).group(0))
        return ProvenanceDate(year, Precision.YEAR, "?" not in phrase)

    def _stock_number(self, text: str) -> Tuple[str, Optional[str]]:
        match = self.STOCK_RE.search(text) or self.LOT_RE.search(text)
        if match is None:
            return text, None
        remaining = (text[:match.start()] + text[match.end():]).strip().rstrip(",").strip()
        return remaining, match.group(0).strip()

    def _split_name_and_location(self, text: str) -> Tuple[str, Optional[str]]:
        parts = text.split(",")
        end = 1
        while end < len(parts) and self._extends_name(parts[end].strip()):
            end += 1
        name = ",".join(parts[:end]).strip()
        location = ",".join(parts[end:]).strip()
        if not location or location == name:
            return name, None
        return name, location

    def _extends_name(self, part: str) -> bool:
        return any(part.startswith(extender) for extender in self.lexicon.name_extenders)


def _strip_doubt(text: str) -> Tuple[str, bool]:
    text = text.strip()
    if text.endswith("?"):
        return text[:-1].rstrip(), False
    return text, True
