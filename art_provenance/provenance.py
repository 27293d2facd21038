"""
provenance.py - Provenance record extraction pipeline.

Provides the ProvenanceExtractor class, which turns the free-text ownership
history of an artwork into a Timeline of Periods:

    text -> RecordSegmenter -> FieldExtractor (per fragment) -> Timeline

and rebuilds a Timeline from its structured (dict/JSON) form without running
the text pipeline. Module-level extract(), from_dict() and from_json() use a
shared extractor with the default lexicon.

Module: art_provenance.provenance
Last updated: 2026-10-18
"""
from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional, Union

from .app_hooks import AppHooks
from .date_extractor import DateExtractor
from .errors import DateError, ProvenanceFormatError
from .field_extractor import FieldExtractor
from .lexicon import ProvenanceLexicon
from .model import BatchResult, ExtractionResult, Issue
from .period_output import PeriodOutput
from .segmenter import RecordSegmenter
from .text_normalizer import TextNormalizer
from .timeline import Timeline

logger = logging.getLogger(__name__)

__all__ = ['ProvenanceExtractor', 'extract', 'from_dict', 'from_json']


class ProvenanceExtractor:
    """
    Extracts Timelines from provenance records.

    An extractor holds only read-only configuration, so one instance can
    serve any number of records.

    Attributes:
        lexicon (ProvenanceLexicon): Vocabularies shared by every stage.
        segmenter (RecordSegmenter): Splits records into fragments.
        field_extractor (FieldExtractor): Builds a Period per fragment.
        app_hooks (Optional[AppHooks]): Progress and stop hooks for
            extract_many.
    """

    def __init__(self, lexicon: Optional[ProvenanceLexicon] = None,
                 app_hooks: Optional[AppHooks] = None) -> None:
        self.lexicon = lexicon or ProvenanceLexicon.default()
        normalizer = TextNormalizer(self.lexicon)
        self.segmenter = RecordSegmenter(self.lexicon, normalizer)
        self.field_extractor = FieldExtractor(self.lexicon, DateExtractor())
        self.app_hooks = app_hooks

    def run(self, text: str, record_id: Optional[str] = None) -> ExtractionResult:
        """
        Extract a record, returning the Timeline together with its issues.

        Fragments that follow a ';' are appended as direct transfers. If the
        dates of the two periods rule that out, the period is appended
        without the direct-transfer mark and a 'direct_transfer_conflict'
        issue is recorded.

        Args:
            text (str): Provenance record.
            record_id (Optional[str]): Identifier echoed into the result.

        Returns:
            ExtractionResult
        """
        timeline = Timeline(self.lexicon.footnote_divider)
        issues: List[Issue] = []
        text = re.sub(r"\s+", " ", text or "").strip()
        if not text:
            return ExtractionResult(timeline=timeline, issues=issues, record_id=record_id)

        segmentation = self.segmenter.segment(text)
        logger.debug("ProvenanceExtractor: %d fragments, %d footnotes",
                     len(segmentation.fragments), len(segmentation.notes))
        for fragment in segmentation.fragments:
            period, fragment_issues = self.field_extractor.extract(
                fragment.text, segmentation.notes, fragment.index)
            issues.extend(fragment_issues)
            if not fragment.follows_directly:
                timeline.insert(period)
                continue
            try:
                timeline.insert_direct(period)
            except DateError as e:
                logger.warning("ProvenanceExtractor: direct transfer to fragment %d rejected: %s",
                               fragment.index, e)
                issues.append(Issue(
                    issue_type="direct_transfer_conflict",
                    severity="warning",
                    message=str(e),
                    fragment_index=fragment.index,
                    text=fragment.text,
                ))
                timeline.insert(period)
        return ExtractionResult(timeline=timeline, issues=issues, record_id=record_id)

    def extract(self, text: str) -> Timeline:
        """Extract a record to a Timeline, discarding the issues."""
        return self.run(text).timeline

    def extract_many(self, records: Dict[str, str]) -> BatchResult:
        """
        Extract many records, each independently.

        Args:
            records (Dict[str, str]): Provenance text by record id.

        Returns:
            BatchResult: Results by record id; `stopped` is set if the app
            hooks asked to stop before the last record.
        """
        batch = BatchResult()
        self._report_step(info="Extracting provenance", target=len(records), reset_counter=True, plus_step=0)
        for record_id, text in records.items():
            if self._stop_requested("Provenance extraction stopped by user"):
                batch.stopped = True
                break
            batch.results[record_id] = self.run(text, record_id=record_id)
            self._report_step(plus_step=1)
        self._update_key_value("issues", len(batch.issues))
        logger.info("Extracted %d of %d provenance records (%d issues)",
                    len(batch), len(records), len(batch.issues))
        return batch

    def from_dict(self, data: Dict[str, Any]) -> Timeline:
        """
        Rebuild a Timeline from the output of Timeline.to_dict().

        Args:
            data (Dict[str, Any]): {"period": [record, ...]}

        Returns:
            Timeline

        Raises:
            ProvenanceFormatError: If the data does not have that shape.
        """
        if not isinstance(data, dict) or not isinstance(data.get("period"), list):
            raise ProvenanceFormatError('Expected an object with a "period" list')
        timeline = Timeline(self.lexicon.footnote_divider)
        last_was_direct = False
        for number, record in enumerate(data["period"]):
            output = PeriodOutput.from_dict(record)
            period = output.to_period(self.lexicon.classifier)
            if last_was_direct:
                try:
                    timeline.insert_direct(period)
                except DateError as e:
                    raise ProvenanceFormatError(f"Period {number}: {e}") from e
            else:
                timeline.insert(period)
            last_was_direct = output.direct_transfer
        return timeline

    def from_json(self, text: Union[str, bytes]) -> Timeline:
        """
        Rebuild a Timeline from the output of Timeline.to_json().

        Raises:
            ProvenanceFormatError: If the text is not JSON of that shape.
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise ProvenanceFormatError(f"Invalid provenance JSON: {e}") from e
        return self.from_dict(data)

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False,
                     plus_step: int = 0) -> None:
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        elif info:
            logger.debug(info)

    def _stop_requested(self, logger_stop_message: str = "Stop requested by user") -> bool:
        if self.app_hooks and callable(getattr(self.app_hooks, "stop_requested", None)):
            if self.app_hooks.stop_requested():
                logger.debug(logger_stop_message)
                return True
        return False

    def _update_key_value(self, key: str, value) -> None:
        if self.app_hooks and callable(getattr(self.app_hooks, "update_key_value", None)):
            self.app_hooks.update_key_value(key, value)


@lru_cache(maxsize=1)
def _default_extractor() -> ProvenanceExtractor:
    return ProvenanceExtractor()


def extract(text: str) -> Timeline:
    """Extract a provenance record with the default lexicon."""
    return _default_extractor().extract(text)


def from_dict(data: Dict[str, Any]) -> Timeline:
    """Rebuild a Timeline from its dict form with the default lexicon."""
    return _default_extractor().from_dict(data)


def from_json(text: Union[str, bytes]) -> Timeline:
    """Rebuild a Timeline from its JSON form with the default lexicon."""
    return _default_extractor().from_json(text)
