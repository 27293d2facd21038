"""art_provenance package: Extracts structured ownership timelines from artwork provenance records."""

from art_provenance.acquisition_method import AcquisitionMethod, AcquisitionMethodClassifier
from art_provenance.date_extractor import DateExtractor
from art_provenance.errors import DateError, ProvenanceError, ProvenanceFormatError
from art_provenance.field_extractor import FieldExtractor
from art_provenance.lexicon import ProvenanceLexicon
from art_provenance.model import BatchResult, ExtractionResult, Issue
from art_provenance.party import Party
from art_provenance.period import Period
from art_provenance.period_output import PeriodOutput
from art_provenance.provenance import ProvenanceExtractor, extract, from_dict, from_json
from art_provenance.provenance_date import Precision, ProvenanceDate
from art_provenance.segmenter import RecordSegmenter
from art_provenance.text_normalizer import TextNormalizer
from art_provenance.time_span import TimeSpan, TimeSpanParser, TimeSpanResult
from art_provenance.timeline import Timeline

__all__ = [
    "AcquisitionMethod",
    "AcquisitionMethodClassifier",
    "BatchResult",
    "DateError",
    "DateExtractor",
    "ExtractionResult",
    "FieldExtractor",
    "Issue",
    "Party",
    "Period",
    "PeriodOutput",
    "Precision",
    "ProvenanceDate",
    "ProvenanceError",
    "ProvenanceExtractor",
    "ProvenanceFormatError",
    "ProvenanceLexicon",
    "RecordSegmenter",
    "TextNormalizer",
    "TimeSpan",
    "TimeSpanParser",
    "TimeSpanResult",
    "Timeline",
    "extract",
    "from_dict",
    "from_json",
]
