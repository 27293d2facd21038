from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Literal, Optional

if TYPE_CHECKING:
    from .timeline import Timeline


@dataclass(frozen=True)
class Issue:
    """
    A problem found while extracting a record.

    Attributes:
        issue_type (str): Machine-readable kind ('unparsable_date',
            'unresolved_footnote', 'direct_transfer_conflict').
        severity: 'info', 'warning' or 'error'.
        message (str): Human-readable description.
        fragment_index (Optional[int]): Fragment the issue belongs to.
        text (Optional[str]): Fragment text.
    """
    issue_type: str
    severity: Literal["info", "warning", "error"]
    message: str
    fragment_index: Optional[int] = None
    text: Optional[str] = None


@dataclass
class ExtractionResult:
    """Timeline built from one record, with the issues met along the way."""
    timeline: "Timeline"
    issues: List[Issue] = field(default_factory=list)
    record_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not any(issue.severity == "error" for issue in self.issues)

    def issues_of_type(self, issue_type: str) -> List[Issue]:
        return [issue for issue in self.issues if issue.issue_type == issue_type]


@dataclass
class BatchResult:
    """
    Results of extracting many records.

    Attributes:
        results (Dict[str, ExtractionResult]): Per record id, in input order.
        stopped (bool): True if the run was stopped before every record was
            processed.
    """
    results: Dict[str, ExtractionResult] = field(default_factory=dict)
    stopped: bool = False

    @property
    def issues(self) -> List[Issue]:
        return [issue for result in self.results.values() for issue in result.issues]

    def __len__(self) -> int:
        return len(self.results)
