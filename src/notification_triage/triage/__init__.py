"""Pull-request notification triage."""

from .checks import all_checks_passed
from .ecosystems import ECOSYSTEMS, Ecosystem, match_ecosystem
from .engine import TriageEngine, summarize
from .merger import MergeOrchestrator
from .models import (
    BranchRef,
    CheckRun,
    Notification,
    PullRequest,
    TriageOutcome,
    TriageResult,
)

__all__ = [
    "ECOSYSTEMS",
    "BranchRef",
    "CheckRun",
    "Ecosystem",
    "MergeOrchestrator",
    "Notification",
    "PullRequest",
    "TriageEngine",
    "TriageOutcome",
    "TriageResult",
    "all_checks_passed",
    "match_ecosystem",
    "summarize",
]
