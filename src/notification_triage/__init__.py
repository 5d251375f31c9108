"""GitHub notification triage - merge passing Dependabot pull requests."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gh-notification-triage")
except PackageNotFoundError:
    # Package not installed, use fallback
    __version__ = "0.1.0.dev"

from .config import TriageConfig
from .github import GitHubAPIError, GitHubClient
from .triage import (
    CheckRun,
    MergeOrchestrator,
    Notification,
    PullRequest,
    TriageEngine,
    TriageOutcome,
    TriageResult,
    all_checks_passed,
    match_ecosystem,
)

__all__ = [
    "CheckRun",
    "GitHubAPIError",
    "GitHubClient",
    "MergeOrchestrator",
    "Notification",
    "PullRequest",
    "TriageConfig",
    "TriageEngine",
    "TriageOutcome",
    "TriageResult",
    "all_checks_passed",
    "match_ecosystem",
    "__version__",
]
