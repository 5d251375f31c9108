"""Data models for notification triage."""

from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import quote


@dataclass(frozen=True)
class Notification:
    """A notification thread from the authenticated user's inbox.

    Attributes
    ----------
    id : str
        Notification thread identifier.
    thread_url : str
        API URL of the notification thread.
    subject_type : str
        Subject type (e.g., "PullRequest", "Issue", "Release").
    subject_url : str
        API URL of the subject (the pull request for PR notifications).
    repository_url : str
        API URL of the repository the notification belongs to.

    """

    id: str
    thread_url: str
    subject_type: str
    subject_url: str
    repository_url: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Notification":
        """Build a notification from a `GET /notifications` entry."""
        subject = data.get("subject") or {}
        repository = data.get("repository") or {}
        return cls(
            id=str(data["id"]),
            thread_url=data["url"],
            subject_type=subject.get("type", ""),
            subject_url=subject.get("url") or "",
            repository_url=repository.get("url", ""),
        )

    @property
    def is_pull_request(self) -> bool:
        """Whether the notification subject is a pull request."""
        return self.subject_type == "PullRequest"


@dataclass(frozen=True)
class PullRequest:
    """Snapshot of a pull request as returned by the API.

    The server-side state changes between fetches, so a new snapshot is
    fetched whenever freshness matters (e.g., after a merge attempt).

    Attributes
    ----------
    url : str
        API URL of the pull request.
    state : str
        Either "open" or "closed".
    merged : bool
        Whether the pull request has been merged.
    head_ref : str
        Name of the head (compare) branch.

    """

    url: str
    state: str
    merged: bool
    head_ref: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequest":
        """Build a pull request from a `GET /repos/.../pulls/N` response."""
        head = data.get("head") or {}
        return cls(
            url=data["url"],
            state=data["state"],
            merged=bool(data.get("merged", False)),
            head_ref=head.get("ref", ""),
        )

    @property
    def is_closed(self) -> bool:
        """Whether the pull request is closed, merged or not."""
        return self.state == "closed"

    @property
    def is_merged(self) -> bool:
        """Whether the pull request is both closed and merged."""
        return self.is_closed and self.merged


@dataclass(frozen=True)
class CheckRun:
    """A single check run attached to a commit."""

    name: str
    status: str
    conclusion: str | None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CheckRun":
        """Build a check run from a `check_runs` array entry."""
        return cls(
            name=data.get("name", ""),
            status=data.get("status", ""),
            conclusion=data.get("conclusion"),
        )

    @property
    def passed(self) -> bool:
        """Whether the run completed with a successful conclusion."""
        return self.status == "completed" and self.conclusion == "success"


@dataclass(frozen=True)
class BranchRef:
    """Git reference of a pull request's head branch.

    Attributes
    ----------
    repository_url : str
        API URL of the repository that owns the branch.
    name : str
        Branch name, possibly containing slashes.

    """

    repository_url: str
    name: str

    @property
    def _quoted_name(self) -> str:
        return quote(self.name, safe="/")

    @property
    def ref_url(self) -> str:
        """Exact-match reference URL, 200 when the branch exists and 404 otherwise."""
        return f"{self.repository_url}/git/ref/heads/{self._quoted_name}"

    @property
    def delete_url(self) -> str:
        """Reference URL accepted by the delete-reference endpoint."""
        return f"{self.repository_url}/git/refs/heads/{self._quoted_name}"

    @property
    def check_runs_url(self) -> str:
        """Check runs for the latest commit on the branch."""
        return f"{self.repository_url}/commits/{self._quoted_name}/check-runs"


class TriageOutcome(str, Enum):
    """Terminal decision for a single pull-request notification."""

    CLOSED_ALREADY = "closed_already"
    CHECKS_FAILED = "checks_failed"
    INELIGIBLE = "ineligible"
    MERGED = "merged"
    MERGE_FAILED = "merge_failed"
    ERROR = "error"

    @property
    def cleared(self) -> bool:
        """Whether the notification was cleared for this outcome."""
        return self in (TriageOutcome.CLOSED_ALREADY, TriageOutcome.MERGED)


@dataclass(frozen=True)
class TriageResult:
    """Result of triaging one notification.

    Attributes
    ----------
    notification : Notification
        The notification that was processed.
    outcome : TriageOutcome
        Terminal decision.
    pull_request : PullRequest or None
        Pull request snapshot the decision was based on, None if it could
        not be fetched.
    ecosystem : str or None
        Matched ecosystem tag, when the branch was classified.

    """

    notification: Notification
    outcome: TriageOutcome
    pull_request: PullRequest | None
    ecosystem: str | None = None
