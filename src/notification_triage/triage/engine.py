"""Notification triage engine for pull-request notifications."""

from collections import Counter

from ..github import GitHubAPIError, GitHubClient
from ..utils.logging import log_error, log_info, log_success, log_warning
from .checks import all_checks_passed
from .ecosystems import ECOSYSTEMS, Ecosystem, match_ecosystem
from .merger import MergeOrchestrator
from .models import (
    BranchRef,
    CheckRun,
    Notification,
    PullRequest,
    TriageOutcome,
    TriageResult,
)


class TriageEngine:
    """Triage pull-request notifications one at a time.

    For each notification the engine fetches the current pull request and
    decides between clearing an already-closed pull request, merging a
    passing Dependabot pull request on a recognized ecosystem, or leaving
    the notification in place for manual review.

    Parameters
    ----------
    client : GitHubClient
        Authenticated API client.
    merger : MergeOrchestrator
        Orchestrator used for eligible pull requests.
    ecosystems : tuple[Ecosystem, ...], optional
        Ecosystems eligible for automatic merging (default=ECOSYSTEMS).

    """

    def __init__(
        self,
        client: GitHubClient,
        merger: MergeOrchestrator,
        ecosystems: tuple[Ecosystem, ...] = ECOSYSTEMS,
    ):
        self.client = client
        self.merger = merger
        self.ecosystems = ecosystems

    def list_pull_request_notifications(self) -> list[Notification]:
        """Fetch the notification inbox once and keep pull-request threads."""
        notifications = [
            Notification.from_api(item)
            for item in self.client.list_notifications()
        ]
        return [n for n in notifications if n.is_pull_request]

    def run(self) -> list[TriageResult]:
        """Triage every pull-request notification in a single inbox snapshot.

        Returns
        -------
        list[TriageResult]
            One result per processed notification, in listing order.

        Raises
        ------
        GitHubAPIError
            If the notification listing fails. API errors while handling a
            single notification are reported as an `error` outcome instead.

        """
        log_info("Listing notifications for the authenticated user ...")
        notifications = self.list_pull_request_notifications()
        log_info(f"Found {len(notifications)} pull request notification(s)")

        results = []
        for notification in notifications:
            try:
                results.append(self.process(notification))
            except GitHubAPIError as e:
                log_error(f"Notification left open after API error: {e}")
                results.append(
                    TriageResult(notification, TriageOutcome.ERROR, pull_request=None)
                )
        return results

    def process(self, notification: Notification) -> TriageResult:
        """Triage a single pull-request notification.

        Parameters
        ----------
        notification : Notification
            Notification whose subject is a pull request.

        Returns
        -------
        TriageResult
            Terminal decision for the notification.

        """
        log_info(f"Processing notification for: {notification.subject_url}")
        pull_request = PullRequest.from_api(
            self.client.get_pull_request(notification.subject_url)
        )

        if pull_request.is_closed:
            self.clear(notification)
            return self._report(
                notification, pull_request, TriageOutcome.CLOSED_ALREADY
            )

        branch = BranchRef(notification.repository_url, pull_request.head_ref)
        if not all_checks_passed(self.fetch_check_runs(branch)):
            return self._report(
                notification, pull_request, TriageOutcome.CHECKS_FAILED
            )

        ecosystem = match_ecosystem(pull_request.head_ref, self.ecosystems)
        if ecosystem is None:
            return self._report(notification, pull_request, TriageOutcome.INELIGIBLE)

        log_info(
            f"Dependabot is updating {ecosystem.description}, "
            "merging the pull request ..."
        )
        if not self.merger.merge(pull_request, branch):
            return self._report(
                notification, pull_request, TriageOutcome.MERGE_FAILED, ecosystem
            )

        self.clear(notification)
        return self._report(
            notification, pull_request, TriageOutcome.MERGED, ecosystem
        )

    def fetch_check_runs(self, branch: BranchRef) -> list[CheckRun]:
        """Fetch check runs for the latest commit on a branch."""
        return [
            CheckRun.from_api(run)
            for run in self.client.list_check_runs(branch.check_runs_url)
        ]

    def clear(self, notification: Notification) -> None:
        """Mark a notification thread as read, then as done."""
        self.client.mark_thread_read(notification.thread_url)
        self.client.mark_thread_done(notification.thread_url)

    def _report(
        self,
        notification: Notification,
        pull_request: PullRequest,
        outcome: TriageOutcome,
        ecosystem: Ecosystem | None = None,
    ) -> TriageResult:
        if outcome is TriageOutcome.CLOSED_ALREADY:
            log_success(
                "Pull request is closed, the notification has been marked as done."
            )
        elif outcome is TriageOutcome.MERGED:
            log_success(
                "Pull request has been merged, the notification has been marked done."
            )
        elif outcome is TriageOutcome.CHECKS_FAILED:
            log_warning(
                "Status checks have not passed, "
                "this pull request requires manual intervention."
            )
        elif outcome is TriageOutcome.INELIGIBLE:
            log_warning(
                f"Branch {pull_request.head_ref} is not a recognized dependency "
                "update, this pull request requires manual intervention."
            )
        else:
            log_warning("Merge could not be verified, leaving the notification open.")

        return TriageResult(
            notification=notification,
            outcome=outcome,
            pull_request=pull_request,
            ecosystem=ecosystem.tag if ecosystem else None,
        )


def summarize(results: list[TriageResult]) -> dict[TriageOutcome, int]:
    """Count triage results per outcome, including outcomes with zero results."""
    counts = Counter(result.outcome for result in results)
    return {outcome: counts.get(outcome, 0) for outcome in TriageOutcome}
