"""Merge orchestration: merge, verify closure, then clean up the branch."""

import time

from ..github import GitHubAPIError, GitHubClient
from ..utils.logging import log_info, log_success, log_warning
from .models import BranchRef, PullRequest

# Statuses GitHub returns when deleting a reference that is already gone.
_MISSING_REF_STATUSES = (404, 422)


class MergeOrchestrator:
    """Squash-merge a pull request and delete its head branch.

    GitHub finalizes merges and repository-configured branch auto-deletion
    asynchronously, so after issuing the merge the orchestrator waits a
    fixed interval, re-fetches the pull request to confirm it is closed and
    merged, and only then deletes the branch if it still exists.

    Parameters
    ----------
    client : GitHubClient
        Authenticated API client.
    merge_wait_seconds : float, optional
        Pause between the merge call and verification (default=3.0).
    merge_method : str, optional
        GitHub merge method (default="squash").

    """

    def __init__(
        self,
        client: GitHubClient,
        merge_wait_seconds: float = 3.0,
        merge_method: str = "squash",
    ):
        self.client = client
        self.merge_wait_seconds = merge_wait_seconds
        self.merge_method = merge_method

    def merge(self, pull_request: PullRequest, branch: BranchRef) -> bool:
        """Merge the pull request and remove its head branch.

        Parameters
        ----------
        pull_request : PullRequest
            Open pull request whose checks have passed.
        branch : BranchRef
            Head branch reference of the pull request.

        Returns
        -------
        bool
            True if the merge was verified, False if the pull request is
            still not merged and needs manual intervention.

        Raises
        ------
        GitHubAPIError
            If re-fetching the pull request fails. Branch cleanup errors
            after a verified merge are logged instead.

        """
        try:
            self.client.merge_pull_request(pull_request.url, self.merge_method)
        except GitHubAPIError as e:
            # Verification below is the source of truth
            log_info(f"Merge request was rejected: {e.message}")

        time.sleep(self.merge_wait_seconds)

        refreshed = PullRequest.from_api(
            self.client.get_pull_request(pull_request.url)
        )
        if not refreshed.is_merged:
            log_info(f"Pull request state after merge: {refreshed.state}")
            return False

        log_info(
            "The pull request has been closed and merged, "
            "confirming the reference branch has been deleted ..."
        )
        try:
            self._delete_branch(branch)
        except GitHubAPIError as e:
            log_warning(f"Branch {branch.name} could not be deleted: {e}")
        return True

    def _delete_branch(self, branch: BranchRef) -> None:
        if not self.client.branch_exists(branch.ref_url):
            log_info(f"Branch {branch.name} was already deleted.")
            return

        try:
            self.client.delete_branch(branch.delete_url)
        except GitHubAPIError as e:
            if e.status_code not in _MISSING_REF_STATUSES:
                raise
            log_info(f"Branch {branch.name} was deleted concurrently.")
            return
        log_success("The pull request reference branch has been successfully deleted.")
