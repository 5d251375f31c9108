"""Shared fixtures: an in-memory GitHub served through httpx.MockTransport."""

import json
from typing import Any
from urllib.parse import unquote

import httpx
import pytest

from notification_triage.github import GitHubClient
from notification_triage.triage import MergeOrchestrator, TriageEngine

API = "https://api.github.com"
REPO = f"{API}/repos/acme/widgets"


def make_pull(
    number: int, head_ref: str, state: str = "open", merged: bool = False
) -> dict[str, Any]:
    """Build a pull request payload as returned by GET /pulls/N."""
    return {
        "url": f"{REPO}/pulls/{number}",
        "number": number,
        "state": state,
        "merged": merged,
        "head": {"ref": head_ref, "sha": f"sha{number}"},
    }


def make_notification(
    thread_id: str, number: int, subject_type: str = "PullRequest"
) -> dict[str, Any]:
    """Build a notification payload as returned by GET /notifications."""
    return {
        "id": thread_id,
        "url": f"{API}/notifications/threads/{thread_id}",
        "unread": True,
        "subject": {
            "title": f"Subject {number}",
            "type": subject_type,
            "url": f"{REPO}/pulls/{number}",
        },
        "repository": {"full_name": "acme/widgets", "url": REPO},
    }


def check_run(status: str = "completed", conclusion: str | None = "success"):
    """Build a check run payload."""
    return {"name": "build", "status": status, "conclusion": conclusion}


class FakeGitHub:
    """Minimal stateful stand-in for the GitHub REST API.

    Attributes
    ----------
    notifications : list[dict]
        Inbox content; DELETE on a thread removes it.
    pulls : dict[str, dict]
        Pull request payloads keyed by API URL.
    check_runs : dict[str, list[dict]]
        Check runs keyed by branch name.
    branches : set[str]
        Existing branch names.
    merge_status : int
        Status answered to merge requests.
    merge_takes_effect : bool
        Whether an accepted merge actually closes the pull request.
    auto_delete_branch : bool
        Whether the repository deletes head branches on merge.
    notifications_status : int
        Status answered to the inbox listing.
    requests : list[tuple[str, str]]
        Every (method, url) received, in order.

    """

    def __init__(self) -> None:
        self.notifications: list[dict[str, Any]] = []
        self.pulls: dict[str, dict[str, Any]] = {}
        self.check_runs: dict[str, list[dict[str, Any]]] = {}
        self.branches: set[str] = set()
        self.merge_status = 200
        self.merge_takes_effect = True
        self.auto_delete_branch = False
        self.notifications_status = 200
        self.requests: list[tuple[str, str]] = []
        self.merge_bodies: list[dict[str, Any]] = []

    def add_pull_request(
        self,
        thread_id: str,
        number: int,
        head_ref: str,
        state: str = "open",
        merged: bool = False,
        checks: list[dict[str, Any]] | None = None,
    ) -> None:
        """Register a pull request with its notification, branch and checks."""
        pull = make_pull(number, head_ref, state=state, merged=merged)
        self.pulls[pull["url"]] = pull
        self.notifications.append(make_notification(thread_id, number))
        self.check_runs[head_ref] = checks or []
        if not merged:
            self.branches.add(head_ref)

    def calls(self, method: str, fragment: str = "") -> list[str]:
        """URLs requested with a method, optionally containing a fragment."""
        return [u for m, u in self.requests if m == method and fragment in u]

    @property
    def mutations(self) -> list[tuple[str, str]]:
        """All non-GET requests."""
        return [(m, u) for m, u in self.requests if m != "GET"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        url = str(request.url)
        self.requests.append((method, url))

        if method == "GET" and url == f"{API}/notifications":
            if self.notifications_status != 200:
                return httpx.Response(
                    self.notifications_status, json={"message": "Bad credentials"}
                )
            return httpx.Response(200, json=self.notifications)

        if "/notifications/threads/" in url:
            if method == "PATCH":
                return httpx.Response(205)
            if method == "DELETE":
                self.notifications = [n for n in self.notifications if n["url"] != url]
                return httpx.Response(204)

        if method == "PUT" and url.endswith("/merge"):
            return self._merge(url.removesuffix("/merge"), request)

        if method == "GET" and url in self.pulls:
            return httpx.Response(200, json=self.pulls[url])

        if method == "GET" and url.endswith("/check-runs"):
            branch = unquote(url.split("/commits/", 1)[1].removesuffix("/check-runs"))
            runs = self.check_runs.get(branch, [])
            payload = {"total_count": len(runs), "check_runs": runs}
            return httpx.Response(200, json=payload)

        if method == "GET" and "/git/ref/heads/" in url:
            branch = unquote(url.split("/git/ref/heads/", 1)[1])
            if branch in self.branches:
                return httpx.Response(200, json={"ref": f"refs/heads/{branch}"})
            return httpx.Response(404, json={"message": "Not Found"})

        if method == "DELETE" and "/git/refs/heads/" in url:
            branch = unquote(url.split("/git/refs/heads/", 1)[1])
            if branch in self.branches:
                self.branches.discard(branch)
                return httpx.Response(204)
            return httpx.Response(422, json={"message": "Reference does not exist"})

        return httpx.Response(404, json={"message": "Not Found"})

    def _merge(self, pull_url: str, request: httpx.Request) -> httpx.Response:
        self.merge_bodies.append(json.loads(request.content))
        if self.merge_status != 200:
            return httpx.Response(
                self.merge_status, json={"message": "Pull Request is not mergeable"}
            )
        pull = self.pulls[pull_url]
        if self.merge_takes_effect:
            pull["state"] = "closed"
            pull["merged"] = True
            if self.auto_delete_branch:
                self.branches.discard(pull["head"]["ref"])
        return httpx.Response(
            200, json={"merged": True, "message": "Pull Request successfully merged"}
        )


@pytest.fixture
def fake_github():
    """Empty fake GitHub."""
    return FakeGitHub()


@pytest.fixture
def client(fake_github):
    """GitHubClient wired to the fake GitHub."""
    with GitHubClient(
        "test-token", api_url=API, transport=httpx.MockTransport(fake_github.handler)
    ) as gh:
        yield gh


@pytest.fixture
def merger(client):
    """Merge orchestrator without the post-merge wait."""
    return MergeOrchestrator(client, merge_wait_seconds=0)


@pytest.fixture
def engine(client, merger):
    """Triage engine backed by the fake GitHub."""
    return TriageEngine(client, merger)
