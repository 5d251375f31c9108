"""Authenticated GitHub REST API client via httpx."""

from typing import Any

import httpx

GITHUB_API = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with an HTTP error status.

    Parameters
    ----------
    status_code : int
        HTTP status code of the response.
    url : str
        Requested URL.
    message : str
        Error message reported by GitHub, or the raw response body.

    """

    def __init__(self, status_code: int, url: str, message: str):
        self.status_code = status_code
        self.url = url
        self.message = message
        super().__init__(f"GitHub API error {status_code} for {url}: {message}")


class GitHubClient:
    """Blocking JSON client for the GitHub REST API.

    All requests carry the same immutable set of base headers: the GitHub
    JSON media type, a bearer token and the pinned API version. Endpoints
    are addressed by absolute URL since notification payloads already
    reference the API URLs of their threads, subjects and repositories.

    Parameters
    ----------
    token : str
        GitHub personal access token.
    api_url : str, optional
        API root URL (default="https://api.github.com").
    timeout : float, optional
        Per-request timeout in seconds (default=30.0).
    transport : httpx.BaseTransport or None, optional
        Custom transport, mainly for tests.

    Attributes
    ----------
    api_url : str
        API root URL without trailing slash.

    """

    def __init__(
        self,
        token: str,
        api_url: str = GITHUB_API,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._client = httpx.Client(
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
            follow_redirects=True,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    @property
    def notifications_url(self) -> str:
        """Notifications endpoint for the authenticated user."""
        return f"{self.api_url}/notifications"

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = self._client.request(method, url, **kwargs)
        if response.status_code >= 400:
            raise GitHubAPIError(response.status_code, url, _error_message(response))
        return response

    def get_json(self, url: str) -> Any:
        """GET a resource and return its parsed JSON body.

        Raises
        ------
        GitHubAPIError
            If the response status is 400 or above.

        """
        return self._request("GET", url).json()

    def get_status(self, url: str) -> int:
        """GET a resource and return only its HTTP status code.

        Used for existence checks; HTTP error statuses do not raise.

        """
        return self._client.request("GET", url).status_code

    def put(self, url: str, payload: dict[str, Any]) -> Any:
        """PUT a JSON payload and return the parsed response body, if any."""
        response = self._request("PUT", url, json=payload)
        return response.json() if response.content else {}

    def patch(self, url: str) -> None:
        """PATCH a resource without a body."""
        self._request("PATCH", url)

    def delete(self, url: str) -> None:
        """DELETE a resource."""
        self._request("DELETE", url)

    def list_notifications(self) -> list[dict[str, Any]]:
        """List the first page of notifications for the authenticated user."""
        return self.get_json(self.notifications_url)

    def get_pull_request(self, url: str) -> dict[str, Any]:
        """Fetch a pull request by its API URL."""
        return self.get_json(url)

    def list_check_runs(self, url: str) -> list[dict[str, Any]]:
        """List check runs from a `commits/<ref>/check-runs` URL."""
        return self.get_json(url).get("check_runs", [])

    def merge_pull_request(
        self, url: str, merge_method: str = "squash"
    ) -> dict[str, Any]:
        """Request a merge of the pull request at `url`."""
        return self.put(f"{url}/merge", {"merge_method": merge_method})

    def branch_exists(self, ref_url: str) -> bool:
        """Check whether a `git/ref/heads/<branch>` URL exists.

        Returns
        -------
        bool
            True on 200, False on 404.

        Raises
        ------
        GitHubAPIError
            If the lookup answers with any other status.

        """
        status = self.get_status(ref_url)
        if status == 200:
            return True
        if status == 404:
            return False
        raise GitHubAPIError(status, ref_url, "unexpected reference lookup status")

    def delete_branch(self, delete_url: str) -> None:
        """Delete a `git/refs/heads/<branch>` reference."""
        self.delete(delete_url)

    def mark_thread_read(self, thread_url: str) -> None:
        """Mark a notification thread as read."""
        self.patch(thread_url)

    def mark_thread_done(self, thread_url: str) -> None:
        """Mark a notification thread as done, removing it from the inbox."""
        self.delete(thread_url)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and "message" in data:
        return str(data["message"])
    return response.text
