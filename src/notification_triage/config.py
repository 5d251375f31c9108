"""Runtime configuration read from the process environment."""

import os
from dataclasses import dataclass

from .github.client import GITHUB_API


@dataclass(frozen=True)
class TriageConfig:
    """Settings for a triage run.

    Attributes
    ----------
    gh_token : str
        GitHub personal access token (GH_TOKEN).
    api_url : str
        GitHub API root URL (GITHUB_API_URL).
    merge_wait_seconds : float
        Pause after a merge before verifying it (TRIAGE_MERGE_WAIT).
    request_timeout : float
        Per-request HTTP timeout in seconds (TRIAGE_REQUEST_TIMEOUT).

    """

    gh_token: str
    api_url: str = GITHUB_API
    merge_wait_seconds: float = 3.0
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "TriageConfig":
        """Build configuration from environment variables.

        Returns
        -------
        TriageConfig
            Configuration with defaults for unset optional variables.

        Raises
        ------
        ValueError
            If GH_TOKEN is not set or a numeric variable is malformed.

        """
        gh_token = os.environ.get("GH_TOKEN")
        if not gh_token:
            raise ValueError("GH_TOKEN environment variable not set")

        return cls(
            gh_token=gh_token,
            api_url=os.environ.get("GITHUB_API_URL") or GITHUB_API,
            merge_wait_seconds=_float_env("TRIAGE_MERGE_WAIT", 3.0),
            request_timeout=_float_env("TRIAGE_REQUEST_TIMEOUT", 30.0),
        )


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value
