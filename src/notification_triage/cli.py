"""CLI entry point for gh-notification-triage."""

import sys
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version
from typing import NoReturn

import click
import httpx
from rich.table import Table

from .config import TriageConfig
from .github import GitHubAPIError, GitHubClient
from .triage import ECOSYSTEMS, MergeOrchestrator, TriageEngine, summarize
from .triage.models import TriageResult
from .utils.logging import get_console, log_error, log_info


def get_version() -> str:
    """Get the installed version of the package.

    Returns
    -------
    str
        Version string from package metadata.

    """
    try:
        return version("gh-notification-triage")
    except PackageNotFoundError:
        return "unknown"


def version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Show version and exit."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"gh-notification-triage {get_version()}")
    ctx.exit()


def _fail(status: int) -> NoReturn:
    log_error(f"Exit Status: {status}")
    sys.exit(status)


def _print_summary(results: list[TriageResult]) -> None:
    table = Table(title="Triage summary")
    table.add_column("Outcome", style="bold")
    table.add_column("Notifications", justify="right")
    for outcome, count in summarize(results).items():
        table.add_row(outcome.value, str(count))
    get_console().print(table)


@click.group(
    help="Triage pull-request notifications and merge passing Dependabot updates",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
def cli() -> None:
    """Triage GitHub pull-request notifications."""


@cli.command()
@click.option(
    "--merge-wait",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait after merging before verifying (default: 3)",
)
@click.option("--api-url", default=None, help="GitHub API root URL")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-request HTTP timeout in seconds (default: 30)",
)
def run(merge_wait: float | None, api_url: str | None, timeout: float | None) -> None:
    r"""Process every pull-request notification once.

    Closed pull requests have their notification cleared. Open Dependabot
    pull requests on a recognized ecosystem whose checks all passed are
    squash-merged, their branch is deleted and the notification cleared.
    Everything else is left in the inbox for manual review.

    Requires the GH_TOKEN environment variable.

    Examples:
      \b
      GH_TOKEN=ghp_... gh-notification-triage run
      GH_TOKEN=ghp_... gh-notification-triage run --merge-wait 5

    """
    try:
        config = TriageConfig.from_env()
    except ValueError as e:
        log_error(f"Configuration error: {e}")
        _fail(1)

    if merge_wait is not None:
        config = replace(config, merge_wait_seconds=merge_wait)
    if api_url:
        config = replace(config, api_url=api_url)
    if timeout is not None:
        config = replace(config, request_timeout=timeout)

    try:
        with GitHubClient(
            config.gh_token, api_url=config.api_url, timeout=config.request_timeout
        ) as client:
            merger = MergeOrchestrator(
                client, merge_wait_seconds=config.merge_wait_seconds
            )
            results = TriageEngine(client, merger).run()
    except GitHubAPIError as e:
        log_error(str(e))
        _fail(1)
    except httpx.HTTPError as e:
        log_error(f"Request failed: {e}")
        _fail(1)

    _print_summary(results)
    log_info(
        f"{sum(r.outcome.cleared for r in results)} of {len(results)} "
        "notification(s) cleared"
    )


@cli.command()
def ecosystems() -> None:
    """List the Dependabot ecosystems eligible for automatic merging."""
    table = Table(title="Recognized ecosystems")
    table.add_column("Tag", style="bold cyan")
    table.add_column("Branch pattern")
    table.add_column("Description")
    for ecosystem in ECOSYSTEMS:
        table.add_row(ecosystem.tag, ecosystem.pattern, ecosystem.description)
    get_console().print(table)


if __name__ == "__main__":
    cli()
