"""Aggregate evaluation of check runs."""

from collections.abc import Iterable

from .models import CheckRun


def all_checks_passed(check_runs: Iterable[CheckRun]) -> bool:
    """Return True if every check run completed successfully.

    An empty collection passes: a repository without configured checks
    should not block the merge.

    Parameters
    ----------
    check_runs : Iterable[CheckRun]
        Check runs for the latest commit on a branch.

    Returns
    -------
    bool
        True if all runs have status "completed" and conclusion "success".

    """
    return all(run.passed for run in check_runs)
