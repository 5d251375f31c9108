"""Recognized Dependabot ecosystems eligible for automatic merging."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ecosystem:
    """A dependency ecosystem identified by Dependabot's branch naming.

    Attributes
    ----------
    tag : str
        Short ecosystem identifier.
    pattern : str
        Substring that marks a Dependabot branch for this ecosystem.
    description : str
        Human-readable description used in log output.

    """

    tag: str
    pattern: str
    description: str

    def matches(self, branch_name: str) -> bool:
        """Whether the pattern appears anywhere in the branch name."""
        return self.pattern in branch_name


GITHUB_ACTIONS = Ecosystem(
    tag="github_actions",
    pattern="dependabot/github_actions",
    description="a GitHub Actions dependency",
)
GO_MODULES = Ecosystem(
    tag="go_modules",
    pattern="dependabot/go_modules",
    description="a Go module dependency",
)

ECOSYSTEMS: tuple[Ecosystem, ...] = (GITHUB_ACTIONS, GO_MODULES)


def match_ecosystem(
    branch_name: str, ecosystems: tuple[Ecosystem, ...] = ECOSYSTEMS
) -> Ecosystem | None:
    """Classify a head branch name against the recognized ecosystems.

    Parameters
    ----------
    branch_name : str
        Pull request head branch name.
    ecosystems : tuple[Ecosystem, ...], optional
        Ecosystems to match against, in priority order (default=ECOSYSTEMS).

    Returns
    -------
    Ecosystem or None
        First matching ecosystem, or None if the branch is not recognized.

    """
    for ecosystem in ecosystems:
        if ecosystem.matches(branch_name):
            return ecosystem
    return None
