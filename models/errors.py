"""Bracket errors and validation violations.

Structural problems with the tournament itself are raised as exceptions.
Problems with a pick set or result set are collected as Violation records so
that every problem can be reported in one pass.
"""

import enum
from dataclasses import dataclass


class BracketError(Exception):
    """Base class for bracket engine errors."""


class MalformedSeedingError(BracketError):
    """The seeding table can't produce a 64-team bracket."""


class InconsistentResultSetError(BracketError):
    """A result set contradicts the bracket's advancement rules."""

    def __init__(self, violations):
        self.violations = list(violations)
        lines = "; ".join(v.message for v in self.violations[:5])
        more = f" (+{len(self.violations) - 5} more)" if len(self.violations) > 5 else ""
        super().__init__(f"Inconsistent result set: {lines}{more}")


class ViolationKind(enum.Enum):
    INCOMPLETE_PICK_SET = "IncompletePickSet"
    BROKEN_ADVANCEMENT_CHAIN = "BrokenAdvancementChain"
    UNKNOWN_GAME_ID = "UnknownGameId"
    UNKNOWN_TEAM_ID = "UnknownTeamId"


@dataclass(frozen=True)
class Violation:
    kind: ViolationKind
    game_id: str
    message: str
    team_id: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    def of_kind(self, kind: ViolationKind) -> list[Violation]:
        return [v for v in self.violations if v.kind == kind]

    def invalid_game_ids(self) -> set[str]:
        return {v.game_id for v in self.violations}
