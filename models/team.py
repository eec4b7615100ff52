"""Team and region data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    seed: int
    region: str  # region position, e.g. "Top Left"

    def __str__(self):
        return f"({self.seed}) {self.name}"


@dataclass(frozen=True)
class Region:
    """One quarter of the bracket: 16 seeded teams at a fixed position."""
    name: str
    position: str
    teams: tuple[Team, ...]

    def team_by_seed(self, seed: int) -> Team | None:
        for team in self.teams:
            if team.seed == seed:
                return team
        return None
