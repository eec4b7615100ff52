"""Bracket data structure.

The bracket is a binary tree of 63 games rooted at the championship.
- Round of 64 games are the leaves; each names its two seeded teams directly.
- Every later game names the two feeder games whose winners meet in it.
- Games are keyed by a stable string id that stored pick sets depend on:
    "<region position>-<round code>-<sequence>"   e.g. "Top Left-r64-3"
    "final-four-1", "final-four-2", "championship"

Within each region the Round of 64 games follow standard seed matchup order:
Game 1: 1 v 16, Game 2: 8 v 9, Game 3: 5 v 12, Game 4: 4 v 13,
Game 5: 6 v 11, Game 6: 3 v 14, Game 7: 7 v 10, Game 8: 2 v 15

Round of 32 game k is fed by Round of 64 games 2k-1 and 2k, and so on up to the
Elite 8. The graph is built by engine.generator.build_bracket and never mutated.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator

from models.team import Region, Team

FINAL_FOUR_IDS = ("final-four-1", "final-four-2")
CHAMPIONSHIP_ID = "championship"


class Round(enum.IntEnum):
    ROUND_OF_64 = 1
    ROUND_OF_32 = 2
    SWEET_16 = 3
    ELITE_8 = 4
    FINAL_FOUR = 5
    CHAMPIONSHIP = 6

    @property
    def label(self) -> str:
        return ROUND_LABELS[self]

    @property
    def code(self) -> str | None:
        """Id code for regional rounds; None for Final Four / Championship."""
        return ROUND_CODES.get(self)

    @classmethod
    def from_label(cls, label: str) -> Round:
        """Look up a round by its display label or a common alias."""
        key = label.strip().lower()
        for rnd, names in ROUND_ALIASES.items():
            if key in names:
                return rnd
        raise ValueError(f"Unknown round: {label!r}")


ROUND_LABELS = {
    Round.ROUND_OF_64: "Round of 64",
    Round.ROUND_OF_32: "Round of 32",
    Round.SWEET_16: "Sweet 16",
    Round.ELITE_8: "Elite 8",
    Round.FINAL_FOUR: "Final Four",
    Round.CHAMPIONSHIP: "Championship",
}

ROUND_CODES = {
    Round.ROUND_OF_64: "r64",
    Round.ROUND_OF_32: "r32",
    Round.SWEET_16: "s16",
    Round.ELITE_8: "e8",
}

# Labels used by the rules page and older tournament files
ROUND_ALIASES = {
    Round.ROUND_OF_64: {"round of 64", "first round", "r64", "1"},
    Round.ROUND_OF_32: {"round of 32", "second round", "r32", "2"},
    Round.SWEET_16: {"sweet 16", "sweet sixteen", "s16", "3"},
    Round.ELITE_8: {"elite 8", "elite eight", "e8", "4"},
    Round.FINAL_FOUR: {"final four", "final 4", "semifinal", "semifinals", "5"},
    Round.CHAMPIONSHIP: {"championship", "championship game", "final", "finals", "6"},
}


def regional_game_id(position: str, round_num: Round, number: int) -> str:
    return f"{position}-{round_num.code}-{number}"


@dataclass(frozen=True)
class Game:
    id: str
    round: Round
    number: int  # sequence within its region and round (1-based)
    points: int
    region: str | None = None  # region position; None for Final Four / Championship
    teams: tuple[str, str] | None = None  # Round of 64: the two seeded team ids
    feeders: tuple[str, str] | None = None  # later rounds: the two feeder game ids

    @property
    def is_first_round(self) -> bool:
        return self.round == Round.ROUND_OF_64


class BracketGraph:
    """The immutable 63-game graph for one tournament year."""

    def __init__(self, regions: tuple[Region, ...], games: dict[str, Game]):
        self.regions = tuple(regions)
        self.games = MappingProxyType(dict(games))
        self.teams: MappingProxyType[str, Team] = MappingProxyType(
            {team.id: team for region in self.regions for team in region.teams}
        )

        next_game: dict[str, str] = {}
        first_round: dict[str, str] = {}
        for game in self.games.values():
            if game.feeders:
                for feeder in game.feeders:
                    next_game[feeder] = game.id
            if game.teams:
                for team_id in game.teams:
                    first_round[team_id] = game.id
        self._next_game = MappingProxyType(next_game)
        self._first_round = MappingProxyType(first_round)

    def __len__(self) -> int:
        return len(self.games)

    def __iter__(self) -> Iterator[Game]:
        return iter(self.games.values())

    def __contains__(self, game_id: object) -> bool:
        return game_id in self.games

    def __eq__(self, other):
        if not isinstance(other, BracketGraph):
            return NotImplemented
        return self.regions == other.regions and dict(self.games) == dict(other.games)

    __hash__ = None

    def game(self, game_id: str) -> Game:
        return self.games[game_id]

    def team(self, team_id: str) -> Team:
        return self.teams[team_id]

    @property
    def championship(self) -> Game:
        return self.games[CHAMPIONSHIP_ID]

    def region(self, position: str) -> Region:
        for region in self.regions:
            if region.position == position:
                return region
        raise KeyError(position)

    def games_in_round(self, round_num: int) -> list[Game]:
        """All games of a round, in bracket order."""
        return [g for g in self.games.values() if g.round == round_num]

    def region_games(self, position: str, round_num: int | None = None) -> list[Game]:
        """Games played inside one region, optionally limited to a round."""
        return [
            g for g in self.games.values()
            if g.region == position and (round_num is None or g.round == round_num)
        ]

    def next_game(self, game_id: str) -> str | None:
        """The game the winner of game_id advances to (None for the championship)."""
        return self._next_game.get(game_id)

    def first_round_game(self, team_id: str) -> str:
        return self._first_round[team_id]

    def path_to_championship(self, team_id: str) -> list[str]:
        """Game ids a team must win to become champion, first game first."""
        path = []
        game_id = self._first_round[team_id]
        while game_id is not None:
            path.append(game_id)
            game_id = self._next_game.get(game_id)
        return path

    def teams_in_subtree(self, game_id: str) -> list[str]:
        """Ids of every team that could reach (and so play in) this game."""
        game = self.games[game_id]
        if game.teams:
            return list(game.teams)
        left, right = game.feeders
        return self.teams_in_subtree(left) + self.teams_in_subtree(right)

    def feeder_for_team(self, game_id: str, team_id: str) -> str | None:
        """The feeder game through which team_id would arrive at game_id."""
        game = self.games[game_id]
        if not game.feeders:
            return None
        for feeder in game.feeders:
            if team_id in self.teams_in_subtree(feeder):
                return feeder
        return None
