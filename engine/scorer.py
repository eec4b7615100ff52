"""Bracket scoring.

Scores a pick set against official results using round-value scoring plus the
underdog bonus: a correct pick earns the game's round points, and a further
bonus when the winner was the worse (numerically higher) seed of the two teams
that actually played that game. The bonus is judged per game, so a team that
keeps winning as the underdog earns it every round.

Scoring is a pure function of (graph, picks, results). Unplayed games score 0,
so adding results can only raise or hold a score.
"""

import enum
from dataclasses import dataclass, field
from types import MappingProxyType

import config
from engine.validator import check_results, resolve_matchups, validate
from models.bracket import BracketGraph, Round
from models.errors import InconsistentResultSetError


class GameStatus(enum.Enum):
    UNPLAYED = "unplayed"  # no pick, no result
    PICKED = "picked"  # pick recorded, no result yet
    RESOLVED = "resolved"  # result recorded, no usable pick
    SCORED = "scored"  # pick and result, points computed


class SkipReason(enum.Enum):
    MISSING_PICK = "missing_pick"
    INVALID_PICK = "invalid_pick"


@dataclass(frozen=True)
class GameScore:
    game_id: str
    round: Round
    status: GameStatus
    pick: str | None = None
    result: str | None = None
    opponent: str | None = None  # team the actual winner beat
    correct: bool = False
    points: int = 0  # round points + bonus
    underdog_bonus: bool = False
    bonus_points: int = 0
    skipped: SkipReason | None = None

    @property
    def base_points(self) -> int:
        return self.points - self.bonus_points


@dataclass(frozen=True)
class Score:
    total: int
    games: MappingProxyType[str, GameScore] = field(default_factory=dict)
    max_possible: int = 0

    def __post_init__(self):
        object.__setattr__(self, "games", MappingProxyType(dict(self.games)))

    def game(self, game_id: str) -> GameScore:
        return self.games[game_id]

    def by_round(self) -> dict[int, int]:
        """{round_num: points_earned}"""
        totals = {r: 0 for r in Round}
        for gs in self.games.values():
            totals[gs.round] += gs.points
        return totals

    @property
    def correct_count(self) -> int:
        return sum(1 for gs in self.games.values() if gs.correct)

    @property
    def bonus_total(self) -> int:
        return sum(gs.bonus_points for gs in self.games.values())

    def skipped_games(self) -> list[GameScore]:
        return [gs for gs in self.games.values() if gs.skipped is not None]


def score_bracket(graph: BracketGraph, picks: dict[str, str], results: dict[str, str],
                  underdog_bonus: int | None = None) -> Score:
    """Score a pick set against the results recorded so far.

    Args:
        graph: The tournament's game graph
        picks: {game_id: team_id}, complete or partial; invalid picks are skipped
        results: {game_id: winning_team_id} for games played so far
        underdog_bonus: Bonus for a correct upset pick (default config.UNDERDOG_BONUS)

    Returns:
        Score with a per-game breakdown

    Raises:
        InconsistentResultSetError: if the results break the advancement rules
        ValueError: if underdog_bonus is negative
    """
    result_check = check_results(graph, results)
    if not result_check.ok:
        raise InconsistentResultSetError(result_check.violations)

    bonus = config.UNDERDOG_BONUS if underdog_bonus is None else underdog_bonus
    if bonus < 0:
        raise ValueError(f"Underdog bonus can't be negative: {bonus}")
    invalid = validate(graph, picks).invalid_game_ids()
    matchups = resolve_matchups(graph, results)
    eliminated = eliminated_teams(graph, results)

    games = {}
    total = 0
    potential = 0

    for game in graph:
        pick = picks.get(game.id) or None
        result = results.get(game.id) or None
        opponent = _loser(matchups[game.id], result)

        if pick is None or game.id in invalid:
            skipped = SkipReason.MISSING_PICK if pick is None else SkipReason.INVALID_PICK
            games[game.id] = GameScore(
                game_id=game.id,
                round=game.round,
                status=GameStatus.RESOLVED if result else GameStatus.UNPLAYED,
                pick=pick,
                result=result,
                opponent=opponent,
                skipped=skipped,
            )
            continue

        if result is None:
            if pick not in eliminated:
                potential += game.points
            games[game.id] = GameScore(
                game_id=game.id, round=game.round, status=GameStatus.PICKED, pick=pick,
            )
            continue

        correct = pick == result
        upset = correct and graph.team(result).seed > graph.team(opponent).seed
        bonus_points = bonus if upset else 0
        points = (game.points if correct else 0) + bonus_points
        total += points
        games[game.id] = GameScore(
            game_id=game.id,
            round=game.round,
            status=GameStatus.SCORED,
            pick=pick,
            result=result,
            opponent=opponent,
            correct=correct,
            points=points,
            underdog_bonus=upset,
            bonus_points=bonus_points,
        )

    return Score(total=total, games=games, max_possible=total + potential)


def eliminated_teams(graph: BracketGraph, results: dict[str, str]) -> set[str]:
    """Ids of every team that has lost a recorded game."""
    out = set()
    for game_id, (team_a, team_b) in resolve_matchups(graph, results).items():
        winner = results.get(game_id)
        loser = _loser((team_a, team_b), winner)
        if loser:
            out.add(loser)
    return out


def _loser(matchup: tuple[str | None, str | None], winner: str | None) -> str | None:
    if not winner:
        return None
    team_a, team_b = matchup
    return team_b if winner == team_a else team_a
