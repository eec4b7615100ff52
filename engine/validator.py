"""Pick and result validation.

A pick on a Round of 64 game must name one of its two seeded teams. A pick on
any later game must name the team picked to win the feeder game it comes
through, and that feeder pick must itself be valid. Picking ahead of an
unpicked feeder is rejected, so every pick has one unbroken lineage back to a
seeded team.

Results follow the same rules, and additionally a result can only exist once
both teams in the game are known.
"""

from models.bracket import BracketGraph, Game
from models.errors import ValidationResult, Violation, ViolationKind


def validate(graph: BracketGraph, picks: dict[str, str],
             require_complete: bool = False) -> ValidationResult:
    """Check a pick set against the bracket.

    Args:
        graph: The tournament's game graph
        picks: {game_id: team_id}; missing or empty values mean "no pick yet"
        require_complete: Also report every game without a pick (submission check)

    Returns:
        ValidationResult with every violation found
    """
    violations = _check(graph, picks, full_matchups=False)

    if require_complete:
        for game in graph:
            if not picks.get(game.id):
                violations.append(Violation(
                    kind=ViolationKind.INCOMPLETE_PICK_SET,
                    game_id=game.id,
                    message=f"No pick for {game.id} ({game.round.label})",
                ))

    return ValidationResult(tuple(violations))


def validate_submission(graph: BracketGraph, picks: dict[str, str]) -> ValidationResult:
    """A pick set is ready to submit only if every game has a valid pick."""
    return validate(graph, picks, require_complete=True)


def check_results(graph: BracketGraph, results: dict[str, str]) -> ValidationResult:
    """Check a result set against the bracket. Partial result sets are fine."""
    return ValidationResult(tuple(_check(graph, results, full_matchups=True)))


def valid_picks(graph: BracketGraph, picks: dict[str, str]) -> dict[str, str]:
    """The subset of picks whose advancement chain is sound."""
    bad = validate(graph, picks).invalid_game_ids()
    return {gid: tid for gid, tid in picks.items() if tid and gid in graph and gid not in bad}


def resolve_matchups(graph: BracketGraph,
                     selections: dict[str, str]) -> dict[str, tuple[str | None, str | None]]:
    """Work out who plays in each game given a set of picks or results.

    Round of 64 games always have both teams. Later games take each side from
    the winner recorded for the matching feeder game, or None if that feeder
    has no winner yet. Selections are used as given; validate them first.

    Returns:
        {game_id: (team_id | None, team_id | None)}
    """
    matchups = {}
    for game in graph:
        if game.teams:
            matchups[game.id] = game.teams
        else:
            left, right = game.feeders
            matchups[game.id] = (selections.get(left) or None, selections.get(right) or None)
    return matchups


def _check(graph: BracketGraph, selections: dict[str, str], full_matchups: bool) -> list[Violation]:
    violations = []

    for game_id, team_id in selections.items():
        if not team_id:
            continue
        if game_id not in graph:
            violations.append(Violation(
                kind=ViolationKind.UNKNOWN_GAME_ID,
                game_id=game_id,
                team_id=team_id,
                message=f"Unknown game id {game_id!r}",
            ))
        elif team_id not in graph.teams:
            violations.append(Violation(
                kind=ViolationKind.UNKNOWN_TEAM_ID,
                game_id=game_id,
                team_id=team_id,
                message=f"{game_id}: unknown team id {team_id!r}",
            ))

    # Games iterate in round order, so feeders are always settled first
    valid: set[str] = set()
    for game in graph:
        team_id = selections.get(game.id)
        if not team_id or team_id not in graph.teams:
            continue
        problem = _chain_problem(graph, game, team_id, selections, valid, full_matchups)
        if problem is None:
            valid.add(game.id)
        else:
            violations.append(Violation(
                kind=ViolationKind.BROKEN_ADVANCEMENT_CHAIN,
                game_id=game.id,
                team_id=team_id,
                message=f"{game.id}: {problem}",
            ))

    return violations


def _chain_problem(graph: BracketGraph, game: Game, team_id: str, selections: dict[str, str],
                   valid: set[str], full_matchups: bool) -> str | None:
    """Why team_id can't be the winner of game, or None if it can."""
    if game.teams:
        if team_id not in game.teams:
            return f"{team_id} does not play in this game"
        return None

    feeder = graph.feeder_for_team(game.id, team_id)
    if feeder is None:
        return f"{team_id} can't reach this game"
    if not selections.get(feeder):
        return f"{team_id} has no winner recorded for feeder game {feeder}"
    if selections[feeder] != team_id:
        return f"{team_id} was not picked to win feeder game {feeder} ({selections[feeder]} was)"
    if feeder not in valid:
        return f"feeder game {feeder} has an invalid pick"

    if full_matchups:
        other = game.feeders[1] if game.feeders[0] == feeder else game.feeders[0]
        if not selections.get(other):
            return f"opponent not decided yet (no winner for {other})"
        if other not in valid:
            return f"opponent's game {other} has an invalid result"

    return None
