"""Pretty-print brackets, validation results, scores and standings."""

from tabulate import tabulate

from engine.scorer import Score
from engine.standings import StandingsRow
from engine.validator import resolve_matchups
from models.bracket import BracketGraph, Round
from models.errors import ValidationResult


def print_bracket(graph: BracketGraph, picks: dict[str, str] | None = None):
    """Print every game round by round, with picks if given.

    Args:
        graph: The tournament's game graph
        picks: Optional {game_id: team_id} to show alongside each matchup
    """
    picks = picks or {}
    matchups = resolve_matchups(graph, picks)

    print("\n" + "=" * 60)
    print("           BRACKET")
    print("=" * 60)

    for region in graph.regions:
        print(f"\n--- {region.name.upper()} ({region.position}) ---")
        for round_num in (Round.ROUND_OF_64, Round.ROUND_OF_32, Round.SWEET_16, Round.ELITE_8):
            print(f"\n  {round_num.label}:")
            rows = [
                _matchup_row(graph, game.id, matchups[game.id], picks.get(game.id))
                for game in graph.region_games(region.position, round_num)
            ]
            print(tabulate(rows, headers=["Game", "Team 1", "Team 2", "Pick"], tablefmt="simple"))

    print(f"\n{'=' * 60}")
    print("           FINAL FOUR")
    print("=" * 60)
    rows = [
        _matchup_row(graph, game.id, matchups[game.id], picks.get(game.id))
        for round_num in (Round.FINAL_FOUR, Round.CHAMPIONSHIP)
        for game in graph.games_in_round(round_num)
    ]
    print(tabulate(rows, headers=["Game", "Team 1", "Team 2", "Pick"], tablefmt="simple"))

    champion = picks.get(graph.championship.id)
    if champion in graph.teams:
        print(f"\n  CHAMPION: {graph.team(champion)}")
    print("\n" + "=" * 60)


def print_validation(result: ValidationResult):
    """Print every violation, or a one-line OK."""
    if result.ok:
        print("Bracket is valid.")
        return

    rows = [[v.kind.value, v.game_id, v.team_id or "", v.message] for v in result.violations]
    print(f"\n{len(result.violations)} problem(s) found:\n")
    print(tabulate(rows, headers=["Kind", "Game", "Team", "Detail"], tablefmt="simple"))


def print_score(graph: BracketGraph, score: Score, show_games: bool = True):
    """Print the per-game breakdown and a per-round summary."""
    if show_games:
        rows = []
        for gs in score.games.values():
            if gs.pick is None and gs.result is None:
                continue
            rows.append([
                gs.game_id,
                _name(graph, gs.pick),
                _name(graph, gs.result),
                gs.status.value,
                "yes" if gs.correct else "",
                f"+{gs.bonus_points}" if gs.underdog_bonus else "",
                gs.points,
                gs.skipped.value if gs.skipped else "",
            ])
        print("\n=== GAME BREAKDOWN ===\n")
        print(tabulate(rows, headers=["Game", "Pick", "Winner", "Status", "Correct", "Bonus", "Points", "Skipped"],
                       tablefmt="simple"))

    print("\n=== SCORE BY ROUND ===\n")
    by_round = score.by_round()
    rows = [[Round(r).label, pts] for r, pts in by_round.items()]
    rows.append(["Total", score.total])
    print(tabulate(rows, headers=["Round", "Points"], tablefmt="simple"))
    print(f"\n  Correct picks: {score.correct_count}   Underdog bonus: {score.bonus_total}"
          f"   Max possible: {score.max_possible}")


def print_standings(rows: list[StandingsRow]):
    """Print the pool leaderboard."""
    table = [
        [r.rank, r.entry_name, r.points, r.max_possible, r.champion or "",
         r.tie_breaker if r.tie_breaker is not None else "",
         r.tb_diff if r.tb_diff is not None else ""]
        for r in rows
    ]
    print("\n=== STANDINGS ===\n")
    print(tabulate(table, headers=["Rank", "Entry", "Points", "Max", "Champion", "TB", "TB Diff"],
                   tablefmt="simple"))


def _matchup_row(graph, game_id, matchup, pick):
    team_a, team_b = matchup
    return [game_id, _name(graph, team_a), _name(graph, team_b), _name(graph, pick)]


def _name(graph: BracketGraph, team_id: str | None) -> str:
    if not team_id:
        return ""
    if team_id in graph.teams:
        return str(graph.team(team_id))
    return f"? {team_id}"
