"""CSV export of picks and standings."""

import csv
import os

from engine.standings import StandingsRow
from models.bracket import BracketGraph


def export_picks_csv(graph: BracketGraph, picks: dict[str, str], filepath: str):
    """Export picks as a CSV file, in bracket order.

    Columns: pick_number, game_id, round, region, seed, team_id, team
    The game_id/team_id columns can be loaded back with load_selections.
    """
    _ensure_dir(filepath)
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["pick_number", "game_id", "round", "region", "seed", "team_id", "team"])

        pick_num = 0
        for game in graph:
            team_id = picks.get(game.id)
            if not team_id or team_id not in graph.teams:
                continue
            pick_num += 1
            team = graph.team(team_id)
            region = graph.region(game.region).name if game.region else "Final Four"
            writer.writerow([pick_num, game.id, game.round.label, region, team.seed, team.id, team.name])

    print(f"Exported {pick_num} picks to {filepath}")


def export_standings_csv(rows: list[StandingsRow], filepath: str):
    """Export standings as a CSV file.

    Columns: rank, entry, points, max_possible, champion, final_four, tie_breaker, tb_diff
    """
    _ensure_dir(filepath)
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["rank", "entry", "points", "max_possible", "champion",
                         "final_four", "tie_breaker", "tb_diff"])
        for r in rows:
            writer.writerow([
                r.rank, r.entry_name, r.points, r.max_possible, r.champion or "",
                "; ".join(t for t in r.final_four if t),
                "" if r.tie_breaker is None else r.tie_breaker,
                "" if r.tb_diff is None else r.tb_diff,
            ])

    print(f"Exported {len(rows)} standings rows to {filepath}")


def _ensure_dir(filepath: str):
    dirname = os.path.dirname(filepath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
