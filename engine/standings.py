"""Pool standings.

Scores every entry against the current results and ranks them. Ties on points
are broken by how close the entry's tie-breaker guess was to the actual
combined score of the championship game, once that is known.
"""

from dataclasses import dataclass, field

from tqdm import tqdm

from engine.scorer import Score, score_bracket
from engine.validator import check_results
from models.bracket import CHAMPIONSHIP_ID, FINAL_FOUR_IDS, BracketGraph
from models.entry import Entry
from models.errors import InconsistentResultSetError


@dataclass
class StandingsRow:
    rank: int
    entry_name: str
    points: int
    max_possible: int
    champion: str | None = None
    finalists: list[str] = field(default_factory=list)
    final_four: list[str] = field(default_factory=list)
    tie_breaker: int | None = None
    tb_diff: int | None = None
    score: Score | None = None


def build_standings(graph: BracketGraph, entries: list[Entry], results: dict[str, str],
                    championship_total: int | None = None,
                    show_progress: bool = False) -> list[StandingsRow]:
    """Score and rank every entry.

    Args:
        graph: The tournament's game graph
        entries: Pool entries
        results: {game_id: winning_team_id} for games played so far
        championship_total: Actual combined score of the championship game, if played
        show_progress: Show a progress bar while scoring

    Returns:
        Rows sorted by rank; equal points and tie-breaker distance share a rank

    Raises:
        InconsistentResultSetError: if the results break the advancement rules
    """
    result_check = check_results(graph, results)
    if not result_check.ok:
        raise InconsistentResultSetError(result_check.violations)

    iterator = entries
    if show_progress:
        iterator = tqdm(entries, desc="Scoring entries")

    rows = []
    for entry in iterator:
        score = score_bracket(graph, entry.picks, results)
        tb_diff = None
        if championship_total is not None and entry.tie_breaker is not None:
            tb_diff = abs(entry.tie_breaker - championship_total)

        rows.append(StandingsRow(
            rank=0,
            entry_name=entry.name,
            points=score.total,
            max_possible=score.max_possible,
            champion=_team_name(graph, entry.picks.get(CHAMPIONSHIP_ID)),
            finalists=[_team_name(graph, entry.picks.get(g)) for g in FINAL_FOUR_IDS],
            final_four=[
                _team_name(graph, entry.picks.get(g))
                for ff in FINAL_FOUR_IDS
                for g in graph.game(ff).feeders
            ],
            tie_breaker=entry.tie_breaker,
            tb_diff=tb_diff,
            score=score,
        ))

    rows.sort(key=_sort_key)

    prev_key = None
    for i, row in enumerate(rows, 1):
        key = _rank_key(row)
        if key != prev_key:
            row.rank = i
            prev_key = key
        else:
            row.rank = rows[i - 2].rank

    return rows


def _rank_key(row: StandingsRow) -> tuple:
    # Missing tie-breakers rank behind any known distance
    tb = row.tb_diff if row.tb_diff is not None else float("inf")
    return (-row.points, tb)


def _sort_key(row: StandingsRow) -> tuple:
    return _rank_key(row) + (row.entry_name.lower(),)


def _team_name(graph: BracketGraph, team_id: str | None) -> str | None:
    if not team_id or team_id not in graph.teams:
        return None
    return graph.team(team_id).name
