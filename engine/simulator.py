"""Monte Carlo tournament simulator.

Plays out the bracket with log5 win probabilities to produce hypothetical
result sets. Useful for "what if" standings and for checking how a pick set
is likely to score before the tournament starts.
"""

import numpy as np
from tqdm import tqdm

import config
from engine.scorer import score_bracket
from engine.validator import check_results
from models.bracket import BracketGraph, Round
from models.errors import InconsistentResultSetError
from models.probability import win_probability


def simulate_results(graph: BracketGraph, rng: np.random.Generator,
                     through_round: int = Round.CHAMPIONSHIP,
                     ratings: dict[str, float] | None = None,
                     results: dict[str, str] | None = None) -> dict[str, str]:
    """Simulate a single tournament.

    Args:
        graph: The tournament's game graph
        rng: Random number generator
        through_round: Last round to play (1-6)
        ratings: Optional {team_id: rating}; teams without one use a seed-based rating
        results: Results already known; these games are kept as played

    Returns:
        A consistent result set {game_id: winner_team_id}

    Raises:
        InconsistentResultSetError: if the known results break the advancement rules
    """
    _check_known(graph, results)
    return _play(graph, rng, through_round, ratings, results)


def _play(graph, rng, through_round, ratings, results):
    played = dict(results or {})

    for game in graph:
        if game.round > through_round:
            break
        if played.get(game.id):
            continue

        if game.teams:
            team_a, team_b = game.teams
        else:
            team_a, team_b = (played[f] for f in game.feeders)

        p_a_wins = win_probability(graph.team(team_a), graph.team(team_b), ratings)
        played[game.id] = team_a if rng.random() < p_a_wins else team_b

    return played


def simulate_scores(graph: BracketGraph, picks: dict[str, str],
                    n_sims: int = config.DEFAULT_SIMULATIONS,
                    seed: int | None = None,
                    ratings: dict[str, float] | None = None,
                    results: dict[str, str] | None = None,
                    show_progress: bool = True) -> np.ndarray:
    """Score a pick set against many simulated tournaments.

    Known results are held fixed and only the remaining games are simulated.

    Returns:
        Array of n_sims total scores

    Raises:
        InconsistentResultSetError: if the known results break the advancement rules
    """
    _check_known(graph, results)
    rng = np.random.default_rng(seed)
    scores = np.zeros(n_sims, dtype=int)

    iterator = range(n_sims)
    if show_progress:
        iterator = tqdm(iterator, desc="Simulating tournaments")

    for i in iterator:
        simulated = _play(graph, rng, Round.CHAMPIONSHIP, ratings, results)
        scores[i] = score_bracket(graph, picks, simulated).total

    return scores


def _check_known(graph: BracketGraph, results: dict[str, str] | None):
    if not results:
        return
    check = check_results(graph, results)
    if not check.ok:
        raise InconsistentResultSetError(check.violations)


def summarize_scores(scores: np.ndarray) -> dict[str, float]:
    """Mean and spread of a simulated score distribution."""
    return {
        "mean": float(np.mean(scores)),
        "std": float(np.std(scores)),
        "p10": float(np.percentile(scores, 10)),
        "p50": float(np.percentile(scores, 50)),
        "p90": float(np.percentile(scores, 90)),
        "max": float(np.max(scores)),
    }
