"""
Tests for the Monte Carlo result simulator.
"""

import numpy as np
import pytest

from engine.simulator import simulate_results, simulate_scores, summarize_scores
from engine.validator import check_results
from models.errors import InconsistentResultSetError
from models.probability import SEED_RATINGS, log5, win_probability


class TestSimulateResults:
    """Simulated result sets are always consistent."""

    def test_complete_results_are_consistent(self, graph):
        results = simulate_results(graph, np.random.default_rng(1))
        assert len(results) == 63
        assert check_results(graph, results).ok

    def test_through_round(self, graph):
        results = simulate_results(graph, np.random.default_rng(1), through_round=2)
        assert len(results) == 48
        assert check_results(graph, results).ok

    def test_same_seed_same_results(self, graph):
        a = simulate_results(graph, np.random.default_rng(42))
        b = simulate_results(graph, np.random.default_rng(42))
        assert a == b

    def test_known_results_kept(self, graph, fill):
        known = fill(graph, favorites={"east-16"}, through_round=2)
        results = simulate_results(graph, np.random.default_rng(5), results=known)
        for game_id, winner in known.items():
            assert results[game_id] == winner
        assert check_results(graph, results).ok

    def test_ratings_override_seed(self, graph):
        ratings = {"east-16": 1.0}
        results = simulate_results(graph, np.random.default_rng(0), ratings=ratings)
        assert results["championship"] == "east-16"

    def test_known_results_with_unknown_team(self, graph):
        with pytest.raises(InconsistentResultSetError):
            simulate_results(graph, np.random.default_rng(0), results={"Top Left-r64-1": "gonzaga"})


class TestSimulateScores:
    """Score distributions over many simulated tournaments."""

    def test_distribution(self, graph, chalk_picks):
        scores = simulate_scores(graph, chalk_picks, n_sims=50, seed=1, show_progress=False)
        assert scores.shape == (50,)
        assert scores.min() >= 0
        assert scores.max() <= 192

    def test_deterministic_with_seed(self, graph, chalk_picks):
        a = simulate_scores(graph, chalk_picks, n_sims=20, seed=9, show_progress=False)
        b = simulate_scores(graph, chalk_picks, n_sims=20, seed=9, show_progress=False)
        assert (a == b).all()

    def test_inconsistent_known_results(self, graph, chalk_picks):
        with pytest.raises(InconsistentResultSetError):
            simulate_scores(graph, chalk_picks, n_sims=1, results={"Top Left-r64-1": "gonzaga"},
                            show_progress=False)

    def test_summary(self):
        summary = summarize_scores(np.array([10, 20, 30]))
        assert summary["mean"] == 20.0
        assert summary["p50"] == 20.0
        assert summary["max"] == 30.0


class TestProbability:
    """Log5 win probabilities."""

    def test_equal_ratings(self):
        assert log5(0.8, 0.8) == 0.5

    def test_better_seed_favored(self, graph):
        assert win_probability(graph.team("east-1"), graph.team("east-16")) > 0.9

    def test_seed_ratings_cover_all_seeds(self):
        assert sorted(SEED_RATINGS) == list(range(1, 17))
