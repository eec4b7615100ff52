"""
Tests for the scoring engine.

Covers round points, the per-game underdog bonus, partial results, skipped
picks, monotonic scoring and rejection of inconsistent results.
"""

import numpy as np
import pytest

import config
from engine.scorer import GameStatus, SkipReason, eliminated_teams, score_bracket
from engine.simulator import simulate_results
from models.errors import InconsistentResultSetError, ViolationKind


class TestRoundPoints:
    """Base points per correct pick."""

    def test_chalk_bracket_scores_max(self, graph, chalk_picks):
        score = score_bracket(graph, chalk_picks, chalk_picks)
        assert score.total == config.MAX_SCORE == 192
        assert score.correct_count == 63
        assert score.bonus_total == 0
        assert score.by_round() == {1: 32, 2: 32, 3: 32, 4: 32, 5: 32, 6: 32}

    def test_wrong_pick_scores_zero(self, graph):
        picks = {"Top Left-r64-1": "east-16"}
        results = {"Top Left-r64-1": "east-1"}
        gs = score_bracket(graph, picks, results).game("Top Left-r64-1")
        assert gs.status == GameStatus.SCORED
        assert gs.correct is False
        assert gs.points == 0
        assert gs.opponent == "east-16"

    def test_unplayed_game_scores_zero(self, graph, chalk_picks):
        score = score_bracket(graph, chalk_picks, {})
        assert score.total == 0
        assert all(gs.status == GameStatus.PICKED for gs in score.games.values())
        assert score.max_possible == 192

    def test_no_pick_no_result_is_unplayed(self, graph):
        gs = score_bracket(graph, {}, {}).game("championship")
        assert gs.status == GameStatus.UNPLAYED
        assert gs.skipped == SkipReason.MISSING_PICK


class TestUnderdogBonus:
    """Bonus for correctly picking the worse seed, judged game by game."""

    def test_nine_over_eight_then_over_one(self, graph):
        first_round = {"Top Left-r64-1": "east-1", "Top Left-r64-2": "east-9"}
        score = score_bracket(graph, first_round, first_round)
        assert score.game("Top Left-r64-2").points == 3
        assert score.game("Top Left-r64-2").underdog_bonus is True
        assert score.game("Top Left-r64-1").points == 1
        assert score.total == 4

        second_round = dict(first_round, **{"Top Left-r32-1": "east-9"})
        score = score_bracket(graph, second_round, second_round)
        gs = score.game("Top Left-r32-1")
        assert gs.points == 4
        assert gs.bonus_points == 2
        assert gs.opponent == "east-1"
        assert score.total == 8

    def test_two_seed_beats_one_seed_in_championship(self, graph, fill):
        results = fill(graph, favorites={"east-2"})
        assert results["championship"] == "east-2"
        gs = score_bracket(graph, results, results).game("championship")
        assert gs.opponent == "south-1"
        assert gs.points == 34
        assert gs.underdog_bonus is True

    def test_two_seed_beats_three_seed_in_championship(self, graph, fill):
        results = fill(graph, favorites={"east-2", "south-3"})
        assert results["final-four-2"] == "south-3"
        gs = score_bracket(graph, results, results).game("championship")
        assert gs.opponent == "south-3"
        assert gs.points == 32
        assert gs.underdog_bonus is False

    def test_same_seed_matchup_has_no_bonus(self, graph, chalk_picks):
        gs = score_bracket(graph, chalk_picks, chalk_picks).game("final-four-1")
        assert graph.team(gs.opponent).seed == graph.team(gs.result).seed
        assert gs.bonus_points == 0

    def test_wrong_upset_pick_gets_no_bonus(self, graph):
        picks = {"Top Left-r64-2": "east-9"}
        results = {"Top Left-r64-2": "east-8"}
        gs = score_bracket(graph, picks, results).game("Top Left-r64-2")
        assert gs.points == 0
        assert gs.underdog_bonus is False

    def test_custom_bonus(self, graph):
        results = {"Top Left-r64-2": "east-9"}
        score = score_bracket(graph, results, results, underdog_bonus=0)
        assert score.total == 1

    def test_negative_bonus(self, graph, chalk_picks):
        with pytest.raises(ValueError):
            score_bracket(graph, chalk_picks, {}, underdog_bonus=-1)


class TestSkippedPicks:
    """Invalid or missing picks are skipped, not thrown."""

    def test_invalid_and_missing_picks_flagged(self, graph):
        picks = {"Top Left-r64-1": "east-1", "Top Left-r32-1": "east-9"}
        results = {
            "Top Left-r64-1": "east-1",
            "Top Left-r64-2": "east-9",
            "Top Left-r32-1": "east-9",
        }
        score = score_bracket(graph, picks, results)

        invalid = score.game("Top Left-r32-1")
        assert invalid.skipped == SkipReason.INVALID_PICK
        assert invalid.status == GameStatus.RESOLVED
        assert invalid.points == 0

        missing = score.game("Top Left-r64-2")
        assert missing.skipped == SkipReason.MISSING_PICK
        assert missing.status == GameStatus.RESOLVED

        assert score.total == 1
        assert {gs.game_id for gs in score.skipped_games()} >= {"Top Left-r32-1", "Top Left-r64-2"}

    def test_unknown_ids_in_picks_are_ignored(self, graph):
        picks = {"bogus": "east-1", "Top Left-r64-1": "nobody"}
        score = score_bracket(graph, picks, {"Top Left-r64-1": "east-1"})
        assert score.total == 0
        assert score.game("Top Left-r64-1").skipped == SkipReason.INVALID_PICK


class TestInconsistentResults:
    """Corrupted results are refused."""

    def test_result_without_feeder_results(self, graph, chalk_picks):
        with pytest.raises(InconsistentResultSetError) as exc_info:
            score_bracket(graph, chalk_picks, {"Top Left-r32-1": "east-1"})
        kinds = {v.kind for v in exc_info.value.violations}
        assert kinds == {ViolationKind.BROKEN_ADVANCEMENT_CHAIN}

    def test_result_for_unknown_game(self, graph, chalk_picks):
        with pytest.raises(InconsistentResultSetError):
            score_bracket(graph, chalk_picks, {"play-in-1": "east-16"})


class TestScoringProperties:
    """Idempotence, monotonicity and max possible."""

    def test_idempotent(self, graph, chalk_picks):
        results = simulate_results(graph, np.random.default_rng(3), through_round=4)
        assert score_bracket(graph, chalk_picks, results) == score_bracket(graph, chalk_picks, results)

    def test_score_is_read_only(self, graph, chalk_picks):
        score = score_bracket(graph, chalk_picks, {})
        with pytest.raises(TypeError):
            score.games["championship"] = None
        with pytest.raises(TypeError):
            del score.games["championship"]

    def test_monotonic_by_round(self, graph):
        full = simulate_results(graph, np.random.default_rng(7))
        picks = simulate_results(graph, np.random.default_rng(8))

        previous = 0
        for round_num in range(1, 7):
            partial = {g: w for g, w in full.items() if graph.game(g).round <= round_num}
            score = score_bracket(graph, picks, partial)
            assert score.total >= previous
            assert score.total <= score.max_possible
            previous = score.total

    def test_monotonic_game_by_game(self, graph, fill):
        full = simulate_results(graph, np.random.default_rng(11))
        picks = fill(graph, favorites={"west-10", "south-13"})

        results = {}
        previous = 0
        for game in graph:
            results[game.id] = full[game.id]
            total = score_bracket(graph, picks, results).total
            assert total >= previous
            previous = total

    def test_max_possible_drops_when_pick_eliminated(self, graph, chalk_picks):
        results = {"Top Left-r64-1": "east-16"}
        score = score_bracket(graph, chalk_picks, results)
        # lost the r64 game plus every later east-1 pick (2+4+8+16+32)
        assert score.total == 0
        assert score.max_possible == 192 - 1 - 62

    def test_eliminated_teams(self, graph, fill):
        results = fill(graph, through_round=1)
        out = eliminated_teams(graph, results)
        assert len(out) == 32
        assert "east-16" in out and "east-1" not in out
