"""Shared fixtures: a seeded 64-team field and helpers to fill brackets."""

import pytest

import config
from engine.generator import build_bracket
from models.team import Region, Team

REGION_NAMES = ["East", "West", "South", "Midwest"]


def make_regions():
    """Four regions; team ids look like 'east-1' ... 'midwest-16'."""
    regions = []
    for position, name in zip(config.REGION_POSITIONS, REGION_NAMES):
        prefix = name.lower()
        teams = tuple(
            Team(id=f"{prefix}-{seed}", name=f"{name} {seed}", seed=seed, region=position)
            for seed in range(1, 17)
        )
        regions.append(Region(name=name, position=position, teams=teams))
    return regions


def fill_bracket(graph, favorites=(), through_round=6):
    """Fill winners game by game.

    Favorites always win against non-favorites; otherwise the better seed
    wins, and the first-listed team wins a same-seed matchup.
    """
    favorites = set(favorites)
    winners = {}
    for game in graph:
        if game.round > through_round:
            break
        if game.teams:
            a, b = game.teams
        else:
            a, b = (winners[f] for f in game.feeders)
        team_a, team_b = graph.team(a), graph.team(b)
        fav_a, fav_b = a in favorites, b in favorites
        if fav_a != fav_b:
            winners[game.id] = a if fav_a else b
        else:
            winners[game.id] = b if team_b.seed < team_a.seed else a
    return winners


@pytest.fixture
def regions():
    return make_regions()


@pytest.fixture
def graph(regions):
    return build_bracket(regions)


@pytest.fixture
def chalk_picks(graph):
    return fill_bracket(graph)


@pytest.fixture
def fill():
    return fill_bracket
