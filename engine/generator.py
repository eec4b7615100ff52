"""Bracket structure generator.

Builds the 63-game graph for a 64-team, 4-region tournament from the seeding
table. Output depends only on the inputs, so callers can cache it per year.
"""

import config
from models.bracket import (
    CHAMPIONSHIP_ID,
    FINAL_FOUR_IDS,
    BracketGraph,
    Game,
    Round,
    regional_game_id,
)
from models.errors import MalformedSeedingError
from models.team import Region


def build_bracket(regions: list[Region],
                  round_points: dict[int, int] | None = None,
                  final_four_pairings: list[tuple[str, str]] | None = None) -> BracketGraph:
    """Generate the full game graph.

    Args:
        regions: The four seeded regions, in any order
        round_points: {round_num: points} for rounds 1-6 (default config.ROUND_POINTS)
        final_four_pairings: Two (position, position) pairs whose regional
            winners meet in final-four-1 and final-four-2

    Returns:
        BracketGraph with all 63 games

    Raises:
        MalformedSeedingError: if the seeding table or configuration can't
            produce a 64-team bracket
    """
    points = _check_round_points(round_points if round_points is not None else config.ROUND_POINTS)
    pairings = final_four_pairings if final_four_pairings is not None else config.FINAL_FOUR_PAIRINGS
    by_position = _check_seeding(regions)
    _check_pairings(pairings)

    ordered = [by_position[p] for p in config.REGION_POSITIONS]
    games: dict[str, Game] = {}
    for region in ordered:
        for game in _region_games(region, points):
            games[game.id] = game

    for i, (pos_a, pos_b) in enumerate(pairings):
        games[FINAL_FOUR_IDS[i]] = Game(
            id=FINAL_FOUR_IDS[i],
            round=Round.FINAL_FOUR,
            number=i + 1,
            points=points[Round.FINAL_FOUR],
            feeders=(
                regional_game_id(pos_a, Round.ELITE_8, 1),
                regional_game_id(pos_b, Round.ELITE_8, 1),
            ),
        )

    games[CHAMPIONSHIP_ID] = Game(
        id=CHAMPIONSHIP_ID,
        round=Round.CHAMPIONSHIP,
        number=1,
        points=points[Round.CHAMPIONSHIP],
        feeders=FINAL_FOUR_IDS,
    )

    # Stable order: round first, then region, then sequence
    rank = {p: i for i, p in enumerate(config.REGION_POSITIONS)}
    ordered_games = sorted(
        games.values(),
        key=lambda g: (g.round, rank.get(g.region, len(rank)), g.number),
    )
    return BracketGraph(tuple(ordered), {g.id: g for g in ordered_games})


def _region_games(region: Region, points: dict[int, int]) -> list[Game]:
    """The 15 games inside one region, Round of 64 through Elite 8."""
    position = region.position
    games = []

    for i, (high, low) in enumerate(config.SEED_MATCHUPS):
        games.append(Game(
            id=regional_game_id(position, Round.ROUND_OF_64, i + 1),
            round=Round.ROUND_OF_64,
            number=i + 1,
            points=points[Round.ROUND_OF_64],
            region=position,
            teams=(region.team_by_seed(high).id, region.team_by_seed(low).id),
        ))

    n_games = len(config.SEED_MATCHUPS) // 2
    for round_num in (Round.ROUND_OF_32, Round.SWEET_16, Round.ELITE_8):
        prev = Round(round_num - 1)
        for k in range(1, n_games + 1):
            games.append(Game(
                id=regional_game_id(position, round_num, k),
                round=round_num,
                number=k,
                points=points[round_num],
                region=position,
                feeders=(
                    regional_game_id(position, prev, 2 * k - 1),
                    regional_game_id(position, prev, 2 * k),
                ),
            ))
        n_games //= 2

    return games


def _check_seeding(regions: list[Region]) -> dict[str, Region]:
    """Validate the seeding table and index its regions by position."""
    if len(regions) != config.NUM_REGIONS:
        raise MalformedSeedingError(
            f"Expected {config.NUM_REGIONS} regions, got {len(regions)}"
        )

    by_position: dict[str, Region] = {}
    seen_ids: set[str] = set()
    expected_seeds = set(range(1, config.TEAMS_PER_REGION + 1))

    for region in regions:
        if region.position not in config.REGION_POSITIONS:
            raise MalformedSeedingError(
                f"Region {region.name!r} has unknown position {region.position!r}"
            )
        if region.position in by_position:
            raise MalformedSeedingError(f"Duplicate region position {region.position!r}")
        by_position[region.position] = region

        if len(region.teams) != config.TEAMS_PER_REGION:
            raise MalformedSeedingError(
                f"Region {region.name!r} has {len(region.teams)} teams, "
                f"expected {config.TEAMS_PER_REGION}"
            )

        seeds = [team.seed for team in region.teams]
        if set(seeds) != expected_seeds:
            missing = sorted(expected_seeds - set(seeds))
            raise MalformedSeedingError(
                f"Region {region.name!r} seeds must be 1-{config.TEAMS_PER_REGION} "
                f"exactly once (missing {missing})"
            )

        for team in region.teams:
            if not team.id:
                raise MalformedSeedingError(f"Team {team.name!r} in {region.name!r} has no id")
            if team.id in seen_ids:
                raise MalformedSeedingError(f"Duplicate team id {team.id!r}")
            seen_ids.add(team.id)

    return by_position


def _check_round_points(round_points: dict[int, int]) -> dict[int, int]:
    points = {}
    for rnd in Round:
        if rnd not in round_points:
            raise MalformedSeedingError(f"No point value configured for {rnd.label}")
        value = round_points[rnd]
        try:
            points[rnd] = int(value)
        except (TypeError, ValueError) as e:
            raise MalformedSeedingError(f"Bad point value for {rnd.label}: {value!r}") from e
        if isinstance(value, float) and not value.is_integer():
            raise MalformedSeedingError(f"Point value for {rnd.label} must be a whole number: {value!r}")
        if points[rnd] < 0:
            raise MalformedSeedingError(f"Point value for {rnd.label} can't be negative: {value!r}")
    return points


def _check_pairings(pairings: list[tuple[str, str]]):
    positions = [p for pair in pairings for p in pair]
    if len(pairings) != len(FINAL_FOUR_IDS) or sorted(positions) != sorted(config.REGION_POSITIONS):
        raise MalformedSeedingError(
            f"Final Four pairings must cover each region position exactly once: {pairings}"
        )
