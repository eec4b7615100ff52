"""Win probability calculations for simulated results."""

from models.team import Team

# Rough historical Barthag equivalents by seed
SEED_RATINGS = {
    1: 0.95, 2: 0.92, 3: 0.89, 4: 0.86, 5: 0.83, 6: 0.80,
    7: 0.77, 8: 0.74, 9: 0.72, 10: 0.70, 11: 0.68, 12: 0.65,
    13: 0.55, 14: 0.45, 15: 0.35, 16: 0.25,
}


def log5(rating_a: float, rating_b: float) -> float:
    """Compute P(A beats B) using the Log5 method.

    Args:
        rating_a: Team A's power rating (0-1)
        rating_b: Team B's power rating (0-1)
    """
    num = rating_a * (1 - rating_b)
    den = num + rating_b * (1 - rating_a)
    if den == 0:
        return 0.5
    return num / den


def team_rating(team: Team, ratings: dict[str, float] | None = None) -> float:
    """A team's rating: explicit rating by team id if given, else seed-based."""
    if ratings and team.id in ratings:
        return ratings[team.id]
    return SEED_RATINGS.get(team.seed, 0.50)


def win_probability(team_a: Team, team_b: Team, ratings: dict[str, float] | None = None) -> float:
    return log5(team_rating(team_a, ratings), team_rating(team_b, ratings))
