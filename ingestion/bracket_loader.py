"""Tournament loader - read and write the seeding table.

Supports the tournament JSON file written by the admin tournament builder:
{
    "year": "2026",
    "name": "March Madness 2026",
    "regions": [
        {
            "name": "East",
            "position": "Top Left",
            "teams": [{"id": "duke", "name": "Duke", "seed": 1}, ...]
        },
        ...
    ],
    "metadata": {
        "scoring": [{"round": "Round of 64", "points": 1}, ...]
    }
}

A region's "teams" may also be a {seed: name} map, in which case team ids are
derived from the names.
"""

import json
import os
import re

import config
from models.bracket import Round
from models.errors import MalformedSeedingError
from models.team import Region, Team


def load_tournament(filepath: str) -> tuple[list[Region], dict[int, int]]:
    """Load the seeding table and round points from a tournament JSON file.

    Returns:
        (regions, {round_num: points}); round points fall back to config.ROUND_POINTS
        for any round the file doesn't list
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    regions = parse_regions(data)
    round_points = parse_round_points(data)
    n_teams = sum(len(r.teams) for r in regions)
    print(f"Loaded tournament from {filepath}: {n_teams} teams in {len(regions)} regions")
    return regions, round_points


def parse_regions(data: dict) -> list[Region]:
    """Build Region objects from parsed tournament JSON."""
    if not isinstance(data, dict) or not isinstance(data.get("regions"), list):
        raise MalformedSeedingError("Tournament data must have a 'regions' list")

    regions = []
    for idx, region_data in enumerate(data["regions"]):
        if not isinstance(region_data, dict):
            raise MalformedSeedingError(f"Region {idx + 1} must be an object, got {region_data!r}")
        name = str(region_data.get("name") or f"Region {idx + 1}")
        if "position" in region_data:
            position = str(region_data["position"])
        elif idx < len(config.REGION_POSITIONS):
            position = config.REGION_POSITIONS[idx]
        else:
            raise MalformedSeedingError(f"Region {name!r} has no position")

        teams = []
        raw_teams = region_data.get("teams", [])
        if isinstance(raw_teams, dict):
            raw_teams = [{"seed": seed, "name": team_name} for seed, team_name in raw_teams.items()]

        for team_data in raw_teams:
            try:
                seed = int(team_data["seed"])
                team_name = str(team_data["name"]).strip()
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedSeedingError(f"Bad team entry in {name!r}: {team_data!r}") from e
            team_id = str(team_data.get("id") or _slugify(team_name))
            teams.append(Team(id=team_id, name=team_name, seed=seed, region=position))

        teams.sort(key=lambda t: t.seed)
        regions.append(Region(name=name, position=position, teams=tuple(teams)))

    return regions


def parse_round_points(data: dict) -> dict[int, int]:
    """Read metadata.scoring, filling gaps from config.ROUND_POINTS."""
    points = dict(config.ROUND_POINTS)
    scoring = (data.get("metadata") or {}).get("scoring") or []
    for item in scoring:
        try:
            rnd = Round.from_label(str(item["round"]))
            points[rnd.value] = int(item["points"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedSeedingError(f"Bad scoring entry: {item!r}") from e
    return points


def save_tournament(regions: list[Region], filepath: str,
                    round_points: dict[int, int] | None = None,
                    year: str | None = None, name: str | None = None):
    """Save a seeding table (and optionally round points) to tournament JSON."""
    data = {
        "year": year or "",
        "name": name or "",
        "regions": [
            {
                "name": region.name,
                "position": region.position,
                "teams": [
                    {"id": t.id, "name": t.name, "seed": t.seed}
                    for t in sorted(region.teams, key=lambda t: t.seed)
                ],
            }
            for region in regions
        ],
    }
    if round_points:
        data["metadata"] = {
            "scoring": [{"round": Round(r).label, "points": p} for r, p in sorted(round_points.items())]
        }

    dirname = os.path.dirname(filepath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    print(f"Saved tournament to {filepath}")


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
