"""Pick set, result set and pool entry loading.

Picks and results share one shape ({game_id: team_id}) and one set of formats:
- JSON: a flat {game_id: team_id} map, or an entry object with a "picks" map
- CSV: columns game_id, team_id (extra columns ignored)
"""

import json
import os

import pandas as pd

from models.entry import IN_PROGRESS, Entry


def load_selections(filepath: str) -> dict[str, str]:
    """Load a pick set or result set from JSON or CSV."""
    if filepath.lower().endswith(".csv"):
        selections = _load_selections_csv(filepath)
    else:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict) and isinstance(data.get("picks"), dict):
            data = data["picks"]
        if not isinstance(data, dict):
            raise ValueError(f"{filepath}: expected a {{game_id: team_id}} object")
        selections = {str(k): str(v) for k, v in data.items() if v}

    print(f"Loaded {len(selections)} selections from {filepath}")
    return selections


def _load_selections_csv(filepath: str) -> dict[str, str]:
    df = pd.read_csv(filepath, dtype=str).fillna("")
    missing = {"game_id", "team_id"} - set(df.columns)
    if missing:
        raise ValueError(f"{filepath}: missing columns {sorted(missing)}")

    selections = {}
    for _, row in df.iterrows():
        game_id = row["game_id"].strip()
        team_id = row["team_id"].strip()
        if game_id and team_id:
            selections[game_id] = team_id
    return selections


def save_selections(selections: dict[str, str], filepath: str):
    """Save a pick set or result set as a flat JSON map."""
    dirname = os.path.dirname(filepath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(selections, f, indent=2)
    print(f"Saved {len(selections)} selections to {filepath}")


def load_entries(path: str) -> list[Entry]:
    """Load pool entries from a JSON list file or a directory of entry files.

    Entry format:
        {"entryName": "...", "picks": {...}, "tieBreaker": 141, "status": "submitted"}
    """
    if os.path.isdir(path):
        entries = []
        for filename in sorted(os.listdir(path)):
            if filename.endswith(".json"):
                with open(os.path.join(path, filename), "r", encoding="utf-8") as f:
                    data = json.load(f)
                entries.append(_parse_entry(data, default_name=os.path.splitext(filename)[0]))
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("entries", [data])
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of entries")
        entries = [_parse_entry(item, default_name=f"Entry {i}") for i, item in enumerate(data, 1)]

    print(f"Loaded {len(entries)} entries from {path}")
    return entries


def _parse_entry(data: dict, default_name: str) -> Entry:
    if not isinstance(data, dict):
        raise ValueError(f"{default_name}: entry must be an object, got {data!r}")
    name = data.get("entryName") or data.get("name") or default_name
    tie_breaker = data.get("tieBreaker", data.get("tie_breaker"))
    try:
        tie_breaker = int(tie_breaker) if tie_breaker not in (None, "") else None
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name}: tie breaker must be a whole number, got {tie_breaker!r}") from e

    picks = data.get("picks") or {}
    if not isinstance(picks, dict):
        raise ValueError(f"{name}: picks must be a {{game_id: team_id}} object")
    return Entry(
        name=str(name),
        picks={str(k): str(v) for k, v in picks.items() if v},
        tie_breaker=tie_breaker,
        status=data.get("status", IN_PROGRESS),
    )
