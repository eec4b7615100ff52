"""Central configuration for the bracket pool engine."""

import os

# Scoring: points awarded per correct pick in each round
# Round 1 = Round of 64, Round 6 = Championship
ROUND_POINTS = {1: 1, 2: 2, 3: 4, 4: 8, 5: 16, 6: 32}

# Bonus for each correct pick where the winner was the worse seed in that game
UNDERDOG_BONUS = 2

# Number of games per round
GAMES_PER_ROUND = {1: 32, 2: 16, 3: 8, 4: 4, 5: 2, 6: 1}

# Max base score: 32*1 + 16*2 + 8*4 + 4*8 + 2*16 + 1*32 = 192
MAX_SCORE = sum(GAMES_PER_ROUND[r] * ROUND_POINTS[r] for r in range(1, 7))

# Bracket structure
NUM_TEAMS = 64
NUM_GAMES = 63
NUM_REGIONS = 4
TEAMS_PER_REGION = 16
REGION_POSITIONS = ["Top Left", "Bottom Left", "Top Right", "Bottom Right"]

# Final Four semifinals: (position, position) whose regional winners meet
FINAL_FOUR_PAIRINGS = [
    ("Top Left", "Bottom Left"),
    ("Top Right", "Bottom Right"),
]

# Standard seed matchups in round 1 (within each region)
SEED_MATCHUPS = [
    (1, 16), (8, 9), (5, 12), (4, 13),
    (6, 11), (3, 14), (7, 10), (2, 15),
]

# Simulation settings
DEFAULT_SIMULATIONS = 10_000
DEFAULT_SIM_SEED = 42

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
DEFAULT_TOURNAMENT_FILE = os.path.join(DATA_DIR, "tournament.json")
