"""Bracket pool engine - CLI entry point.

Usage:
    python cli.py show [--picks picks.json]
    python cli.py validate --picks picks.json [--submit]
    python cli.py score --picks picks.json --results results.json
    python cli.py standings --entries entries/ --results results.json [--championship-total 141]
    python cli.py simulate [--through-round 2] [--output results.json] [--picks picks.json --sims 1000]
    python cli.py export --picks picks.json [--output picks.csv]

Every command takes --tournament (default data/tournament.json).
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from models.errors import BracketError


def load_graph(args):
    """Load the tournament file and build its game graph."""
    from engine.generator import build_bracket
    from ingestion.bracket_loader import load_tournament

    regions, round_points = load_tournament(args.tournament)
    return build_bracket(regions, round_points=round_points)


# --- Commands ---

def cmd_show(args):
    """Display the bracket, optionally with picks filled in."""
    graph = load_graph(args)
    picks = {}
    if args.picks:
        from ingestion.manual_entry import load_selections
        picks = load_selections(args.picks)

    from output.printer import print_bracket
    print_bracket(graph, picks)
    return 0


def cmd_validate(args):
    """Check a pick set's advancement chain (and completeness with --submit)."""
    graph = load_graph(args)

    from engine.validator import validate
    from ingestion.manual_entry import load_selections
    from output.printer import print_validation

    picks = load_selections(args.picks)
    result = validate(graph, picks, require_complete=args.submit)
    print_validation(result)
    if result.ok and args.submit:
        print("Bracket is ready to submit.")
    return 0 if result.ok else 1


def cmd_score(args):
    """Score a pick set against the results so far."""
    graph = load_graph(args)

    from engine.scorer import score_bracket
    from ingestion.manual_entry import load_selections
    from output.printer import print_score

    picks = load_selections(args.picks)
    results = load_selections(args.results) if args.results else {}
    score = score_bracket(graph, picks, results)
    print_score(graph, score, show_games=not args.summary)
    return 0


def cmd_standings(args):
    """Rank every pool entry against the results so far."""
    graph = load_graph(args)

    from engine.standings import build_standings
    from ingestion.manual_entry import load_entries, load_selections
    from output.printer import print_standings

    entries = load_entries(args.entries)
    if args.submitted_only:
        entries = [e for e in entries if e.is_submitted]
    results = load_selections(args.results) if args.results else {}

    rows = build_standings(graph, entries, results,
                           championship_total=args.championship_total,
                           show_progress=len(entries) > 100)
    print_standings(rows)

    if args.output:
        from output.export import export_standings_csv
        export_standings_csv(rows, args.output)
    return 0


def cmd_simulate(args):
    """Simulate results, or a pick set's score distribution with --picks."""
    graph = load_graph(args)

    from ingestion.manual_entry import load_selections
    known = load_selections(args.results) if args.results else {}

    if args.picks:
        from engine.simulator import simulate_scores, summarize_scores
        picks = load_selections(args.picks)
        scores = simulate_scores(graph, picks, n_sims=args.sims, seed=args.seed, results=known)
        summary = summarize_scores(scores)
        print(f"\nScore distribution over {args.sims} simulated tournaments:")
        for key, value in summary.items():
            print(f"  {key:<5s} {value:7.1f}")
        return 0

    import numpy as np
    from engine.simulator import simulate_results

    rng = np.random.default_rng(args.seed)
    results = simulate_results(graph, rng, through_round=args.through_round, results=known)

    if args.output:
        from ingestion.manual_entry import save_selections
        save_selections(results, args.output)
    else:
        from output.printer import print_bracket
        print_bracket(graph, results)
    return 0


def cmd_export(args):
    """Export a pick set as CSV."""
    graph = load_graph(args)

    from ingestion.manual_entry import load_selections
    from output.export import export_picks_csv

    picks = load_selections(args.picks)
    output_path = args.output or os.path.join(config.DATA_DIR, "bracket_picks.csv")
    export_picks_csv(graph, picks, output_path)
    return 0


# --- Main ---

def build_parser():
    parser = argparse.ArgumentParser(
        description="Bracket Pool Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. python cli.py show                                   # Check the seeded bracket
  2. python cli.py validate --picks picks.json --submit   # Check a bracket before submitting
  3. python cli.py score --picks picks.json --results results.json
  4. python cli.py standings --entries entries/ --results results.json
        """
    )
    parser.add_argument("--tournament", default=config.DEFAULT_TOURNAMENT_FILE,
                        help="Tournament JSON file (regions, seeds, scoring)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # show
    p_show = subparsers.add_parser("show", help="Display the bracket")
    p_show.add_argument("--picks", help="Picks file (JSON or CSV)")

    # validate
    p_validate = subparsers.add_parser("validate", help="Validate a pick set")
    p_validate.add_argument("--picks", required=True, help="Picks file (JSON or CSV)")
    p_validate.add_argument("--submit", action="store_true", help="Also require every game to be picked")

    # score
    p_score = subparsers.add_parser("score", help="Score a pick set")
    p_score.add_argument("--picks", required=True, help="Picks file (JSON or CSV)")
    p_score.add_argument("--results", help="Results file (JSON or CSV)")
    p_score.add_argument("--summary", action="store_true", help="Only show per-round totals")

    # standings
    p_standings = subparsers.add_parser("standings", help="Rank all pool entries")
    p_standings.add_argument("--entries", required=True, help="Entries JSON file or directory")
    p_standings.add_argument("--results", help="Results file (JSON or CSV)")
    p_standings.add_argument("--championship-total", type=int,
                             help="Combined championship score, for the tie breaker")
    p_standings.add_argument("--submitted-only", action="store_true", help="Skip in-progress entries")
    p_standings.add_argument("--output", help="Also export standings to this CSV path")

    # simulate
    p_sim = subparsers.add_parser("simulate", help="Simulate tournament results")
    p_sim.add_argument("--results", help="Known results to keep fixed")
    p_sim.add_argument("--through-round", type=int, choices=range(1, 7), default=6)
    p_sim.add_argument("--seed", type=int, default=config.DEFAULT_SIM_SEED)
    p_sim.add_argument("--output", help="Write simulated results to this JSON path")
    p_sim.add_argument("--picks", help="Score this pick set over many simulations instead")
    p_sim.add_argument("--sims", type=int, default=config.DEFAULT_SIMULATIONS)

    # export
    p_export = subparsers.add_parser("export", help="Export a pick set as CSV")
    p_export.add_argument("--picks", required=True, help="Picks file (JSON or CSV)")
    p_export.add_argument("--output", help="Output file path")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "show": cmd_show,
        "validate": cmd_validate,
        "score": cmd_score,
        "standings": cmd_standings,
        "simulate": cmd_simulate,
        "export": cmd_export,
    }

    try:
        return commands[args.command](args)
    except BracketError as e:
        print(f"ERROR: {e}")
        return 1
    except FileNotFoundError as e:
        print(f"ERROR: {e.filename} not found")
        return 1


if __name__ == "__main__":
    sys.exit(main())
