"""
Main entry point for the Tournament Bracket Builder.
Builds brackets for a roster and prints the report.
"""

import sys
import json
import logging
import argparse
from datetime import datetime

from app.core.logging_config import setup_logging
from app.models import Entrant, BracketSettings
from app.services.partitioner import process_entrants
from app.services.roster_generator import generate_roster
from app.services.validator import BracketValidator


def load_roster(path: str):
    """Read a JSON list of entrant records."""
    with open(path, "r", encoding="utf-8") as handle:
        records = json.load(handle)
    return [Entrant.from_dict(record) for record in records]


def main():
    """
    Main function to run the bracket builder.
    Loads or generates a roster, builds brackets, audits and prints them.
    """
    parser = argparse.ArgumentParser(
        description='Tournament Bracket Builder - Group entrants into fair brackets'
    )
    parser.add_argument(
        'roster',
        nargs='?',
        help='Path to a JSON list of entrants'
    )
    parser.add_argument(
        '--generate',
        type=int,
        metavar='N',
        help='Generate a demo roster of N entrants instead of reading one'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=0,
        help='Seed for --generate'
    )
    parser.add_argument(
        '--target-size',
        type=int,
        help='Preferred bracket size (3, 4 or 5)'
    )
    parser.add_argument(
        '--settings',
        help='Path to a JSON object of bracket settings'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else None)

    print("\n" + "=" * 80)
    print("TOURNAMENT BRACKET BUILDER")
    print("=" * 80)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)

    try:
        # Step 1: Load roster
        if args.generate:
            print(f"\n[STEP 1] Generating {args.generate} demo entrants (seed {args.seed})...")
            entrants = generate_roster(args.generate, args.seed)
        elif args.roster:
            print(f"\n[STEP 1] Loading roster from {args.roster}...")
            entrants = load_roster(args.roster)
        else:
            parser.error("a roster file or --generate N is required")

        if not entrants:
            print("ERROR: No entrants loaded.")
            return 1

        settings = BracketSettings()
        if args.settings:
            with open(args.settings, "r", encoding="utf-8") as handle:
                settings = BracketSettings.from_dict(json.load(handle))
        if args.target_size is not None:
            settings.target_bracket_size = args.target_size

        print(f"  - {len(entrants)} entrants")

        # Step 2: Build brackets
        print("\n[STEP 2] Building brackets...")
        result = process_entrants(entrants, settings)

        # Step 3: Audit
        print("\n[STEP 3] Auditing result...")
        validator = BracketValidator(settings)
        audit = validator.validate_result(result, entrants)
        print(audit.get_summary())

        print("\n" + validator.generate_result_report(result))

        print("\n" + "=" * 80)
        print("BRACKETS COMPLETE")
        print("=" * 80)
        print(result.get_summary())
        print(f"Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print("=" * 80)

        return 0 if audit.is_valid else 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        return 1

    except (OSError, ValueError, KeyError) as e:
        print(f"\n\nERROR: Could not build brackets:")
        print(f"{type(e).__name__}: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
