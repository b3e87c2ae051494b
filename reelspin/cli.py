"""
ReelSpin CLI - Command-line interface for the engine.

Usage:
    reelspin spin [--spec FILE] [--seed N] [--count N]   Resolve spins
    reelspin validate <spec_file>                        Validate a machine spec
    reelspin default-spec                                Print the default spec as JSON
    reelspin serve [--host HOST] [--port PORT]           Run the HTTP API
"""

import argparse
import json
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="ReelSpin - Slot Machine Spin Engine",
        prog="reelspin",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("REELSPIN_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING, or $REELSPIN_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Spin command
    spin_parser = subparsers.add_parser("spin", help="Resolve one or more spins")
    spin_parser.add_argument("--spec", help="Path to machine spec JSON (default: built-in)")
    spin_parser.add_argument("--seed", type=int, help="Seed for reproducible spins")
    spin_parser.add_argument("--count", type=int, default=1, help="Number of spins")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a machine spec")
    validate_parser.add_argument("spec_file", help="Path to spec file")

    # Default spec
    subparsers.add_parser("default-spec", help="Print the built-in machine spec")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "spin":
        return cmd_spin(args)
    elif args.command == "validate":
        return cmd_validate(args)
    elif args.command == "default-spec":
        return cmd_default_spec(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def cmd_spin(args):
    """Resolve spins and print each outcome."""
    from .engine_core import SlotEngine, build_random_provider
    from .errors import SpecValidationError
    from .spec_schema import default_machine_spec, load_spec

    try:
        spec = load_spec(args.spec) if args.spec else default_machine_spec()
    except SpecValidationError as e:
        print("Error: invalid spec")
        for error in e.errors:
            print(f"  - {error}")
        return 1

    engine = SlotEngine(spec, build_random_provider(args.seed))
    total = 0
    for n in range(1, args.count + 1):
        outcome = engine.spin()
        total += outcome.total_payout
        print(f"Spin {n}:")
        print(outcome.grid.render())
        for match in outcome.matches:
            print(
                f"  Line {match.payline_index}: {match.match_count}x {match.symbol.name}"
                f" pays {match.payout} at {list(match.matched_positions)}"
            )
        print(f"  Payout: {outcome.total_payout}" if outcome.is_win else "  No win")
        print()

    if args.count > 1:
        print(f"Total payout over {args.count} spins: {total}")
    return 0


def cmd_validate(args):
    """Validate a machine spec file."""
    from .errors import SpecValidationError
    from .spec_schema import MachineSpec, validate_spec

    print(f"Validating: {args.spec_file}")
    try:
        with open(args.spec_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        spec = MachineSpec.from_dict(data)
    except FileNotFoundError:
        print(f"Error: File not found: {args.spec_file}")
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e.msg} (line {e.lineno})")
        return 1
    except SpecValidationError as e:
        errors, warnings = e.errors, []
    else:
        result = validate_spec(spec)
        errors, warnings = result.errors, result.warnings

    if warnings:
        print("\nWarnings:")
        for w in warnings:
            print(f"  - {w}")

    if errors:
        print("\nErrors:")
        for e in errors:
            print(f"  - {e}")
        return 1

    print("Spec is valid")
    return 0


def cmd_default_spec(args):
    """Print the built-in spec as JSON."""
    from .spec_schema import default_machine_spec

    print(json.dumps(default_machine_spec().to_dict(), indent=2))
    return 0


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
