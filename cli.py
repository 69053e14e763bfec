#!/usr/bin/env python
"""
Command-line interface for the Grid Fixture Generator

Usage:
    python cli.py project --input fixture.json
    python cli.py generate --input fixture.json --output map.pbf
"""

import os
import sys
import json
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from pydantic import ValidationError

from gridfixture import FixtureDocument, build_pbf, get_config, map_to_coordinates, validate_config


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def load_fixture(path: str) -> FixtureDocument:
    """Read and validate a fixture JSON file"""
    with open(path, "r", encoding="utf-8") as f:
        return FixtureDocument.model_validate(json.load(f))


def cmd_project(args):
    """Print the coordinate table of a fixture map"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        fixture = load_fixture(args.input)
        gridsize = args.gridsize or fixture.gridsize
        locations = map_to_coordinates(fixture.map, gridsize, fixture.topleft_coordinate())
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid fixture {args.input}: {e}")
        return 1

    print(json.dumps({name: c.as_list() for name, c in locations.items()}, indent=2))
    return 0


def cmd_generate(args):
    """Generate a PBF file from a fixture"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    # A missing output directory is reported by the writer
    output_path = args.output or os.path.splitext(args.input)[0] + ".pbf"

    try:
        fixture = load_fixture(args.input)
        locations = map_to_coordinates(fixture.map, fixture.gridsize, fixture.topleft_coordinate())
        graph = build_pbf(
            locations,
            fixture.ways,
            fixture.nodes,
            fixture.relations,
            output_path,
            initial_osm_id=fixture.initial_osm_id,
        )
    except Exception as e:
        logger.error(f"Failed to generate {output_path}: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    logger.info(f"✓ Generated: {output_path}")

    if args.summary:
        print(json.dumps(graph.summary(), indent=2))

    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Grid Fixture Generator CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Show node coordinates:
    python cli.py project --input fixture.json

  Generate a PBF file:
    python cli.py generate --input fixture.json --output map.pbf --summary
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Project command
    project_parser = subparsers.add_parser("project", help="Print node coordinates of a fixture map")
    project_parser.add_argument("--input", "-i", required=True, help="Fixture JSON file")
    project_parser.add_argument("--gridsize", "-g", type=float, help="Override grid size in meters")
    project_parser.set_defaults(func=cmd_project)

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate a PBF file from a fixture")
    gen_parser.add_argument("--input", "-i", required=True, help="Fixture JSON file")
    gen_parser.add_argument("--output", "-o", help="Output PBF file in an existing directory (default: next to the input)")
    gen_parser.add_argument("--summary", "-s", action="store_true", help="Print entity counts to stdout")
    gen_parser.set_defaults(func=cmd_generate)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        validate_config(get_config())
    except ValueError as e:
        setup_logging(args.verbose)
        logger.error(str(e))
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
