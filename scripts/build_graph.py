#!/usr/bin/env python3
"""
build_graph.py - Compile the resource catalog into data/graph.json.

Reads the catalog CSV, resolves modules and resources, orders modules by
prerequisites (failing on cycles), computes closures and representative
profiles, and writes the graph artifact atomically.

Usage:
  python scripts/build_graph.py
  python scripts/build_graph.py --input data/resources.csv --output data/graph.json
  python scripts/build_graph.py --config build.yaml --report data/graph_report.md
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from learngraph.config import load_settings
from learngraph.pipeline import PrerequisiteCycleError, build_graph

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compile the learning resource catalog into a module graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/build_graph.py
  python scripts/build_graph.py --input data/resources.csv --output data/graph.json
  python scripts/build_graph.py --delimiter ';' --report data/graph_report.md
        """,
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Catalog CSV with a header row (default: data/resources.csv)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output graph JSON (default: data/graph.json)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional Markdown report path",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML settings file",
    )
    parser.add_argument(
        "--delimiter",
        default=None,
        help="Catalog field delimiter (default: ',')",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings(
            config_path=args.config,
            project_root=PROJECT_ROOT,
            input_path=args.input,
            output_path=args.output,
            report_path=args.report,
            delimiter=args.delimiter,
            log_level="DEBUG" if args.verbose else None,
        )
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Invalid settings: {e}")
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    # Validate input
    if not settings.input_path.exists():
        print(f"ERROR: Input file not found: {settings.input_path}")
        return 1

    try:
        payload = build_graph(
            input_path=settings.input_path,
            output_path=settings.output_path,
            report_path=settings.report_path,
            delimiter=settings.delimiter,
        )
    except PrerequisiteCycleError as e:
        logger.error(str(e))
        print(f"ERROR: {e}")
        return 1

    print(f"\nGraph compiled to {settings.output_path}")
    print(f"  - Modules: {len(payload.modules)}")
    print(f"  - Resources: {len(payload.resources)}")
    print(f"  - Top-level tags: {len(payload.tag_tree.children)}")
    if settings.report_path is not None:
        print(f"\nVerify with:")
        print(f"  cat {settings.report_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
