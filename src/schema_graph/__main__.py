"""
Main entry point for the schema graph builder
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from schema_graph.core.config import Config
from schema_graph.core.engine import SchemaGraphEngine
from schema_graph.layouts.factory import LayoutFactory
from schema_graph.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line arguments"""
    parser = argparse.ArgumentParser(
        prog="schema-graph",
        description="Build a laid-out schema graph (JSON) from SQL DDL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-graph schema.sql                          # Hierarchical layout to stdout
  schema-graph schema.sql --layout force --seed 7  # Reproducible force layout
  schema-graph schema.sql --resolve-overlaps --output diagram.json
        """
    )
    parser.add_argument("sql_file", help="SQL file to parse (.sql or .txt)")
    parser.add_argument(
        "--config",
        default=os.getenv('CONFIG_FILE'),
        help="YAML configuration file (default: $CONFIG_FILE)"
    )
    parser.add_argument("--layout", choices=LayoutFactory.get_supported_types(), help="Layout algorithm")
    parser.add_argument("--spacing", type=float, help="Distance unit between tables in pixels")
    parser.add_argument("--padding", type=float, help="Canvas padding in pixels")
    parser.add_argument("--seed", type=int, help="Random seed for the force layout")
    parser.add_argument("--distribute", action="store_true", help="Snap tables onto an even grid")
    parser.add_argument("--resolve-overlaps", action="store_true", help="Push overlapping tables apart")
    parser.add_argument("--hide", action="append", default=[], metavar="TABLE", help="Hide a table")
    parser.add_argument("--output", help="Write JSON here instead of stdout")
    parser.add_argument("--log-level", help="Logging level (default from config)")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Load configuration and apply command line overrides"""
    config = Config.from_yaml(args.config) if args.config else Config()

    layout_overrides = {
        'layout_type': args.layout,
        'spacing': args.spacing,
        'padding': args.padding,
        'seed': args.seed,
    }
    layout_overrides = {key: value for key, value in layout_overrides.items() if value is not None}
    if layout_overrides:
        layout = config.layout.model_validate({**config.layout.model_dump(), **layout_overrides})
        config = config.model_copy(update={'layout': layout})

    if args.log_level:
        config.logging.level = args.log_level

    return config


def main(argv=None) -> int:
    """Main function"""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.model_dump())

    try:
        engine = SchemaGraphEngine(config)
        sql = engine.load_sql_file(args.sql_file)
        diagram = engine.build_diagram(
            sql,
            resolve_overlaps=args.resolve_overlaps,
            distribute=args.distribute,
            hidden_tables=args.hide
        )
        output = json.dumps(diagram.to_dict(), indent=2)

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output + "\n", encoding="utf-8")
            logger.info(f"Diagram written to {output_path}")
        else:
            print(output)

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
