#!/usr/bin/env python3
"""
colmeta - Cross-engine column metadata

Main entry point for reading normalized column metadata from command line.
"""

import sys
import argparse
import logging
from typing import Optional

from colmeta.config import Config
from colmeta.core.columns import fetch_columns
from colmeta.core.formatters import format_columns
from colmeta.db.connection_factory import get_role_connection, get_role_schema
from colmeta.exceptions import DatabaseConnectionError, UnknownEngineError

# --- Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='colmeta - normalized column metadata for cross-engine comparison',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py users                           # Columns of users in the target default schema
  python main.py users -s sales                  # Columns of sales.users
  python main.py EMPLOYEES -s HR --role source   # Use the source database type
  python main.py users --format json             # Output as JSON
  python main.py users -o users.md -f markdown
        """
    )

    parser.add_argument('table', help='Name of the table')

    parser.add_argument(
        '-s', '--schema',
        type=str,
        help='Schema name of the table (default: configured schema of the role database)'
    )

    parser.add_argument(
        '-r', '--role',
        choices=['source', 'target'],
        default='target',
        help='Database role whose type drives the catalog query and value expressions (default: target)'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['table', 'markdown', 'json', 'csv'],
        default='table',
        help='Output format (default: table)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        help='Output file path (if not specified, prints to console)'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on unrecognized database types instead of falling back to postgres'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose/debug logging'
    )

    return parser.parse_args(argv)


def run(
    table: str,
    schema: Optional[str] = None,
    role: str = 'target',
    output_format: str = 'table',
    output_file: Optional[str] = None,
) -> Optional[int]:
    """
    Read and print column metadata for a table.

    Args:
        table: Table name
        schema: Schema name of the table (default: configured schema for the role)
        role: Database role ('source' or 'target')
        output_format: Output format (table, markdown, json, csv)
        output_file: Optional file path to save output

    Returns:
        Number of columns found, or None if failed
    """
    try:
        if not schema:
            schema = get_role_schema(role)
        logger.info(f"Reading columns for '{schema}.{table}' [{role}: {Config.get_database_type(role)}]")
        conn = get_role_connection(role)
    except (DatabaseConnectionError, UnknownEngineError) as e:
        logger.error(f"Database error: {e}")
        return None

    try:
        result = fetch_columns(conn, schema, table, role)
    except UnknownEngineError as e:
        logger.error(f"{e}")
        return None
    finally:
        conn.close()

    formatted_output = format_columns(result, output_format)

    if output_file:
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(formatted_output)
        logger.info(f"Columns saved to: {output_file}")
    else:
        print(formatted_output)

    if not result.ok:
        return None

    unsupported = [c.column_name for c in result.columns if not c.supported]
    if unsupported:
        logger.info(f"{len(unsupported)} unsupported columns: {unsupported}")

    return len(result.columns)


def main():
    """Main entry point for colmeta."""
    args = parse_args()

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.strict:
        Config.STRICT_DATABASE_TYPE = True

    # Validate configuration
    Config.validate()

    result = run(
        table=args.table,
        schema=args.schema,
        role=args.role,
        output_format=args.format,
        output_file=args.output,
    )

    if result is None:
        logger.error("Column retrieval failed")
        sys.exit(1)
    elif result == 0:
        logger.warning(f"No columns found for '{args.table}'")
        sys.exit(0)
    else:
        logger.info(f"Completed: {result} columns")
        sys.exit(0)


if __name__ == "__main__":
    main()
