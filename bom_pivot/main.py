#!/usr/bin/env python3
# Path: bom_pivot/main.py
"""
bom_pivot - Main Entry Point

Hierarchical dimension and pivot composition engine for cost/BOM data.
The command line builds dimension hierarchies from record files and
prints them, the visible axis they produce, or their coverage of a fact
file.

Data Flow:
    INPUT:  dimension config (YAML), dimension and fact records (JSON/NDJSON/CSV)
    PROCESS: Hierarchy building, indexing, flattening, composition
    OUTPUT: Text rendering on stdout

Usage:
    python main.py --list                            # List configured dimensions
    python main.py -d le=le.json                     # Print the le tree
    python main.py -d le=le.json --axis row --depth 1
    python main.py -d le=le.json -d year=years.csv --axis column
    python main.py -d le=le.json --facts facts.ndjson
"""

import argparse
import sys
from pathlib import Path

# Ensure bom_pivot root is in path
sys.path.insert(0, str(Path(__file__).parent))

from config_loader import ConfigLoader
from core.logger import setup_ipo_logging, get_input_logger
from loaders import DimensionConfigLoader, RecordReadError, read_records
from output import AxisTextFormatter
from process.hierarchy.constants import Axis, BuildState
from process.pivot import (
    PivotWorkspace,
    build_dimension_mapping,
    verify_fact_sample,
)
from constants import (
    STATUS_OK, STATUS_FAIL, STATUS_WARN, STATUS_INFO,
    MENU_HEADER, MENU_SEPARATOR,
)


def print_banner() -> None:
    """Print application banner."""
    print()
    print(MENU_HEADER)
    print("  BOM_PIVOT - Hierarchical Pivot Engine")
    print("  Dimension Hierarchies for Cost/BOM Facts")
    print(MENU_HEADER)
    print()


def print_system_info(config: ConfigLoader) -> None:
    """
    Print system configuration information.

    Args:
        config: ConfigLoader instance
    """
    print(f"  Environment: {config.get('environment')}")
    print(f"  Dimensions:  {config.get('dimensions_file')}")
    print(f"  Separator:   {config.get('path_separator')}")
    print()


def list_dimensions(definitions: dict) -> None:
    """
    List all configured dimensions.

    Args:
        definitions: Dimension key -> DimensionDefinition
    """
    if not definitions:
        print(f"\n{STATUS_INFO} No dimensions configured.")
        return

    print(f"\n{STATUS_OK} {len(definitions)} dimensions configured:\n")
    print(f"  {'Key':<16} {'Label':<24} {'Kind':<6} {'Fact field':<24}")
    print(f"  {MENU_SEPARATOR}")

    for definition in definitions.values():
        kind = 'flat' if definition.is_flat else 'tree'
        print(
            f"  {definition.key:<16} {definition.label[:24]:<24} "
            f"{kind:<6} {definition.fact_field:<24}"
        )

    print()


def parse_dimension_args(values: list[str]) -> list[tuple[str, Path]]:
    """
    Split KEY=FILE arguments.

    Raises:
        ValueError: If an argument has no '='
    """
    result = []
    for value in values or []:
        key, sep, file_name = value.partition('=')
        if not sep or not key or not file_name:
            raise ValueError(f"Expected KEY=FILE, got '{value}'")
        result.append((key.strip(), Path(file_name.strip())))
    return result


def expand_to_depth(workspace: PivotWorkspace, dimension: str, axis: Axis, depth: int) -> None:
    """Expand every node above the given depth on one axis."""
    hierarchy = workspace.hierarchy(dimension)
    for node in hierarchy:
        if node.has_children:
            workspace.expansion.set_expanded(dimension, axis, node.id, node.level < depth)


def load_workspace(
    definitions: dict,
    dimension_files: list[tuple[str, Path]],
    config: ConfigLoader,
) -> PivotWorkspace:
    """
    Build every requested dimension in a new workspace.

    Raises:
        KeyError: If a dimension is not configured
        FileNotFoundError: If a record file is missing
        RecordReadError: If a record file cannot be read
    """
    workspace = PivotWorkspace(definitions, config=config)

    for key, file_path in dimension_files:
        records = read_records(file_path)
        hierarchy = workspace.load_dimension(key, records)
        state = workspace.state(key)
        status = STATUS_OK if state is BuildState.BUILT else STATUS_WARN
        print(
            f"{status} {key}: {hierarchy.node_count} nodes, "
            f"{hierarchy.leaf_count} leaves ({state.value})"
        )

    return workspace


def show_coverage(workspace: PivotWorkspace, dimensions: list[str], facts_path: Path, config: ConfigLoader) -> None:
    """Print coverage of a fact file for each loaded dimension."""
    facts = read_records(facts_path)
    formatter = AxisTextFormatter()
    sample_size = config.get('verify_sample_size', 10)
    min_coverage = config.get('min_coverage_percent', 0.0)

    for dimension in dimensions:
        hierarchy = workspace.hierarchy(dimension)
        fact_field = workspace.correlation[dimension]
        mapping = build_dimension_mapping(hierarchy, facts, fact_field)
        sample = verify_fact_sample(hierarchy, facts, fact_field, sample_size)

        print(formatter.format_mapping(mapping))
        print(f"  Sample: {sample.matches}/{sample.sample_size} records have matching {fact_field}")
        if mapping.coverage_percent < min_coverage:
            print(f"{STATUS_WARN} Coverage below {min_coverage}%")


def initialize_system() -> ConfigLoader:
    """
    Initialize bom_pivot system components.

    Returns:
        ConfigLoader instance
    """
    config = ConfigLoader()

    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=config.get('log_level', 'INFO'),
        console_output=config.get('log_console', True) and not config.get('debug', False)
    )

    return config


def main() -> int:
    """
    Main entry point for bom_pivot.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description='bom_pivot - Hierarchical Pivot Engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --list                       List configured dimensions
  python main.py -d le=le.json                Print the legal entity tree
  python main.py -d le=le.json --axis row --depth 2
  python main.py -d le=le.json -d year=y.csv --axis column
  python main.py -d le=le.json --facts facts.ndjson
        """
    )

    parser.add_argument(
        '--config', '-c',
        type=Path,
        help='Dimension config YAML (default from BOM_PIVOT_DIMENSIONS_FILE)'
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='List configured dimensions'
    )

    parser.add_argument(
        '--dimension', '-d',
        action='append',
        default=[],
        metavar='KEY=FILE',
        help='Dimension key and its record file (repeatable)'
    )

    parser.add_argument(
        '--axis', '-a',
        choices=[axis.value for axis in Axis],
        help='Print the visible axis instead of the full tree'
    )

    parser.add_argument(
        '--depth',
        type=int,
        default=None,
        help='Expand nodes above this depth on the chosen axis'
    )

    parser.add_argument(
        '--facts', '-f',
        type=Path,
        help='Fact record file; prints dimension coverage'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress banner and verbose output'
    )

    args = parser.parse_args()

    if not args.quiet:
        print_banner()

    try:
        config = initialize_system()
        logger = get_input_logger('main')

        if not args.quiet:
            print_system_info(config)

        loader = DimensionConfigLoader(args.config or config.get('dimensions_file'))
        definitions = loader.load_all()

        if args.list:
            list_dimensions(definitions)
            return 0

        dimension_files = parse_dimension_args(args.dimension)
        if not dimension_files:
            print(f"\n{STATUS_FAIL} No dimension given (use -d KEY=FILE or --list)")
            return 1

        logger.info(f"Loading dimensions: {[key for key, _ in dimension_files]}")
        workspace = load_workspace(definitions, dimension_files, config)
        dimensions = [key for key, _ in dimension_files]
        formatter = AxisTextFormatter()

        if args.facts:
            show_coverage(workspace, dimensions, args.facts, config)

        elif args.axis:
            axis = Axis(args.axis)
            for dimension in dimensions:
                workspace.place(dimension, axis)
                if args.depth is not None:
                    expand_to_depth(workspace, dimension, axis, args.depth)
            entries = workspace.axis_entries(axis)
            print()
            print(formatter.format_axis(entries))
            print(f"\n{STATUS_INFO} {len(entries)} {axis.value} entries")

        else:
            for dimension in dimensions:
                print()
                print(formatter.format_hierarchy(workspace.hierarchy(dimension)))

        return 0

    except (FileNotFoundError, RecordReadError) as e:
        print(f"\n{STATUS_FAIL} Cannot read records: {e}")
        return 1

    except (ValueError, KeyError) as e:
        print(f"\n{STATUS_FAIL} Error: {e}")
        return 1

    except KeyboardInterrupt:
        print("\n[Interrupted]")
        return 130


if __name__ == '__main__':
    sys.exit(main())
