"""
Command-line interface for methodlint.

Provides a CLI for scanning source trees, creating a configuration
file and listing the available rules.
"""

import argparse
import logging
import sys
import os
from typing import Optional, List

from methodlint import __version__
from methodlint.core.engine import ScanEngine
from methodlint.core.findings import ScanResult
from methodlint.core.rules import registry
from methodlint.config import load_scan_config, create_default_config
from methodlint.formatters import get_formatter

logger = logging.getLogger("methodlint")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="methodlint",
        description="Method-level complexity and naming checks for Java and Python code.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  methodlint scan ./src                    # Scan a directory
  methodlint scan Foo.java                 # Scan a single file
  methodlint scan . --format json          # Output as JSON
  methodlint scan . --format sarif -o out  # SARIF output to file
  methodlint scan . --severity error       # Only errors
  methodlint init                          # Create config file
  methodlint list-rules                    # Show available rules
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Scan code for complexity and naming issues")
    scan_parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Target file or directory to scan (default: current directory)",
    )
    scan_parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    scan_parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "sarif"],
        default=None,
        help="Output format (default: text)",
    )
    scan_parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )
    scan_parser.add_argument(
        "-s", "--severity",
        choices=["error", "warning"],
        default=None,
        help="Minimum severity to report (default: warning)",
    )
    scan_parser.add_argument(
        "--include",
        action="append",
        help="Include patterns (can be specified multiple times)",
    )
    scan_parser.add_argument(
        "--exclude",
        action="append",
        help="Exclude patterns (can be specified multiple times)",
    )
    scan_parser.add_argument(
        "--disable",
        action="append",
        metavar="RULE_ID",
        help="Disable a rule by id (can be specified multiple times)",
    )
    scan_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output and debug logging",
    )
    scan_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )
    scan_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    scan_parser.add_argument(
        "--show-suppressed",
        action="store_true",
        help="Show suppressed diagnostics",
    )
    scan_parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=None,
        help="Number of parallel workers (default: 4)",
    )

    # Init command
    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    # List-rules command
    rules_parser = subparsers.add_parser("list-rules", help="List available rules")
    rules_parser.add_argument(
        "--category",
        choices=["complexity", "naming", "all"],
        default="all",
        help="Filter by category",
    )
    rules_parser.add_argument(
        "--language",
        help="Filter by language",
    )

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False):
    """Configure root logging for a CLI run."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def exit_code(result: ScanResult) -> int:
    """2 when errors were diagnosed, 1 for warnings or recorded failures, else 0."""
    if result.error_count > 0:
        return 2
    if result.warning_count > 0 or result.errors:
        return 1
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    """Execute the scan command."""
    scan_config = load_scan_config(args.config, start_dir=args.target)

    # Apply command-line overrides
    if args.severity:
        scan_config.severity_threshold = args.severity
    if args.jobs:
        scan_config.max_workers = args.jobs
    if args.include:
        scan_config.include_patterns = args.include
    if args.exclude:
        scan_config.exclude_patterns = scan_config.exclude_patterns + args.exclude
    if args.disable:
        scan_config.rules.disabled = scan_config.rules.disabled + args.disable
    if args.format:
        scan_config.output.format = args.format
    if args.output:
        scan_config.output.output_file = args.output
    if args.verbose:
        scan_config.output.verbose = True
    if args.no_color:
        scan_config.output.color = False
    if args.show_suppressed:
        scan_config.output.show_suppressed = True
    scan_config.validate()

    output_config = scan_config.output
    engine = ScanEngine(scan_config.to_engine_config())

    logger.info("Scanning %s", os.path.abspath(args.target))
    result = engine.scan(args.target)

    if output_config.format == "text":
        formatter = get_formatter(
            "text",
            use_color=output_config.color and not output_config.output_file,
            verbose=output_config.verbose,
            show_suppressed=output_config.show_suppressed,
        )
    else:
        formatter = get_formatter(output_config.format, include_suppressed=output_config.show_suppressed)

    output = formatter.format_result(result)

    if output_config.output_file:
        with open(output_config.output_file, "w") as f:
            f.write(output)
        if output_config.format == "text":
            print(f"Results written to {output_config.output_file}")
    else:
        print(output)

    return exit_code(result)


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    config_file = ".methodlint.yaml"

    if os.path.exists(config_file) and not args.force:
        print(f"Configuration file {config_file} already exists.")
        print("Use --force to overwrite.")
        return 1

    content = create_default_config()

    with open(config_file, "w") as f:
        f.write(content)

    print(f"Created configuration file: {config_file}")
    return 0


def cmd_list_rules(args: argparse.Namespace) -> int:
    """Execute the list-rules command."""
    print("\nAvailable Rules")
    print("=" * 70)

    rules = registry.get_all_rules()

    if args.category != "all":
        rules = [r for r in rules if r.metadata.category.value == args.category]

    if args.language:
        rules = [r for r in rules if r.supports_language(args.language)]

    for rule in rules:
        meta = rule.metadata
        status = "+" if registry.is_enabled_by_default(meta.rule_id) else "-"
        print(f"  {status} {meta.rule_id:<26} {meta.summary:<40} [{meta.severity.value}]")
        if meta.link:
            print(f"    {meta.link}")

    print(f"\nTotal: {len(rules)} rules")
    print("+ = enabled by default, - = disabled by default")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(
        verbose=getattr(args, "verbose", False),
        quiet=getattr(args, "quiet", False),
    )

    try:
        if args.command == "scan":
            return cmd_scan(args)
        elif args.command == "init":
            return cmd_init(args)
        elif args.command == "list-rules":
            return cmd_list_rules(args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\nScan interrupted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
