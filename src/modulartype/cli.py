#!/usr/bin/env python3
"""
modulartype CLI
Command-line interface for generating fluid type scales and applying them to stylesheets
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import discover_config, get_data_manager, load_config_file, resolve_config
from .core.models import ScaleConfig, Unit
from .core.scale import ScaleGenerator
from .parsers.css_parser import CSSParser
from .processors.substitution import ModularTypeProcessor
from .utils.logging import ModularTypeLogger
from .writers.css_writer import CSSWriter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modulartype",
        description="Generate a fluid modular type scale and write it into a stylesheet.\n"
        "Expands the generator directive comment, or replaces scale variables inline.",
    )
    parser.add_argument("input", nargs="?", help="Input stylesheet (.css)")
    parser.add_argument("-o", "--output", help="Output file (optional, defaults to stdout)")
    parser.add_argument(
        "-c", "--config", help="Options file (.yaml, .yml or .json). Defaults to "
        "modulartype.yaml/.yml/.json next to the input"
    )

    parser.add_argument(
        "--inline",
        action="store_true",
        default=None,
        help="Replace scale variables inline instead of expanding the directive",
    )
    parser.add_argument("--unit", choices=Unit.ALL, help="Output unit (default: rem)")
    parser.add_argument("--precision", type=int, help="Decimal digits of generated values")
    parser.add_argument("--prefix", help="Prefix of generated variables")
    parser.add_argument("--min-step", type=int, help="Steps below the base step")
    parser.add_argument("--max-step", type=int, help="Steps above the base step")

    parser.add_argument(
        "--print-scale",
        action="store_true",
        help="Print the generated scale instead of processing a stylesheet",
    )
    parser.add_argument(
        "--format",
        choices=["css", "table"],
        default="css",
        help="Output format for --print-scale (default: css)",
    )
    parser.add_argument(
        "--show-config-dir",
        action="store_true",
        help="Print the user config directory holding defaults.yaml and exit",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Write debug details to the log file"
    )
    return parser


def _report_error(message: str) -> None:
    """Log an error and echo it to stderr, one line per message line"""
    lines = [line for line in message.split("\n") if line.strip()]
    if len(lines) > 1:
        ModularTypeLogger.error(lines[0])
        for line in lines[1:]:
            ModularTypeLogger.error(f"  {line}")
    elif lines:
        ModularTypeLogger.error(lines[0])
    print(f"Error: {message}", file=sys.stderr)


def collect_options(args: argparse.Namespace, input_path: Optional[Path]) -> Dict[str, Any]:
    """Defaults < user defaults < config file < command-line flags"""
    options = get_data_manager().load_defaults()

    config_path = Path(args.config) if args.config else None
    if config_path is None:
        config_path = discover_config(input_path.parent if input_path else Path.cwd())

    if config_path is not None:
        ModularTypeLogger.info(f"Loading options from {config_path}")
        options.update(load_config_file(config_path))

    flags = {
        "replace_inline": args.inline,
        "unit": args.unit,
        "precision": args.precision,
        "prefix": args.prefix,
        "min_step": args.min_step,
        "max_step": args.max_step,
    }
    options.update({key: value for key, value in flags.items() if value is not None})
    return options


def format_table(config: ScaleConfig) -> str:
    steps = ScaleGenerator(config).steps()
    rows: List[List[str]] = [["variable", "min", "max", "value"]]
    rows.extend([s.key, s.min_size, s.max_size, s.value] for s in steps)
    widths = [max(len(row[i]) for row in rows) for i in range(3)]
    return "\n".join(
        "  ".join(row[i].ljust(widths[i]) for i in range(3)) + "  " + row[3] for row in rows
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.show_config_dir:
        print(get_data_manager().user_data_dir)
        return 0

    if args.print_scale:
        try:
            config = resolve_config(collect_options(args, Path(args.input) if args.input else None))
            if args.format == "table":
                print(format_table(config))
            else:
                print(ScaleGenerator(config).generate().to_css())
        except (ValueError, ZeroDivisionError) as e:
            _report_error(str(e))
            return 1
        return 0

    if not args.input:
        parser.print_usage(sys.stderr)
        _report_error("Input file is required unless --print-scale is given")
        return 1

    input_path = Path(args.input)

    if not input_path.exists():
        _report_error(f"Input file {input_path} does not exist")
        return 1

    # One log file per run, kept under the user config directory
    ModularTypeLogger.setup_logger(
        str(input_path),
        get_data_manager().logs_dir,
        logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        config = resolve_config(collect_options(args, input_path))
        ModularTypeLogger.info(
            f"Scale: {config.step_count} steps, unit {config.unit}, "
            f"{'inline replacement' if config.replace_inline else 'directive expansion'}"
        )

        processor = ModularTypeProcessor(config)
        stylesheet = CSSParser().parse_file(str(input_path))
        processor.process(stylesheet)
        result = CSSWriter().write(stylesheet)

        if args.output:
            output_path = Path(args.output)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(result)
            ModularTypeLogger.success(f"Processed {input_path.name} -> {output_path.name}")
            print(f"✓ Processing completed successfully: {output_path}", file=sys.stderr)
        else:
            sys.stdout.write(result)

    except Exception as e:
        import traceback

        _report_error(f"Error while processing {input_path.name}:\n{e}")
        ModularTypeLogger.debug("Full traceback:")
        ModularTypeLogger.debug(traceback.format_exc())
        return 1
    finally:
        # Always print log file path for easy IDE access
        log_path = ModularTypeLogger.get_log_file_path()
        if log_path:
            print(f"Log file: {log_path}", file=sys.stderr)
        ModularTypeLogger.cleanup()

    return 0


if __name__ == "__main__":
    sys.exit(main())
