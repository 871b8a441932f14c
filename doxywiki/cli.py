"""CLI entrypoint for doxywiki."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from .config import CONFIG_FILENAME, ConfigError, DoxywikiConfig, load_config
from .filters import DEFAULT_INDEXES, DEFAULT_SUMMARY_SECTIONS, LANGUAGE_FILTER, NO_SKIP
from .generator import Generator, GeneratorError
from .json_converter import JsonConverter
from .loader import TreeLoadError, load_tree
from .logging import configure_logging, get_logger
from .naming import WikiNameResolver
from .renderer import RenderError, Renderer
from .utils import create_directory


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doxywiki",
        description="Render a Doxygen documentation tree into Markdown pages or JSON.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log naming decisions and every written file.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        type=Path,
        help="JSON export of the documentation tree.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (overrides output_dir from the config).",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("."),
        help=f"Config file or directory containing {CONFIG_FILENAME}.",
    )
    parser.add_argument(
        "-t",
        "--templates",
        type=Path,
        default=None,
        help="Directory with template overrides.",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Write JSON records instead of rendered pages.",
    )
    parser.add_argument(
        "--wiki-naming",
        action="store_true",
        default=None,
        help="Use human-readable, wiki-safe file names instead of refids.",
    )
    parser.add_argument(
        "--summary-input",
        type=Path,
        default=None,
        help="Summary template containing the {{doxygen}} placeholder.",
    )
    parser.add_argument(
        "--summary-output",
        type=Path,
        default=None,
        help="Where to write the generated summary.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    return parser


def _apply_overrides(config: DoxywikiConfig, args: argparse.Namespace) -> DoxywikiConfig:
    if args.output is not None:
        config.output_dir = args.output
    if args.templates is not None:
        config.templates_dir = args.templates
    if args.wiki_naming:
        config.use_wiki_naming = True
    return config


def run(config: DoxywikiConfig, args: argparse.Namespace) -> None:
    """Execute a full generation run for parsed CLI arguments."""
    logger = get_logger("cli")
    tree = load_tree(args.input)

    create_directory(config.output_dir)
    if config.use_folders:
        for folder in config.folders.values():
            create_directory(config.output_dir / folder)

    resolver: Optional[WikiNameResolver] = None
    if config.use_wiki_naming:
        resolver = WikiNameResolver(tree, use_folders=config.use_folders)
    converter = JsonConverter(config, resolver)
    renderer = Renderer(config)
    generator = Generator(config, tree, converter, renderer, resolver)

    if args.json:
        generator.json(LANGUAGE_FILTER, NO_SKIP)
        generator.manifest()
        logger.info("JSON output written to %s", config.output_dir)
        return

    generator.print(LANGUAGE_FILTER, NO_SKIP)
    for section in DEFAULT_INDEXES:
        generator.print_index(section.category, section.filter, section.skip)
    generator.manifest()

    if args.summary_input is not None and args.summary_output is not None:
        generator.summary(args.summary_input, args.summary_output, DEFAULT_SUMMARY_SECTIONS)
    logger.info("Documentation written to %s", config.output_dir)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for doxywiki."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if (args.summary_input is None) != (args.summary_output is None):
        parser.error("--summary-input and --summary-output must be given together")

    configure_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        config = _apply_overrides(load_config(args.config), args)
        run(config, args)
    except (ConfigError, TreeLoadError, GeneratorError, RenderError, OSError) as exc:
        parser.exit(1, f"doxywiki failed: {exc}\nRun with --verbose for more details.\n")


if __name__ == "__main__":  # pragma: no cover
    main()
