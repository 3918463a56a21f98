"""CLI entrypoint for writeme."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .pipeline import Pipeline
from .prompting import FirstChoiceChooser
from .registry import RegistryError
from .renderer import render_readme, report_as_dict


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="writeme",
        description="Infer project metadata from config files and git history and write a README.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report errors.",
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; conflicting values resolve to the first candidate.",
    )
    parser.add_argument(
        "--format",
        choices=("markdown", "json"),
        default="markdown",
        help="Output a README (markdown) or the raw merged metadata (json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the result to this file instead of stdout.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for writeme."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    root = Path(args.path).expanduser()
    try:
        config = load_config(root)
        if args.no_input:
            config.prompt.interactive = False
        pipeline = Pipeline(config, chooser=FirstChoiceChooser() if args.no_input else None)
        report = pipeline.run(str(root))
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except RegistryError as exc:
        parser.exit(1, f"writeme: pattern registry is broken: {exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"writeme: invalid configuration: {exc}\n")

    if args.format == "json":
        output = json.dumps(report_as_dict(report), indent=2) + "\n"
    else:
        output = render_readme(report)

    if args.output is None:
        sys.stdout.write(output)
        return
    args.output.write_text(output, encoding="utf-8")
    print(f"Output written to {_relativize(args.output)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
