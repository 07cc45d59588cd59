"""CLI entrypoints for docpress commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .aggregator import BuildStatus
from .config import ConfigError
from .docnode import InputError
from .generators import GeneratorLoadError
from .logging import configure_logging
from .models import InvalidSymbolError, OutputLanguage
from .orchestrator import Orchestrator
from .registry import DuplicateGeneratorError, RegistryBusyError

_CALLER_ERRORS = (
    InvalidSymbolError,
    DuplicateGeneratorError,
    RegistryBusyError,
    ConfigError,
    InputError,
    FileNotFoundError,
    GeneratorLoadError,
)


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )
    log_kwargs: dict[str, object] = {"help": "Also write a timestamped debug log to this file."}
    log_kwargs["default"] = argparse.SUPPRESS if suppress_default else None
    parser.add_argument("--log-file", **log_kwargs)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docpress",
        description="Render API reference fragments from symbol metadata and documentation comments.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Render every symbol of a batch manifest into HTML fragments.",
    )
    _add_logging_options(build_parser, suppress_default=True)
    build_parser.add_argument("input", help="Path to the JSON batch manifest.")
    build_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Directory for fragments and summary.json (defaults to 'site' next to the manifest).",
    )
    build_parser.add_argument(
        "--language",
        default=None,
        help="Output language for code declarations (csharp, vbnet, fsharp, jscript).",
    )
    build_parser.add_argument("--locale", default=None, help="Locale for headings, e.g. de-DE.")
    build_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of symbols generated in parallel.",
    )
    build_parser.add_argument(
        "--max-failures",
        type=_positive_int,
        default=None,
        help="Stop submitting symbols after this many failures.",
    )
    build_parser.add_argument(
        "--config",
        default=None,
        help="Path to .docpress.yml (defaults to the manifest directory).",
    )

    generators_parser = subparsers.add_parser(
        "generators",
        help="List discovered generators and the languages they support.",
    )
    _add_logging_options(generators_parser, suppress_default=True)
    generators_parser.add_argument(
        "--language",
        default=None,
        help="Only list generators supporting this output language.",
    )
    generators_parser.add_argument("--config", default=None, help="Path to .docpress.yml.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP rendering service.")
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docpress commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(verbose=bool(args.verbose), log_file=Path(log_file) if log_file else None)

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            outcome = orchestrator.run_build(
                args.input,
                output_dir=args.output,
                language=args.language,
                locale=args.locale,
                workers=args.workers,
                max_failures=args.max_failures,
                config_path=args.config,
            )
        except _CALLER_ERRORS as exc:
            parser.exit(1, f"docpress build failed: {exc}\n")
        except ValueError as exc:
            parser.exit(1, f"docpress build failed: {exc}\n")
        summary = outcome.report.summary
        counts = summary.counts
        print(
            f"{summary.status.value}: {counts['markup']} documented, "
            f"{counts['not_applicable']} not applicable, "
            f"{counts['no_capable_generator']} without generator, "
            f"{counts['failure']} failed, {counts['skipped']} skipped"
        )
        print(f"Output written to {_relativize(outcome.output_dir)}")
        if summary.status is BuildStatus.NOOP:
            print(
                "warning: no markup was produced; check that a generator supports this language",
                file=sys.stderr,
            )
        if summary.status is BuildStatus.FAILED:
            parser.exit(1, "docpress build finished with failures. Run with --verbose for more details.\n")
    elif args.command == "generators":
        try:
            language = OutputLanguage.parse(args.language) if args.language else None
            generators = orchestrator.list_generators(Path(args.config) if args.config else None)
        except (ConfigError, GeneratorLoadError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        for generator in generators:
            if language is not None and not generator.supports_language(language):
                continue
            languages = ", ".join(sorted(item.value for item in generator.languages))
            print(f"{generator.name}\t{languages}")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
