# src/main.py — v3
"""CLI entry point: resolve, warm, prune and reset commands.

Usage:
    symresolve [--rule PREFIX=PATH] [--flat-rule PREFIX=PATH] resolve <identifier>...
    symresolve [rules] warm
    symresolve [rules] prune
    symresolve [rules] reset

Cache options not given on the command line come from SYMRESOLVE_* env vars.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from symresolve.config.settings import ConfigurationError, Settings, load_settings
from symresolve.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_NOT_FOUND

    try:
        settings = _load_settings(args)
        _setup_logging(settings, args.verbose)
        resolver = _build_resolver(settings, args)
        return args.func(resolver, args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG
    except ValidationError as exc:
        print(f"Configuration error: {_describe(exc)}", file=sys.stderr)
        return EXIT_CONFIG
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_NOT_FOUND


def _describe(exc: ValidationError) -> str:
    """Summarise validation errors as "field: message" pairs."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "settings"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="symresolve",
        description=f"symresolve v{__version__}: identifier to file resolution",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--rule", dest="rules", action="append", default=[], metavar="PREFIX=PATH",
        help="Register a hierarchical rule (repeatable; empty prefix allowed)",
    )
    parser.add_argument(
        "--flat-rule", dest="flat_rules", action="append", default=[], metavar="PREFIX=PATH",
        help="Register a flat (underscore) rule (repeatable)",
    )
    parser.add_argument(
        "--cache-mode", default=None,
        help="Cache backend: none, memory, file, shared, auto",
    )
    parser.add_argument(
        "--cache-path", type=Path, default=None,
        help="Cache file for the file backend",
    )
    parser.add_argument(
        "--stop-if-not-found", action="store_true", default=None,
        help="Only answer from the cache; never probe the rules",
    )
    parser.add_argument(
        "--no-generate", action="store_true",
        help="Do not run a full scan on a cold start",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_resolve = subparsers.add_parser("resolve", help="Resolve identifiers to paths")
    p_resolve.add_argument("identifiers", nargs="+", help="Identifiers to resolve")
    p_resolve.set_defaults(func=_cmd_resolve)

    p_warm = subparsers.add_parser("warm", help="Load or generate the cached map")
    p_warm.set_defaults(func=_cmd_warm)

    p_prune = subparsers.add_parser("prune", help="Remove cache entries whose file is gone")
    p_prune.set_defaults(func=_cmd_prune)

    p_reset = subparsers.add_parser("reset", help="Clear the cache backend")
    p_reset.set_defaults(func=_cmd_reset)

    return parser


def _parse_rule(spec: str) -> tuple[str, str]:
    """Split PREFIX=PATH on the first '='. A bare PATH means the empty prefix."""
    prefix, sep, path = spec.partition("=")
    if not sep:
        return "", spec
    if not path:
        raise ConfigurationError(f"Rule {spec!r} has no path")
    return prefix, path


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.cache_mode is not None:
        overrides["cache_mode"] = args.cache_mode
    if args.cache_path is not None:
        overrides["cache_path"] = args.cache_path
    if args.stop_if_not_found:
        overrides["stop_if_not_found"] = True
    return load_settings(**overrides)


def _setup_logging(settings: Settings, verbose: bool) -> None:
    from symresolve.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


def _build_resolver(settings: Settings, args: argparse.Namespace):
    from symresolve.generator.scanner import DirectoryScanGenerator
    from symresolve.resolver.resolver import Resolver

    generator = None if args.no_generate else DirectoryScanGenerator(settings.file_extension)
    resolver = Resolver.from_settings(settings, generator=generator)
    for spec in args.flat_rules:
        resolver.add_rule(*_parse_rule(spec), strategy="flat")
    for spec in args.rules:
        resolver.add_rule(*_parse_rule(spec), strategy="hierarchical")
    return resolver


def _cmd_resolve(resolver, args: argparse.Namespace) -> int:
    status = EXIT_OK
    for identifier, path in resolver.resolve_many(args.identifiers).items():
        if path is None:
            print(f"{identifier}\t-", file=sys.stderr)
            status = EXIT_NOT_FOUND
        else:
            print(f"{identifier}\t{path}")
    return status


def _cmd_warm(resolver, args: argparse.Namespace) -> int:
    print(f"{resolver.warm()} entries cached")
    return EXIT_OK


def _cmd_prune(resolver, args: argparse.Namespace) -> int:
    print(f"{resolver.prune()} stale entries removed")
    return EXIT_OK


def _cmd_reset(resolver, args: argparse.Namespace) -> int:
    resolver.reset_cache()
    print("Cache reset")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
