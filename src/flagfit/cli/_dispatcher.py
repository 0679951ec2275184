"""
Entry point for the ``flagfit`` command.

Commands are discovered, not registered: every public module in
``flagfit/cli/<domain>/`` becomes ``flagfit <domain> <command>``. A command
module provides ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import pkgutil
import sys
from functools import lru_cache
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, NamedTuple, Optional

from flagfit.core.exceptions import FlagfitError

logger = logging.getLogger(__name__)

CLI_PACKAGE = "flagfit.cli"


class Command(NamedTuple):
    module: ModuleType
    summary: str
    register_args: Optional[Callable[[argparse.ArgumentParser], None]]
    main: Optional[Callable[[argparse.Namespace], int]]


def _public_modules(path: Path) -> list[pkgutil.ModuleInfo]:
    return [m for m in pkgutil.iter_modules([str(path)]) if not m.name.startswith("_")]


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Map each domain name to its package directory.

    A domain is a sub-package of ``flagfit.cli`` holding at least one command.
    """
    cli_dir = Path(__file__).parent
    return {
        info.name: cli_dir / info.name
        for info in _public_modules(cli_dir)
        if info.ispkg and any(not m.ispkg for m in _public_modules(cli_dir / info.name))
    }


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, Command]:
    """Import every command module of ``domain``.

    Modules that fail to import are reported on stderr and skipped so one
    broken command does not take the whole CLI down.
    """
    commands: dict[str, Command] = {}
    for info in sorted(_public_modules(Path(__file__).parent / domain), key=lambda m: m.name):
        if info.ispkg:
            continue
        module_name = f"{CLI_PACKAGE}.{domain}.{info.name}"
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            print(f"Warning: Could not import {module_name}: {e}", file=sys.stderr)
            continue
        commands[info.name] = Command(
            module=module,
            summary=getattr(module, "SUMMARY", f"{domain} {info.name}"),
            register_args=getattr(module, "register_args", None),
            main=getattr(module, "main", None),
        )
    return commands


def _get_version() -> str:
    from flagfit import __version__

    return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the two-level ``flagfit <domain> <command>`` parser."""
    parser = argparse.ArgumentParser(
        prog="flagfit",
        description="Flagfit - feature-flag lifecycle linting",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")

    domains = parser.add_subparsers(dest="domain", title="domains", metavar="<domain>")
    for domain_name in sorted(discover_domains()):
        commands = discover_commands(domain_name)
        if not commands:
            continue

        domain_parser = domains.add_parser(domain_name, help=f"{domain_name.title()} commands")
        domain_parser.set_defaults(_domain_parser=domain_parser)
        subcommands = domain_parser.add_subparsers(dest="command", title="commands", metavar="<command>")

        for cmd_name, cmd in commands.items():
            # snake_case module names are exposed as kebab-case commands
            public_name = cmd_name.replace("_", "-")
            cmd_parser = subcommands.add_parser(
                public_name,
                aliases=[cmd_name] if public_name != cmd_name else [],
                help=cmd.summary,
            )
            if cmd.register_args:
                cmd.register_args(cmd_parser)
            if cmd.main:
                cmd_parser.set_defaults(_func=cmd.main)

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    """Install file logging from config; keep stderr clean in JSON mode."""
    from flagfit.cli._utils import get_repo_root
    from flagfit.core.audit import configure_stdlib_logging, suppress_lastresort_in_json_mode
    from flagfit.core.config.domains import LoggingConfig

    if getattr(args, "json", False):
        suppress_lastresort_in_json_mode()

    try:
        log_cfg = LoggingConfig(repo_root=get_repo_root(args))
        log_path = log_cfg.resolve_stdlib_log_path()
    except FlagfitError as exc:
        # Config problems are reported by the command itself.
        logger.debug("Logging config unavailable: %s", exc)
        return

    if log_path is not None:
        configure_stdlib_logging(log_path=log_path, level=log_cfg.stdlib_level)


def main(argv: list[str] | None = None) -> int:
    """Run ``flagfit`` and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else list(argv))

    func: Any = getattr(args, "_func", None)
    if func is None:
        # No domain or no command: show the closest help
        getattr(args, "_domain_parser", parser).print_help()
        return 0

    _configure_logging(args)
    logger.debug("Running flagfit %s %s", args.domain, args.command)
    return int(func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
