"""Generate .env files from environment variable reads in Rust sources.

Examples:
  autoenv generate                    # scan current directory
  autoenv generate ./my-project       # scan specific directory
  autoenv generate -o .env.example    # write .env.example instead
  autoenv scan --show-locations       # list variables with file:line
  autoenv config                      # show effective configuration
  autoenv init-config                 # write a sample autoenv.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from autoenv.configs import (
    DEFAULT_CONFIG_NAME,
    AutoEnvConfig,
    dump_config,
    load_config,
    resolve_config,
    sample_config,
)
from autoenv.core.api import build_env, scan_directory, write_env
from autoenv.core.errors import AutoEnvError, ConfigError
from autoenv.core.types import VariableSet
from autoenv.utils.structlog import StructLogger, now_ms

logger = logging.getLogger("autoenv")

NOTHING_FOUND = "No environment variables found in Rust files."


def setup_logger(verbose: bool) -> logging.Logger:
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(sh)
    return logger


def effective_config(args: argparse.Namespace, scan_root: Path) -> AutoEnvConfig:
    """Configuration file (if any) with command line overrides applied."""
    if getattr(args, "config", None) is not None:
        logger.info("Loading config from: %s", args.config)
    cfg = resolve_config(getattr(args, "config", None), scan_root)
    update: dict = {}
    if getattr(args, "output", None):
        update["output"] = args.output
    if getattr(args, "no_merge", False):
        update["merge_existing"] = False
    if getattr(args, "ignore", None):
        update["ignore"] = [*cfg.ignore, *args.ignore]
    if getattr(args, "jobs", None) is not None:
        update["workers"] = args.jobs
    if not update:
        return cfg
    try:
        return AutoEnvConfig.model_validate({**cfg.model_dump(), **update})
    except ValidationError as exc:
        raise ConfigError(f"Invalid command line override ({exc.error_count()} errors: {exc})") from exc


def collect(
    scan_root: Path, cfg: AutoEnvConfig, slog: Optional[StructLogger] = None
) -> VariableSet:
    logger.info("Scanning directory: %s", scan_root)
    scan = scan_directory(scan_root, cfg)
    variables = scan.variables
    if slog is not None:
        by_file: dict[Path, list[str]] = {}
        for name in variables:
            occ = variables.first(name)
            assert occ is not None
            by_file.setdefault(occ.path, []).append(name)
        for path in sorted(by_file):
            slog.log_file(ts=now_ms(), path=path, names=by_file[path])
        slog.log_scan(ts=now_ms(), root=scan_root, files=len(scan.files), variables=len(variables))
    return variables


def cmd_generate(args: argparse.Namespace) -> int:
    scan_root = Path(args.path)
    slog = StructLogger(Path(args.events), uuid.uuid4().hex[:12]) if args.events else None
    try:
        cfg = effective_config(args, scan_root)
        variables = collect(scan_root, cfg, slog)
        if not len(variables):
            print(NOTHING_FOUND)
            return 0
        for name in variables:
            logger.info("  - %s", name)

        rendered = build_env(variables, scan_root / cfg.output, cfg.merge_existing)
        if slog is not None:
            kept = rendered.existing or {}
            slog.log_render(
                ts=now_ms(),
                output=rendered.path,
                merged=cfg.merge_existing,
                keys=rendered.keys,
                preserved=sum(1 for k in kept if k in variables),
                added=sum(1 for k in variables if k not in kept),
            )
        text = write_env(rendered)
        if slog is not None:
            slog.log_write(ts=now_ms(), output=rendered.path, nbytes=len(text.encode("utf-8")))
    except AutoEnvError as exc:
        if slog is not None:
            slog.log_error(ts=now_ms(), path=exc.path, reason=str(exc))
        raise
    print(f"Generated {cfg.output} with {len(variables)} variables")
    logger.info("Output path: %s", rendered.path)
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    scan_root = Path(args.path)
    cfg = effective_config(args, scan_root)
    variables = collect(scan_root, cfg)
    if not len(variables):
        print(NOTHING_FOUND)
        return 0
    print(f"Found {len(variables)} environment variables:")
    for name in variables:
        occ = variables.first(name)
        if args.show_locations and occ is not None:
            print(f"  {name}  ({occ.location()})")
        else:
            print(f"  {name}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    config_path = args.config or Path(DEFAULT_CONFIG_NAME)
    if config_path.exists():
        cfg = load_config(config_path)
        print(f"Configuration from: {config_path}")
        print()
        print(dump_config(cfg), end="")
        return 0
    print(f"Configuration file not found: {config_path}")
    print("Using default configuration:")
    print()
    print(dump_config(AutoEnvConfig()), end="")
    print()
    print("To create a configuration file, run:")
    print("  autoenv init-config")
    return 0


def cmd_init_config(args: argparse.Namespace) -> int:
    config_path = Path(args.output)
    if config_path.exists() and not args.force:
        print(f"Configuration file already exists: {config_path}")
        print("Use --force to overwrite")
        return 0
    try:
        config_path.write_text(sample_config(), encoding="utf-8")
    except OSError as exc:
        raise AutoEnvError("Failed to write configuration file", config_path) from exc
    print(f"Created configuration file: {config_path}")
    print()
    print("Edit the file to customize your settings:")
    print("  - output: Name of the generated file")
    print("  - merge_existing: Whether to preserve existing values")
    print("  - ignore: List of variables to skip")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="autoenv",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = ap.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate .env file by scanning Rust source files")
    gen.add_argument("path", nargs="?", default=".", metavar="DIRECTORY")
    gen.add_argument("-o", "--output", metavar="FILE", help="Output file name (default: .env)")
    gen.add_argument("-c", "--config", type=Path, metavar="CONFIG")
    gen.add_argument("--no-merge", action="store_true", help="Overwrite instead of merging")
    gen.add_argument("--ignore", action="append", default=[], metavar="VARIABLE")
    gen.add_argument("-v", "--verbose", action="store_true")
    gen.add_argument("-j", "--jobs", type=int, metavar="N", help="Scan threads")
    gen.add_argument("--events", metavar="FILE", help="Append JSONL run events to FILE")
    gen.set_defaults(func=cmd_generate)

    scan = sub.add_parser("scan", help="List found environment variables without writing")
    scan.add_argument("path", nargs="?", default=".", metavar="DIRECTORY")
    scan.add_argument("-c", "--config", type=Path, metavar="CONFIG")
    scan.add_argument("--ignore", action="append", default=[], metavar="VARIABLE")
    scan.add_argument("--show-locations", action="store_true")
    scan.add_argument("-j", "--jobs", type=int, metavar="N")
    scan.add_argument("-v", "--verbose", action="store_true")
    scan.set_defaults(func=cmd_scan)

    cfg = sub.add_parser("config", help="Show current configuration")
    cfg.add_argument("-c", "--config", type=Path, metavar="CONFIG")
    cfg.set_defaults(func=cmd_config)

    init = sub.add_parser("init-config", help="Create a sample configuration file")
    init.add_argument("output", nargs="?", default=DEFAULT_CONFIG_NAME, metavar="FILE")
    init.add_argument("--force", action="store_true")
    init.set_defaults(func=cmd_init_config)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(getattr(args, "verbose", False))
    try:
        return args.func(args)
    except AutoEnvError as exc:
        logger.debug("Aborting: %r", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
