import argparse
import logging
from pathlib import Path
from typing import Optional
import colorlog
import yaml

from token_registry import __version__

REPORT_BASENAME = "registry_validation"
DEFAULT_CONFIG_PATH = Path("config/registry.yaml")


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _resolve_config_path(args: argparse.Namespace, registry_root: Path) -> Optional[Path]:
    """Explicit --config wins; otherwise use config/registry.yaml under the root if present."""
    if getattr(args, "config", None):
        return Path(args.config).resolve()
    candidate = registry_root / DEFAULT_CONFIG_PATH
    return candidate if candidate.exists() else None


def _write_report(target, registry_root: Path, suffix: str, content: str) -> Path:
    if target is True:
        report_path = registry_root / f"{REPORT_BASENAME}.{suffix}"
    else:
        report_dir = Path(target)
        report_dir.mkdir(parents=True, exist_ok=True)
        report_path = report_dir / f"{REPORT_BASENAME}.{suffix}"
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(content)
    return report_path


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate every contract, project and token entry of a registry.

    Returns:
        0 if no error violations were found (warnings allowed)
        1 if any error violation was found, or the registry root, schemas or
          config could not be loaded
    """
    from token_registry.validation import print_report, run_validation
    from token_registry.validation.config import debug_enabled, load_config

    registry_root = Path(getattr(args, "registry_root", None) or ".").resolve()
    if not registry_root.is_dir():
        logging.error("Registry root not found or not a directory: %s", registry_root)
        return 1

    schemas_dir_arg = getattr(args, "schemas_dir", None)
    schema_dir = Path(schemas_dir_arg).resolve() if schemas_dir_arg else None

    try:
        config = load_config(_resolve_config_path(args, registry_root), debug=debug_enabled())
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logging.error("Failed to load config: %s", e)
        return 1

    logging.info("Validating registry at %s", registry_root)
    try:
        report = run_validation(registry_root, schema_dir=schema_dir, config=config)
    except FileNotFoundError as e:
        logging.error("%s", e)
        return 1
    except (ValueError, OSError) as e:
        logging.error("Error validating registry %s: %s", registry_root, e)
        return 1

    strict = bool(getattr(args, "strict", False))
    print_report(report, strict=strict)

    if getattr(args, "report", False):
        report_path = _write_report(args.report, registry_root, "md", report.to_markdown())
        logging.info("Markdown report saved: %s", report_path)

    if getattr(args, "report_json", False):
        report_path = _write_report(args.report_json, registry_root, "json", report.to_json())
        logging.info("JSON report saved: %s", report_path)

    if report.has_errors(strict=strict):
        logging.error(
            "Validation found %d errors and %d warnings.",
            report.get_error_count(),
            report.get_warning_count(),
        )
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="token-registry",
        description=f"Token Registry Tools (v{__version__})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    p.add_argument(
        "--registry-root",
        default=None,
        help="Registry checkout holding contracts/, projects/ and tokens/. Defaults to .",
    )
    p.add_argument(
        "--schemas-dir",
        default=None,
        help="Directory with <kind>.schema.json documents. Defaults to <registry-root>/schemas",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to registry.yaml (defaults to <registry-root>/config/registry.yaml when present)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors",
    )
    p.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Generate detailed Markdown report. Optionally specify custom directory path.",
    )
    p.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Generate machine-readable JSON report. Optionally specify custom directory path.",
    )
    p.set_defaults(func=cmd_validate)
    return p


def main(argv: Optional[list[str]] = None) -> int:
    from token_registry.validation.config import debug_enabled

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose) or debug_enabled(),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
