"""
Command-line interface for Clairvz.

Registers precreated templates from an OpenVZ mirror with Clair and reports
the vulnerabilities found in each one. Optional file outputs:
- JSON: every template outcome with full vulnerability records
- XLSX: summary and vulnerability sheets
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from constants import (
    API_REQUEST_TIMEOUT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_MINIMUM_SEVERITY,
    DEFAULT_MIRROR_URL,
    DEFAULT_SCANNER_HOST,
    DEFAULT_SCANNER_PORT,
    OUTPUT_BASENAME,
    OUTPUT_CONFIGS,
    SUPPORTED_OS_FAMILIES,
)
from core.config import ScanConfig
from core.exceptions import (
    ClairvzException,
    ListingEmptyError,
    OutputException,
    ReadError,
    StatusError,
    TransportError,
    UnsupportedFeatureError,
    ValidationException,
)
from core.models import OutcomeStatus, ScannerEndpoint, TemplateOutcome
from core.orchestrator import TemplateScanOrchestrator
from outputs.config import ReportConfig
from outputs.console import ConsoleReporter
from outputs.json_generator import JSONGenerator
from outputs.xlsx_generator import XLSXGenerator
from utils.logging_helpers import log_error_section, log_warning_section

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LISTING_FAILED = 1
EXIT_BAD_CONFIG = 2
EXIT_OUTPUT_FAILED = 3

GENERATORS = {
    "json": JSONGenerator,
    "xlsx": XLSXGenerator,
}


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Clairvz - register OS container templates with Clair and report vulnerabilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source_group = parser.add_argument_group("template source")
    clair_group = parser.add_argument_group("clair options")
    output_group = parser.add_argument_group("output options")

    source_group.add_argument("-m", "--mirror", default=DEFAULT_MIRROR_URL, help="Mirror URL with precreated templates.")
    source_group.add_argument(
        "--families",
        default=",".join(SUPPORTED_OS_FAMILIES),
        help="Supported OS families (comma-separated, matched case-insensitively).",
    )

    clair_group.add_argument("-a", "--address", default=DEFAULT_SCANNER_HOST, help="Clair API address.")
    clair_group.add_argument("-p", "--port", type=int, default=DEFAULT_SCANNER_PORT, help="Clair API port.")
    clair_group.add_argument(
        "-P", "--priority", default=DEFAULT_MINIMUM_SEVERITY,
        help="Minimum priority of the returned vulnerabilities.",
    )
    clair_group.add_argument("--tls", action="store_true", help="Use HTTPS for Clair (not supported yet).")
    clair_group.add_argument("--timeout", type=float, default=API_REQUEST_TIMEOUT, help="Per-request timeout in seconds.")
    clair_group.add_argument("--max-workers", type=int, default=DEFAULT_MAX_WORKERS, help="Templates processed in parallel.")

    output_group.add_argument("-o", "--output", type=str, default=None, help="File outputs (comma-separated: json,xlsx).")
    output_group.add_argument("--output-dir", type=Path, default=Path("."), help="Output directory.")

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")

    return parser.parse_args(args)


def parse_output_types(output_arg: Optional[str]) -> set[str]:
    """Parse comma-delimited output types argument."""
    if output_arg is None:
        return set()
    valid_types = set(OUTPUT_CONFIGS.keys())
    requested_types = {t.strip().lower() for t in output_arg.split(",") if t.strip()}
    invalid_types = requested_types - valid_types
    if invalid_types:
        raise ValidationException(
            f"Invalid output type(s): {', '.join(sorted(invalid_types))}. "
            f"Valid types: {', '.join(sorted(valid_types))}",
            "output",
        )
    return requested_types


def build_config(args: argparse.Namespace) -> ScanConfig:
    """
    Build and validate the run configuration from parsed arguments.

    Raises:
        ValidationException: If a value is invalid
        UnsupportedFeatureError: If --tls is given
    """
    config = ScanConfig(
        mirror_url=args.mirror,
        endpoint=ScannerEndpoint(
            host=args.address,
            port=args.port,
            use_tls=args.tls,
            minimum_severity=args.priority,
        ),
        families=tuple(args.families.split(",")),
        max_workers=args.max_workers,
        request_timeout=args.timeout,
    )
    config.validate()
    return config


def write_outputs(
    outcomes: list[TemplateOutcome],
    config: ScanConfig,
    output_types: set[str],
    output_dir: Path,
) -> dict[str, Path]:
    """Write the requested file outputs and return their paths by type."""
    if not output_types:
        return {}

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputException("output", f"Cannot create {output_dir}: {e}") from e
    report_config = ReportConfig(
        mirror_url=config.mirror_url,
        scanner=str(config.endpoint),
        minimum_severity=config.endpoint.minimum_severity,
    )

    written = {}
    for output_type in sorted(output_types):
        path = output_dir / f"{OUTPUT_BASENAME}{OUTPUT_CONFIGS[output_type]['file_suffix']}"
        GENERATORS[output_type]().generate(outcomes, path, report_config)
        written[output_type] = path
    return written


def run(args: argparse.Namespace) -> int:
    """Run Clairvz with parsed arguments and return the exit code."""
    try:
        config = build_config(args)
        output_types = parse_output_types(args.output)
    except (ValidationException, UnsupportedFeatureError) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_BAD_CONFIG

    logger.info("We use:")
    logger.info(f"Clair - {config.endpoint}")
    logger.info(f"OpenVZ mirror - {config.mirror_url}")

    orchestrator = TemplateScanOrchestrator(config)
    try:
        outcomes = orchestrator.run()
    except (TransportError, ReadError, StatusError, ListingEmptyError) as e:
        log_error_section(
            "Cannot get template listing - exit",
            [str(e), f"Check that {config.mirror_url} serves a .listing index."],
            logger=logger,
        )
        return EXIT_LISTING_FAILED

    if all(o.status == OutcomeStatus.SKIPPED for o in outcomes):
        log_warning_section(
            "No template belongs to a supported OS family.",
            [f"Supported families: {', '.join(config.families)}", "Use --families to change them."],
            logger=logger,
        )

    ConsoleReporter(lookup_url=orchestrator.client.vulnerabilities_url).report(outcomes)

    try:
        written = write_outputs(outcomes, config, output_types, args.output_dir)
    except (OutputException, ValidationException) as e:
        logger.error(f"Report generation failed: {e}")
        return EXIT_OUTPUT_FAILED

    for output_type, path in written.items():
        logger.info(f"  - {OUTPUT_CONFIGS[output_type]['description']}: {path}")
    logger.info("Done!")
    return EXIT_OK


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        logger.warning("\nInterrupted!")
        sys.exit(130)
    except ClairvzException as e:
        logger.error(f"Clairvz failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
