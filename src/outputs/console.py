"""
Console report for a Clairvz run.

Human-readable only; the wording is not meant to be parsed.
"""

import logging
from collections import Counter
from typing import Callable, Optional

from core.models import OutcomeStatus, TemplateOutcome
from utils.logging_helpers import log_info_header

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """Logs one entry per template and a closing summary."""

    def __init__(
        self,
        lookup_url: Optional[Callable[[str], str]] = None,
        logger: logging.Logger = logger,
    ):
        """
        Args:
            lookup_url: Builds the Clair lookup URL for a template, used for
                the manual curl hint on registered templates
            logger: Logger the report is written to
        """
        self.lookup_url = lookup_url
        self.logger = logger

    def report(self, outcomes: list[TemplateOutcome]) -> None:
        """Write the report for all outcomes."""
        log_info_header("Template report", logger=self.logger)
        for outcome in outcomes:
            self.report_outcome(outcome)
        self.report_summary(outcomes)

    def report_outcome(self, outcome: TemplateOutcome) -> None:
        """Write the entry for a single template."""
        name = outcome.template

        if outcome.status == OutcomeStatus.SKIPPED:
            self.logger.info(f"- {name}: skipped, unsupported OS")
            return

        if outcome.status == OutcomeStatus.REGISTRATION_FAILED:
            self.logger.warning(f"✗ {name}: registration failed: {outcome.error_message}")
            return

        if outcome.registered and self.lookup_url:
            self.logger.info(f"  You can check {name} via:")
            self.logger.info(f"  curl -s '{self.lookup_url(name)}' | python -m json.tool")

        if outcome.status == OutcomeStatus.LOOKUP_FAILED:
            self.logger.warning(
                f"✗ {name}: registered, vulnerability data unavailable: {outcome.error_message}"
            )
            return

        count = outcome.vulnerability_count
        self.logger.info(
            f"✓ {name}: {count} vulnerabilities (minimum priority: {outcome.minimum_severity})"
        )
        breakdown = {k: v for k, v in outcome.severity_breakdown().items() if v}
        if breakdown:
            self.logger.info("    " + ", ".join(f"{k}: {v}" for k, v in breakdown.items()))
        for record in outcome.vulnerabilities:
            self.logger.debug(f"    {record.id} [{record.severity}] {record.link}")

    def report_summary(self, outcomes: list[TemplateOutcome]) -> None:
        """Write totals per terminal state."""
        counts = Counter(o.status for o in outcomes)
        total_vulns = sum(len(o.vulnerabilities) for o in outcomes)
        self.logger.info("=" * 60)
        self.logger.info(
            f"Templates: {len(outcomes)} total, "
            f"{counts[OutcomeStatus.REPORTED]} reported, "
            f"{counts[OutcomeStatus.LOOKUP_FAILED]} lookup failed, "
            f"{counts[OutcomeStatus.REGISTRATION_FAILED]} registration failed, "
            f"{counts[OutcomeStatus.SKIPPED]} skipped"
        )
        self.logger.info(f"Vulnerabilities reported: {total_vulns}")
