"""
Orchestrates the main workflow for Clairvz.

Fetches the mirror listing, filters templates, registers each supported
template with Clair and looks up its vulnerabilities.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional

import requests

from core.config import ScanConfig
from core.exceptions import ReadError, ScannerError, TransportError
from core.listing import fetch_listing
from core.models import OutcomeStatus, TemplateOutcome
from core.template_filter import TemplateFilter
from integrations.clair_api import ClairClient

logger = logging.getLogger(__name__)

# Errors recovered per template; anything else propagates
RECOVERABLE_ERRORS = (ScannerError, TransportError, ReadError)


class TemplateScanOrchestrator:
    """
    Drives templates from the mirror listing through Clair.

    Each template ends in one of the OutcomeStatus states. A failure for
    one template never stops the others; only listing failures are fatal.
    """

    def __init__(
        self,
        config: ScanConfig,
        client: Optional[ClairClient] = None,
        template_filter: Optional[TemplateFilter] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Validated run configuration
            client: Clair client (built from config if omitted)
            template_filter: OS family filter (built from config if omitted)
            session: HTTP session shared by the listing fetch and the client
        """
        self.config = config
        self.session = session or requests.Session()
        self.client = client or ClairClient(
            config.endpoint, session=self.session, timeout=config.request_timeout
        )
        self.template_filter = template_filter or TemplateFilter(config.families)

    def run(self) -> list[TemplateOutcome]:
        """
        Execute the whole workflow.

        Returns:
            One outcome per listing entry, in listing order

        Raises:
            TransportError, ReadError, StatusError, ListingEmptyError:
                If the listing cannot be retrieved
        """
        templates = fetch_listing(
            self.config.mirror_url,
            session=self.session,
            timeout=self.config.request_timeout,
        )
        return self.process_templates(templates)

    def process_templates(self, templates: list[str]) -> list[TemplateOutcome]:
        """
        Process templates and collect their outcomes in input order.

        Unsupported templates are resolved immediately. Supported ones go
        through Clair either one by one or on a bounded worker pool when
        max_workers is above 1.
        """
        outcomes: list[Optional[TemplateOutcome]] = [None] * len(templates)
        pending: list[tuple[int, str]] = []

        for index, template in enumerate(templates):
            if self.template_filter.is_supported(template):
                pending.append((index, template))
            else:
                outcomes[index] = self._skip(template)

        logger.info(
            f"{len(pending)} of {len(templates)} templates belong to supported OS families"
        )

        if self.config.max_workers <= 1 or len(pending) <= 1:
            for index, template in pending:
                outcomes[index] = self.process_template(template)
        else:
            self._process_parallel(pending, outcomes)

        return outcomes

    def process_template(self, template: str) -> TemplateOutcome:
        """
        Register one template and fetch its vulnerabilities.

        Args:
            template: Template name from the listing

        Returns:
            Outcome describing the terminal state reached
        """
        if not self.template_filter.is_supported(template):
            return self._skip(template)

        severity = self.config.endpoint.minimum_severity
        logger.info(f"Try to add {template}")
        try:
            self.client.register_image(self.config.mirror_url, template)
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"Cannot add template {template}: {e}")
            return TemplateOutcome(
                template=template,
                status=OutcomeStatus.REGISTRATION_FAILED,
                error_message=_error_detail(e),
                minimum_severity=severity,
            )

        logger.info(f"{template} added successfully")

        try:
            records = self.client.fetch_vulnerabilities(template)
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"Cannot get vulnerabilities for {template}: {e}")
            return TemplateOutcome(
                template=template,
                status=OutcomeStatus.LOOKUP_FAILED,
                error_message=_error_detail(e),
                minimum_severity=severity,
            )

        logger.info(f"Detect {len(records)} vulnerabilities for {template} (minimum priority: {severity})")
        return TemplateOutcome(
            template=template,
            status=OutcomeStatus.REPORTED,
            vulnerabilities=tuple(records),
            minimum_severity=severity,
        )

    def _process_parallel(
        self,
        pending: list[tuple[int, str]],
        outcomes: list[Optional[TemplateOutcome]],
    ) -> None:
        """Process supported templates on a thread pool, filling outcomes by index."""
        workers = min(self.config.max_workers, len(pending))
        logger.info(f"Processing {len(pending)} templates with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index = {
                executor.submit(self.process_template, template): index
                for index, template in pending
            }
            for done, future in enumerate(as_completed(future_to_index), 1):
                outcomes[future_to_index[future]] = future.result()
                logger.debug(f"Progress: {done}/{len(pending)} templates completed")

    def _skip(self, template: str) -> TemplateOutcome:
        logger.info(f'"{template}" not supported OS - continue')
        return TemplateOutcome(template=template, status=OutcomeStatus.SKIPPED)


def _error_detail(error: Exception) -> str:
    """Return the most useful text for an outcome's error message."""
    detail = getattr(error, "detail", None)
    if detail is not None:
        return detail
    return str(error)
