"""Optimistic-concurrency retry for command processing.

Every aggregate is saved with a version check. When two requests race on the
same document, the slower commit fails with ``ExpectedVersionError``. Retrying
the whole command re-reads fresh state and re-applies the business rules, so
an idempotency guard such as an already-credited referral still holds.
"""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

DEFAULT_ATTEMPTS = 3


def process_with_retry(command, attempts=DEFAULT_ATTEMPTS, domain=None):
    """Process ``command`` synchronously, retrying on version conflicts."""
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    domain = domain or current_domain
    for attempt in range(1, attempts + 1):
        try:
            return domain.process(command, asynchronous=False)
        except ExpectedVersionError as exc:
            if attempt == attempts:
                logger.error(
                    "Command failed after concurrent modification",
                    command=command.__class__.__name__,
                    attempts=attempts,
                )
                raise
            logger.warning(
                "Concurrent modification, retrying command",
                command=command.__class__.__name__,
                attempt=attempt,
                error=str(exc),
            )
