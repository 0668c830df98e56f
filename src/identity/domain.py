"""Identity bounded context: user accounts, referrals and login lockout.

Holds the referral ledger (codes, bonus crediting, per-account caps) and the
advisory login-attempt counter that guards credential checks.
"""

from protean.domain import Domain

from identity.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
