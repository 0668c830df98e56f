"""Account registration: command and handler.

Issues each new account a referral code. Codes are random, so the handler
enforces uniqueness itself by regenerating on collision with a stored code.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.account.account import UserAccount
from identity.domain import identity
from identity.referral.codes import generate_referral_code
from identity.shared.email import normalize_email
from identity.utils.logging import get_logger

logger = get_logger(__name__)

MAX_CODE_ATTEMPTS = 5


@identity.command(part_of="UserAccount")
class RegisterAccount:
    """Create a user account and issue it a referral code."""

    email: String(required=True, max_length=254)
    display_name: String(max_length=100)


def _find_by(repo, **criteria):
    return repo._dao.query.filter(**criteria).all().items


def issue_unique_referral_code(repo, attempts=MAX_CODE_ATTEMPTS):
    """Generate a referral code not held by any stored account."""
    for _ in range(attempts):
        code = generate_referral_code()
        if not _find_by(repo, referral_code=code):
            return code
        logger.warning("Referral code collision, regenerating", code=code)

    raise ValidationError({"referral_code": [f"Could not issue a unique referral code after {attempts} attempts"]})


@identity.command_handler(part_of=UserAccount)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(UserAccount)
        email = normalize_email(command.email)

        if _find_by(repo, email=email):
            raise ValidationError({"email": [f"An account already exists for {email}"]})

        account = UserAccount.register(
            email=email,
            display_name=command.display_name,
            referral_code=issue_unique_referral_code(repo),
        )
        repo.add(account)

        logger.info("Account registered", account_id=str(account.id), referral_code=account.referral_code)
        return str(account.id)
