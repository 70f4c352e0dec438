import logging

from .models import User

logger = logging.getLogger(__name__)


class UserService:
    """Account lookups needed while placing orders."""

    @staticmethod
    def email_is_registered(email: str) -> bool:
        """
        Returns True when an account already exists for the email.
        Matching is case-insensitive, the same way login treats emails.
        """
        if not email:
            return False
        return User.objects.filter(email__iexact=email.strip()).exists()

    @staticmethod
    def get_billing_email(user: User) -> str:
        """Email used as the billing contact for an authenticated caller."""
        if not user.email:
            raise ValueError(f"User {user.pk} has no email address on file.")
        return user.email
