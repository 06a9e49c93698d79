# utils/auth.py
import logging
from typing import Any

from passlib.context import CryptContext

from utils.coerce import canonical_text

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


class HashedPasswordPolicy:
    """Salted bcrypt comparison. Used for customers, optionally for admins."""

    name = "hashed"

    def hash(self, plaintext: Any) -> str:
        return pwd_context.hash(canonical_text(plaintext))

    def verify(self, plaintext: Any, stored: Any) -> bool:
        if not stored or not isinstance(stored, str):
            return False
        try:
            return pwd_context.verify(canonical_text(plaintext), stored)
        except (ValueError, TypeError):
            # stored value is not a hash passlib recognises
            logger.warning("Stored password is not a valid bcrypt hash")
            return False


class PlainPasswordPolicy:
    """Legacy admin check: String(stored) == String(input).

    Insecure, kept only because existing admin records hold plaintext or
    numeric passwords.
    """

    name = "plain"

    def hash(self, plaintext: Any) -> str:
        return canonical_text(plaintext)

    def verify(self, plaintext: Any, stored: Any) -> bool:
        if stored is None:
            return False
        return canonical_text(stored) == canonical_text(plaintext)


PASSWORD_POLICIES = {
    HashedPasswordPolicy.name: HashedPasswordPolicy,
    PlainPasswordPolicy.name: PlainPasswordPolicy,
}

user_password_policy = HashedPasswordPolicy()


def get_password_policy(name: str):
    try:
        return PASSWORD_POLICIES[name]()
    except KeyError:
        raise ValueError(f"Unknown password policy: {name!r} (use 'plain' or 'hashed')")
