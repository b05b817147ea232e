import logging
import secrets

import bcrypt

from bizauth.app.services.password_hasher import IPasswordHasher

logger = logging.getLogger(__name__)


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt with a configurable cost factor (12 in production)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self.rounds)).decode(
            "utf-8"
        )

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def dummy_hash(self) -> str:
        return self._dummy_hash
