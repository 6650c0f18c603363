import base64
import hashlib
import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


class CredentialCodec:
    """Derives and verifies stored credentials using salted bcrypt"""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds
        self._dummy_credential = None

    @staticmethod
    def _prepare(plaintext: str) -> bytes:
        """Reduce the password to a fixed 44-byte input so bcrypt's 72-byte limit never truncates it"""
        digest = hashlib.sha256(plaintext.encode('utf-8')).digest()
        return base64.b64encode(digest)

    def derive(self, plaintext: str) -> str:
        """Hash password with a fresh salt"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(self._prepare(plaintext), salt)
        return hashed.decode('utf-8')

    def verify(self, plaintext: str, stored: str) -> bool:
        """Verify password against stored credential"""
        try:
            return bcrypt.checkpw(self._prepare(plaintext), stored.encode('utf-8'))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Stored credential could not be parsed: {e}")
            return False

    def needs_rehash(self, stored: str) -> bool:
        """Check whether the stored credential was derived with a different cost"""
        try:
            cost = int(stored.split('$')[2])
        except (IndexError, ValueError, AttributeError):
            return True
        return cost != self.rounds

    def dummy_verify(self, plaintext: str) -> None:
        """Spend one verification so unknown users cost the same as wrong passwords"""
        if self._dummy_credential is None:
            self._dummy_credential = self.derive("credstore-dummy-credential")
        self.verify(plaintext, self._dummy_credential)
