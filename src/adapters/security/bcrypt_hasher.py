"""
bcrypt password hasher adapter - Implements PasswordHasher protocol.

bcrypt's own comparison is constant-time; timing guarantees on
password checks live here, not in the domain.
"""

import bcrypt


class BcryptPasswordHasher:
    """
    Implements PasswordHasher protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, rounds: int = 10) -> None:
        """
        Args:
            rounds: bcrypt work factor (cost)
        """
        self._rounds = rounds

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, plaintext: str, digest: str) -> bool:
        """Return True if plaintext matches the stored bcrypt digest."""
        try:
            return bcrypt.checkpw(plaintext.encode(), digest.encode())
        except ValueError:
            # Malformed stored hash
            return False
