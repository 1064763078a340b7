"""
Password hashing and verification.

Uses bcrypt with automatic salting and a fixed work factor.
"""

import bcrypt

# bcrypt only looks at the first 72 bytes; newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordHasher:
    """bcrypt hasher (cost factor 12 unless configured otherwise)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # Compared against when the account does not exist, so a miss
        # costs the same as a wrong password
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def burn(self, password: str) -> None:
        """Spend one hash comparison's worth of time without a real hash"""
        bcrypt.checkpw(_encode(password), self._dummy_hash)
