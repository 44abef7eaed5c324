import bcrypt

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        """Hash a plain password with a fresh salt"""
        return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, plain: str, hashed: str) -> bool:
        """Check plain password against a bcrypt hash. Raises ValueError on a malformed hash."""
        secret = plain.encode()
        if len(secret) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(secret, hashed.encode())
