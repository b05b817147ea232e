import hashlib


class TokenHasher:
    """
    SHA-256 digest of raw tokens.

    Tokens are high-entropy signed strings, so an unsalted deterministic
    digest is a safe storage and lookup key. Raw tokens are never persisted.
    """

    @staticmethod
    def digest(raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()
