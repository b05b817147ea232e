from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """Password hashing capability consumed by login and registration"""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison; never raises on malformed hashes"""
        pass

    @abstractmethod
    def dummy_hash(self) -> str:
        """
        A valid hash of a throwaway password, computed once per hasher.

        Verifying against it gives unknown-email logins the same cost as a
        real password check.
        """
        pass
