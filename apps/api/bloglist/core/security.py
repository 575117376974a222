"""Password hashing."""

from passlib.context import CryptContext


class PasswordHasher:
    """Thin wrapper over passlib's CryptContext used at user creation and login."""

    def __init__(self, schemes: list[str] | None = None) -> None:
        self._context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        return self._context.verify(password, password_hash)


__all__ = ["PasswordHasher"]
