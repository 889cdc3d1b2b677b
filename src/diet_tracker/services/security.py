"""Password hashing and bearer token helpers."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from diet_tracker.errors import AuthenticationError

TOKEN_ALGORITHM = "HS256"


@dataclass
class PasswordHasher:
    """Hashes and verifies passwords with passlib."""

    context: CryptContext = field(
        default_factory=lambda: CryptContext(
            schemes=["pbkdf2_sha256"], deprecated="auto"
        )
    )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return self.context.verify(password, hashed)


@dataclass
class TokenService:
    """Issues and decodes signed bearer tokens carrying the user id."""

    secret: str
    expire_days: int = 30

    def issue(self, user_id: UUID, now: datetime | None = None) -> str:
        """Return a token for the user, valid for the configured days."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(days=self.expire_days)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=TOKEN_ALGORITHM)

    def decode(self, token: str) -> UUID:
        """Return the user id carried by a valid token.

        Raises AuthenticationError for expired, tampered or malformed tokens.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[TOKEN_ALGORITHM])
        except JWTError as exc:
            raise AuthenticationError("Invalid or expired token") from exc
        subject = payload.get("sub")
        try:
            return UUID(str(subject))
        except ValueError as exc:
            raise AuthenticationError("Invalid or expired token") from exc
