"""Access token issuance/verification and password hashing."""

from datetime import datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from src.domain.exceptions import InvalidTokenException


class TokenService:
    """
    Issues and verifies signed access tokens.

    The signing key is supplied at construction time; nothing here reads
    global configuration.
    """

    USER_ID_CLAIM = "user_id"

    def __init__(self, secret: str, algorithm: str = "HS256", expire_hours: int = 24):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(hours=expire_hours)

    def issue(self, user_id: int) -> str:
        """Create a token identifying user_id, valid for the configured ttl."""
        claims = {
            self.USER_ID_CLAIM: user_id,
            "exp": datetime.utcnow() + self._ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """
        Decode a token and return the account identifier it carries.

        Raises:
            InvalidTokenException: If the token is expired, malformed,
                signed with another key or missing the user_id claim
        """
        if not token:
            raise InvalidTokenException("Missing token")

        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenException("Token expired")
        except JWTError:
            raise InvalidTokenException()

        user_id = claims.get(self.USER_ID_CLAIM)
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidTokenException("user_id not found in token claims")

        return user_id


class PasswordHasher:
    """bcrypt password hashing."""

    def __init__(self, rounds: int | None = None):
        options = {"bcrypt__rounds": rounds} if rounds else {}
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", **options)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            # Malformed stored hash
            return False
