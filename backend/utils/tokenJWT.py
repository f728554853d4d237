# utils/tokenJWT.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header, Request
from jose import jwt, JWTError

from utils.errors import Forbidden, InvalidToken, Unauthorized

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_USER = "user"


# Who the bearer of a verified token is
@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str
    role: str


class TokenService:
    """Issues and verifies signed, time-bounded access tokens.

    The secret is handed in at construction; nothing is read from the
    environment here. Verification is purely signature + expiry, there is no
    revocation list.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    # Generate a new JWT access token
    def issue(self, identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {
            "sub": identity.email,
            "user_id": identity.user_id,
            "role": identity.role,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken() from e

        email = payload.get("sub")
        user_id = payload.get("user_id")
        role = payload.get("role")
        # Ensure every identity claim is present in the token payload
        if not isinstance(email, str) or not isinstance(user_id, int) or not isinstance(role, str):
            raise InvalidToken()
        return Identity(user_id=user_id, email=email, role=role)


class AccessGate:
    """Turns an Authorization header into an identity and checks roles.

    Roles are compared literally; ``admin`` does not satisfy a ``user`` gate.
    """

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    def authenticate(self, authorization: Optional[str]) -> Identity:
        if not authorization:
            raise Unauthorized("No token provided")

        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme != "Bearer" or not token:
            raise Unauthorized("Authorization header must be 'Bearer <token>'")

        try:
            return self.tokens.verify(token)
        except InvalidToken:
            logger.warning("Rejected bearer token")
            raise

    def authorize(self, identity: Identity, required_role: str) -> Identity:
        if identity.role != required_role:
            logger.warning("User %s with role %r denied, %r required", identity.user_id, identity.role, required_role)
            raise Forbidden()
        return identity


def get_access_gate(request: Request) -> AccessGate:
    return request.app.state.access_gate


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# Resolve the identity behind the Authorization header
def get_current_identity(
    authorization: Optional[str] = Header(None),
    gate: AccessGate = Depends(get_access_gate),
) -> Identity:
    return gate.authenticate(authorization)


# Dependency factory for Role-Based Access Control
def role_required(role: str):
    def _checker(
        identity: Identity = Depends(get_current_identity),
        gate: AccessGate = Depends(get_access_gate),
    ) -> Identity:
        return gate.authorize(identity, role)
    return _checker
