"""
JWT token issuer adapter - Implements TokenIssuer protocol.

Issues HS256-signed bearer tokens via PyJWT. Tokens carry the account
id as ``sub`` plus ``iat``/``exp`` claims; there is no refresh or
rotation.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

DEFAULT_TOKEN_TTL = timedelta(days=7)


class JwtTokenIssuer:
    """
    Implements TokenIssuer protocol via PyJWT.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def sign(self, subject_id: str) -> str:
        """
        Mint a token bound to an account id.

        Args:
            subject_id: Durable account identifier

        Returns:
            Encoded JWT valid for the configured TTL (7 days by default)
        """
        issued_at = self._clock()
        payload = {
            "sub": subject_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """
        Validate signature and expiry, returning the claims.

        Raises:
            jwt.InvalidTokenError: If the token is malformed, forged, or expired
        """
        return jwt.decode(token, self._secret, algorithms=[self._algorithm])
