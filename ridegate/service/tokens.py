"""
Tokens
------

Issues and verifies the two signed token kinds.

- An **access** token proves identity for about an hour. It carries the user id as
  its subject, ``type=access`` and the username for display.
- A **refresh** token is exchanged for a new pair. Only the most recently issued one
  per user is stored, so rotating a refresh token revokes the one before it.

Every token carries a random ``jti`` so two tokens issued in the same second
for the same user never compare equal.
"""
import hmac
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Dict, Any
from uuid import uuid4

from jose import jwt, ExpiredSignatureError, JWTError
from tortoise.transactions import in_transaction

from ridegate import logger
from ridegate.models import User
from ridegate.service.access.credentials import get_credential, store_credential, delete_credential
from ridegate.service.access.users import get_user
from ridegate.service.exceptions import TokenExpiredError, TokenInvalidError

ACCESS = "access"
REFRESH = "refresh"


class TokenPair(NamedTuple):
    access: str
    refresh: str


class TokenService:

    def __init__(
        self, secret: str, issuer: str,
        access_lifetime: timedelta = timedelta(minutes=60),
        refresh_lifetime: timedelta = timedelta(days=30),
        algorithm: str = "HS256"
    ):
        self._secret = secret
        self.issuer = issuer
        self.access_lifetime = access_lifetime
        self.refresh_lifetime = refresh_lifetime
        self.algorithm = algorithm

    def _issue(self, user_id: int, token_type: str, lifetime: timedelta, now: datetime = None, **claims) -> str:
        if now is None:
            now = datetime.now(timezone.utc)
        claims.update({
            "iss": self.issuer,
            "sub": str(user_id),
            "type": token_type,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "jti": uuid4().hex,
        })
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def issue_access(self, user: User, now: datetime = None) -> str:
        return self._issue(user.id, ACCESS, self.access_lifetime, now, username=user.username)

    def issue_refresh(self, user: User, now: datetime = None) -> str:
        return self._issue(user.id, REFRESH, self.refresh_lifetime, now)

    def validate(self, token) -> Dict[str, Any]:
        """
        Verifies the signature, issuer and expiry of a token.

        :return: The verified claims.
        The expiry is checked last, so a token is only reported as expired
        when everything else about it is valid.

        :raises TokenExpiredError: When only the expiry check fails.
        :raises TokenInvalidError: When any other check fails.
        """
        if not isinstance(token, str) or not token:
            raise TokenInvalidError("Invalid token")

        try:
            jwt.decode(
                token, self._secret, algorithms=[self.algorithm], issuer=self.issuer,
                options={"verify_exp": False}
            )
        except JWTError as e:
            raise TokenInvalidError("Invalid token") from e

        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm], issuer=self.issuer)
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            raise TokenInvalidError("Invalid token") from e

    @staticmethod
    def _unverified_claims(token) -> Dict[str, Any]:
        try:
            return jwt.get_unverified_claims(token)
        except (JWTError, AttributeError) as e:
            raise TokenInvalidError("Invalid token") from e

    def subject_of(self, token) -> int:
        """Reads the user id from a token without checking it. Call :meth:`validate` first."""
        try:
            return int(self._unverified_claims(token)["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise TokenInvalidError("Invalid token") from e

    def type_of(self, token) -> str:
        """Reads the token type without checking it. Call :meth:`validate` first."""
        return self._unverified_claims(token).get("type")

    async def issue_pair(self, user: User) -> TokenPair:
        """Issues a new pair, storing the refresh token as the user's only credential."""
        now = datetime.now(timezone.utc)
        pair = TokenPair(self.issue_access(user, now), self.issue_refresh(user, now))
        await store_credential(user.id, pair.refresh, now + self.refresh_lifetime)
        return pair

    async def rotate(self, refresh_token) -> TokenPair:
        """
        Exchanges a refresh token for a brand new pair.

        Only the stored token for the user is accepted, so once a token has been
        rotated any further attempt to use it fails.

        :raises TokenExpiredError: When the refresh token has expired.
        :raises TokenInvalidError: When the token is not a current refresh token.
        """
        try:
            self.validate(refresh_token)
        except TokenExpiredError as e:
            raise TokenExpiredError("Refresh token expired. Please login again.") from e
        except TokenInvalidError as e:
            raise TokenInvalidError("Invalid refresh token") from e

        if self.type_of(refresh_token) != REFRESH:
            raise TokenInvalidError("Invalid refresh token")

        user_id = self.subject_of(refresh_token)

        async with in_transaction():
            user = await get_user(user_id=user_id)
            if user is None:
                raise TokenInvalidError("Invalid refresh token")

            credential = await get_credential(user.id)
            if credential is None:
                raise TokenInvalidError("Refresh token not found")

            if not hmac.compare_digest(credential.token, refresh_token):
                logger.warning("Stale refresh token presented for %s", user)
                raise TokenInvalidError("Invalid refresh token")

            pair = await self.issue_pair(user)

        logger.info("Rotated refresh token for %s", user)
        return pair

    async def revoke(self, user_id: int) -> bool:
        """Deletes the stored refresh credential, returning whether there was one."""
        deleted = await delete_credential(user_id)
        if deleted:
            logger.info("Revoked refresh credential for user %s", user_id)
        return bool(deleted)
