"""
Credentials
-----------

The credential store: at most one live refresh token per user.
"""
from datetime import datetime
from typing import Optional

from tortoise import timezone
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from ridegate.models import RefreshCredential


async def get_credential(user_id: int) -> Optional[RefreshCredential]:
    """Gets the user's refresh credential, treating an expired one as absent."""
    return await RefreshCredential.filter(user_id=user_id, expires_at__gt=timezone.now()).first()


async def store_credential(user_id: int, token: str, expires_at: datetime) -> RefreshCredential:
    """
    Stores the token as the user's only credential, overwriting any previous one.

    The first record's ``created_at`` is kept across overwrites.
    """
    async with in_transaction():
        updated = await RefreshCredential.filter(user_id=user_id).update(token=token, expires_at=expires_at)
        if updated:
            return await RefreshCredential.get(user_id=user_id)

        try:
            return await RefreshCredential.create(user_id=user_id, token=token, expires_at=expires_at)
        except IntegrityError:
            # a concurrent login created the row first, last write wins
            await RefreshCredential.filter(user_id=user_id).update(token=token, expires_at=expires_at)
            return await RefreshCredential.get(user_id=user_id)


async def delete_credential(user_id: int) -> int:
    return await RefreshCredential.filter(user_id=user_id).delete()


async def delete_expired(now: datetime = None) -> int:
    """Removes every credential whose expiry has passed, returning how many went."""
    if now is None:
        now = timezone.now()
    return await RefreshCredential.filter(expires_at__lte=now).delete()
