"""
Users
-----
"""
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError
from tortoise.exceptions import IntegrityError

from ridegate.models import User
from ridegate.models.util import UserType

hasher = PasswordHasher()


class UserExistsError(Exception):
    def __init__(self, errors):
        super().__init__()
        self.errors = errors


async def get_user(*, user_id=None, username=None) -> Optional[User]:
    """
    :param user_id: The id of the user to get.
    :param username: The username of the user to get.
    :return: The matching user, or None.
    """

    kwargs = {}
    if user_id is not None:
        kwargs["id"] = user_id

    if username is not None:
        kwargs["username"] = username

    if not kwargs:
        return None

    return await User.filter(**kwargs).first()


async def create_user(username: str, password: str, user_type: UserType = UserType.USER) -> User:
    """
    Creates a new user, storing only the argon2 hash of the password.

    :raises UserExistsError: When a user with the given username already exists.
    """
    try:
        return await User.create(username=username, password_hash=hasher.hash(password), type=user_type)
    except IntegrityError as error:
        if "unique" not in str(error).lower():
            raise
        raise UserExistsError({"username": "username already exists"})


async def authenticate(username: str, password: str) -> Optional[User]:
    """
    Checks a username and password pair.

    :return: The user if the password matches, otherwise None.
    """
    user = await get_user(username=username)
    if user is None:
        return None

    try:
        hasher.verify(user.password_hash, password)
    except (VerificationError, InvalidHashError):
        return None

    if hasher.check_needs_rehash(user.password_hash):
        user.password_hash = hasher.hash(password)
        await user.save()

    return user
