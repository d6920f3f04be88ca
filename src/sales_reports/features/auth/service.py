"""Operator lookups for the report gate, plus admin provisioning for the CLI."""
from typing import Optional

from .models import ADMIN_ROLE, User
from .security import get_password_hash, verify_password


async def authenticate_operator(username: str, password: str) -> Optional[User]:
    """Returns the operator when the password matches, otherwise None.

    Unknown usernames and wrong passwords are indistinguishable to the caller.
    Whether the account is active is left to the caller to decide.
    """
    operator = await User.get_or_none(username=username)
    if operator is None or not verify_password(password, operator.hashed_password):
        return None
    return operator


async def register_admin(username: str, email: str, password: str) -> User:
    return await User.create(
        username=username,
        email=email,
        hashed_password=get_password_hash(password),
        role=ADMIN_ROLE,
    )


async def promote_to_admin(operator: User) -> User:
    operator.role = ADMIN_ROLE
    await operator.save(update_fields=["role"])
    return operator
