"""Business logic for accounts: lookup, signup, admin bootstrap and login bookkeeping."""
import logging
from typing import Optional, Union

from fastapi import HTTPException, status

from ...common.models import utcnow
from . import models
from .schemas import AdminProfile, AdminSetup, SellerProfile, SellerSignup

logger = logging.getLogger(__name__)


async def get_user_by_uid(uid: str) -> Optional[models.User]:
    """Retrieves a user by their public id.

    Args:
        uid: The public id (KSUID) of the user.

    Returns:
        The User object if found, otherwise None.
    """
    return await models.User.get_or_none(public_id=uid)


async def get_user_by_email(email: str) -> Optional[models.User]:
    """Retrieves a user by their email address.

    Args:
        email: The email address of the user to retrieve.

    Returns:
        The User object if found, otherwise None.
    """
    return await models.User.get_or_none(email=email.lower())


async def admin_exists() -> bool:
    return await models.User.filter(role=models.UserRole.ADMIN).exists()


async def create_seller(signup: SellerSignup, hashed_password_val: str) -> models.User:
    """Creates a seller account in ``pending`` status.

    The account cannot log in until an admin approves it.

    Raises:
        HTTPException: 400 if the email is already registered.
    """
    if await get_user_by_email(signup.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    user = await models.User.create(
        email=signup.email.lower(),
        display_name=signup.display_name,
        shop_name=signup.shop_name,
        phone=signup.phone,
        role=models.UserRole.SELLER,
        status=models.UserStatus.PENDING,
        hashed_password=hashed_password_val,
    )
    logger.info(f"Seller {user.public_id} signed up for shop '{user.shop_name}'")
    return user


async def create_admin(setup: AdminSetup, hashed_password_val: str) -> models.User:
    """Creates the single admin account.

    The uniqueness of the admin is checked here, against existing records,
    immediately before the insert. Two concurrent calls can still both pass
    the check since the store carries no uniqueness constraint on role.

    Raises:
        HTTPException: 409 if an admin already exists, 400 if the email is taken.
    """
    if await admin_exists():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An admin account already exists. Only one admin is allowed.",
        )
    if await get_user_by_email(setup.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    user = await models.User.create(
        email=setup.email.lower(),
        display_name=setup.display_name,
        role=models.UserRole.ADMIN,
        status=models.UserStatus.ACTIVE,
        hashed_password=hashed_password_val,
    )
    logger.info(f"Admin account {user.public_id} created")
    return user


async def record_login(user: models.User) -> None:
    user.last_login = utcnow()
    await user.save(update_fields=["last_login", "updated_at"])


def to_profile(user: models.User) -> Union[AdminProfile, SellerProfile]:
    common = dict(
        uid=user.public_id,
        email=user.email,
        display_name=user.display_name,
        status=user.status,
        photo_url=user.photo_url,
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
    if user.role == models.UserRole.ADMIN:
        return AdminProfile(**common)
    return SellerProfile(
        **common,
        shop_name=user.shop_name,
        phone=user.phone,
        status_changed_at=user.status_changed_at,
    )
