"""API routes for login, seller signup and the one-time admin setup."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from typing import Annotated

from . import schemas
from . import security as auth_security
from . import service as auth_service
from .models import User as AuthUser, UserStatus

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Authentication"],
    prefix="/auth"
)


@router.post("/token", response_model=schemas.Token)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()]
):
    # OAuth2 password form calls the field "username"; it carries the email
    user = await auth_service.get_user_by_email(email=form_data.username)
    if not user or not auth_security.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.status != UserStatus.ACTIVE:
        logger.info(f"Login refused for {user.public_id}: account is {user.status.value}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Account is {user.status.value}",
        )
    await auth_service.record_login(user)
    access_token = auth_security.create_access_token(data={"sub": user.public_id})
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/register", response_model=schemas.SellerProfile, status_code=status.HTTP_201_CREATED)
async def register_seller(signup: schemas.SellerSignup):
    hashed_password = auth_security.get_password_hash(signup.password)
    user = await auth_service.create_seller(signup, hashed_password)
    return auth_service.to_profile(user)


@router.post("/setup-admin", response_model=schemas.AdminProfile, status_code=status.HTTP_201_CREATED)
async def setup_admin(setup: schemas.AdminSetup):
    hashed_password = auth_security.get_password_hash(setup.password)
    user = await auth_service.create_admin(setup, hashed_password)
    return auth_service.to_profile(user)


@router.get("/me", response_model=schemas.UserProfile)
async def read_current_user(
    current_user: Annotated[AuthUser, Depends(auth_security.get_current_active_user)]
):
    return auth_service.to_profile(current_user)
