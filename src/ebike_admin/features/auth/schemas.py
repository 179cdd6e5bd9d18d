"""Pydantic schemas for authentication and user profiles.

Profiles are a tagged union on ``role``: admins never carry shop fields,
sellers always expose them.
"""

from typing import Annotated, Literal, Optional, Union
import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .models import UserStatus


class UserBase(BaseModel):
    email: EmailStr = Field(..., description="Login email address")
    display_name: str = Field(..., min_length=1, max_length=255, description="Name shown to other users")


class SellerSignup(UserBase):
    password: str = Field(..., min_length=8, description="Account password")
    shop_name: str = Field(..., min_length=1, max_length=255, description="Name of the seller's shop")
    phone: Optional[str] = Field(None, max_length=50, description="Contact phone number")


class AdminSetup(UserBase):
    password: str = Field(..., min_length=8, description="Account password")


class ProfileBase(UserBase):
    uid: str = Field(..., description="Public unique identifier for the user (KSUID)")
    status: UserStatus
    photo_url: Optional[str] = None
    last_login: Optional[datetime.datetime] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class AdminProfile(ProfileBase):
    role: Literal["admin"] = "admin"


class SellerProfile(ProfileBase):
    role: Literal["seller"] = "seller"
    shop_name: Optional[str] = None
    phone: Optional[str] = None
    status_changed_at: Optional[datetime.datetime] = None


UserProfile = Annotated[Union[AdminProfile, SellerProfile], Field(discriminator="role")]


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    sub: Optional[str] = None
