"""User registry: admin and seller accounts."""

from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class UserRole(str, Enum):
    ADMIN = "admin"
    SELLER = "seller"


class UserStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"
    REJECTED = "rejected"


class User(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    email = fields.CharField(max_length=255, unique=True, db_index=True)
    display_name = fields.CharField(max_length=255)
    hashed_password = fields.CharField(max_length=255)
    role = fields.CharEnumField(UserRole, max_length=20, default=UserRole.SELLER)
    status = fields.CharEnumField(UserStatus, max_length=20, default=UserStatus.PENDING)

    # Seller-only profile fields
    shop_name = fields.CharField(max_length=255, null=True)
    phone = fields.CharField(max_length=50, null=True)

    photo_url = fields.CharField(max_length=1024, null=True)
    last_login = fields.DatetimeField(null=True)
    status_changed_at = fields.DatetimeField(null=True)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def __str__(self):
        return f"{self.email} ({self.role.value}, {self.status.value})"

    class Meta:
        table = "users"
