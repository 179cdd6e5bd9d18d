"""Shared model helpers.

Every record carries an internal integer key plus a KSUID ``public_id``
(K-Sortable Unique IDentifier). Only the public id leaves the service layer,
and records in different ledgers refer to each other through it.
"""

import datetime

from tortoise import fields, models
from ksuid import ksuid


def generate_ksuid() -> str:
    """Generate a K-Sortable Unique IDentifier as a 27 character string."""
    return str(ksuid.Ksuid())


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Normalize a datetime to an aware UTC value; naive values are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


class TimestampMixin(models.Model):
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True
