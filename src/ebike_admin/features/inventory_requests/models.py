"""Seller requests for catalog bikes and their processing state."""

from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FULFILLED = "fulfilled"


class RequestPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


TERMINAL_STATUSES = (RequestStatus.REJECTED, RequestStatus.FULFILLED)


class InventoryRequest(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )

    # Seller and bike are referenced by public id with their display names
    # copied in, so the request still reads correctly if either is removed.
    seller_id = fields.CharField(max_length=27, db_index=True)
    seller_name = fields.CharField(max_length=255)
    shop_name = fields.CharField(max_length=255, default="")
    bike_id = fields.CharField(max_length=27, db_index=True)
    bike_name = fields.CharField(max_length=255)

    requested_quantity = fields.IntField()
    approved_quantity = fields.IntField(null=True)
    status = fields.CharEnumField(RequestStatus, max_length=20, default=RequestStatus.PENDING)
    priority = fields.CharEnumField(RequestPriority, max_length=20, default=RequestPriority.MEDIUM)
    notes = fields.TextField(null=True)
    admin_notes = fields.TextField(null=True)

    processed_at = fields.DatetimeField(null=True)
    processed_by = fields.CharField(max_length=255, null=True)

    def __str__(self):
        return (
            f"Request {self.public_id}: {self.requested_quantity} x {self.bike_name} "
            f"for {self.shop_name} - Status: {self.status.value}"
        )

    class Meta:
        table = "inventory_requests"
