from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    FINANCING = "financing"


class SaleStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class Sale(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )

    bike_id = fields.CharField(
        max_length=64, db_index=True, description="Shop inventory id <seller_id>_<bike_id>"
    )
    bike_name = fields.CharField(max_length=255)
    seller_id = fields.CharField(max_length=27, db_index=True)
    seller_name = fields.CharField(max_length=255)
    shop_name = fields.CharField(max_length=255, default="")

    customer_name = fields.CharField(max_length=255)
    customer_phone = fields.CharField(max_length=50)
    customer_email = fields.CharField(max_length=255, null=True)

    quantity = fields.IntField()
    unit_price = fields.FloatField()
    total_price = fields.FloatField()
    payment_method = fields.CharEnumField(PaymentMethod, max_length=20)
    status = fields.CharEnumField(SaleStatus, max_length=20, default=SaleStatus.COMPLETED)
    notes = fields.TextField(null=True)

    def __str__(self):
        return f"Sale {self.public_id}: {self.quantity} x {self.bike_name} = ${self.total_price:.2f} ({self.status.value})"

    class Meta:
        table = "sales"
