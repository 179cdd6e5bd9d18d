"""Per-seller shop stock, kept apart from the catalog's master stock."""

from tortoise import fields

from ...common.models import TimestampMixin
from ..catalog.models import BikeCategory, BikeStatus, VehicleCategory, default_specifications


def shop_inventory_key(seller_id: str, bike_id: str) -> str:
    """Deterministic id of the (seller, bike) record."""
    return f"{seller_id}_{bike_id}"


class ShopInventoryItem(TimestampMixin):
    """A seller's copy of a catalog bike.

    Catalog fields are a snapshot taken when the seller first received the
    bike and are never refreshed from the catalog afterwards.
    """

    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=64, unique=True, db_index=True, description="<seller_id>_<bike_id>"
    )
    seller_id = fields.CharField(max_length=27, db_index=True)
    bike_id = fields.CharField(max_length=27, db_index=True)

    # Snapshot of the catalog record
    vehicle_category = fields.CharEnumField(
        VehicleCategory, max_length=40, default=VehicleCategory.LUXURY_VEHICLE
    )
    name = fields.CharField(max_length=255)
    brand = fields.CharField(max_length=255)
    model = fields.CharField(max_length=255)
    category = fields.CharEnumField(BikeCategory, max_length=20, default=BikeCategory.ELECTRIC)
    price = fields.FloatField(default=0.0)
    stock = fields.IntField(default=0, description="Catalog master stock at snapshot time")
    description = fields.TextField(default="")
    specifications = fields.JSONField(default=default_specifications)
    images = fields.JSONField(default=list)
    status = fields.CharEnumField(BikeStatus, max_length=20, default=BikeStatus.ACTIVE)

    shop_stock = fields.IntField(default=0)
    total_sold = fields.IntField(default=0)
    last_restocked = fields.DatetimeField(null=True)

    def __str__(self):
        return f"{self.name} @ {self.seller_id} (Shop stock: {self.shop_stock}, Sold: {self.total_sold})"

    class Meta:
        table = "shop_inventory"
        unique_together = (("seller_id", "bike_id"),)
