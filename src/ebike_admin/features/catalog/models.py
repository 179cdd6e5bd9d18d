"""Bike catalog: the master list of models available to every shop."""

from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class VehicleCategory(str, Enum):
    LUXURY_VEHICLE = "luxury-vehicle"
    NATIONAL_STANDARD_Q = "national-standard-q"
    ELECTRIC_MOTORCYCLE = "electric-motorcycle"
    SPECIAL_OFFER = "special-offer"
    ELECTRIC_BICYCLE = "electric-bicycle"
    TIANJIN_TRICYCLE = "tianjin-tricycle"
    SCOOTER = "scooter"


class BikeCategory(str, Enum):
    MOUNTAIN = "mountain"
    ROAD = "road"
    CITY = "city"
    HYBRID = "hybrid"
    ELECTRIC = "electric"
    FOLDING = "folding"


class BikeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    OUT_OF_STOCK = "out_of_stock"


EMPTY_SPECIFICATIONS = {
    "motor_power": "",
    "battery_capacity": "",
    "range": "",
    "max_speed": "",
    "weight": "",
}


def default_specifications() -> dict:
    return dict(EMPTY_SPECIFICATIONS)


class Bike(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    vehicle_category = fields.CharEnumField(
        VehicleCategory, max_length=40, default=VehicleCategory.LUXURY_VEHICLE
    )
    name = fields.CharField(max_length=255)
    brand = fields.CharField(max_length=255)
    model = fields.CharField(max_length=255)
    category = fields.CharEnumField(BikeCategory, max_length=20, default=BikeCategory.ELECTRIC)
    price = fields.FloatField(default=0.0)
    stock = fields.IntField(
        default=0, description="Master stock; sales only touch shop-level stock"
    )
    description = fields.TextField(default="")
    specifications = fields.JSONField(default=default_specifications)
    images = fields.JSONField(default=list)
    status = fields.CharEnumField(BikeStatus, max_length=20, default=BikeStatus.ACTIVE)

    def __str__(self):
        return f"{self.brand} {self.name} (Stock: {self.stock}, Price: ${self.price:.2f})"

    class Meta:
        table = "bikes"
