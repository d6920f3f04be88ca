from enum import Enum

from tortoise import fields, models
from ...common.models import TimestampMixin, generate_ksuid


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"


class Order(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )

    customer: fields.ForeignKeyNullableRelation["Customer"] = fields.ForeignKeyField(
        "models.Customer", related_name="orders", on_delete=fields.SET_NULL, null=True
    )
    # Ordered list of OrderItem ids as recorded by checkout. Kept apart from the
    # OrderItem.order back-reference; the two are not reconciled.
    items = fields.JSONField(default=list)

    shipping_full_name = fields.CharField(max_length=255)
    shipping_phone = fields.CharField(max_length=50)
    shipping_city = fields.CharField(max_length=100)
    shipping_location = fields.CharField(max_length=100, null=True, description="lat,lng")

    total_price = fields.FloatField()
    unit_price = fields.FloatField()
    delivery = fields.FloatField(default=2.0)

    payment_method = fields.CharEnumField(PaymentMethod)
    payment_status = fields.CharEnumField(PaymentStatus, default=PaymentStatus.PENDING)
    status = fields.CharEnumField(OrderStatus, default=OrderStatus.PENDING)
    completed = fields.BooleanField(default=False)

    delivery_start_time = fields.DatetimeField(null=True)
    delivery_duration = fields.IntField(null=True, description="Minutes")
    pay_by = fields.CharField(max_length=100, null=True)
    payment_date = fields.DatetimeField(null=True)
    confirmed_by = fields.CharField(max_length=100, null=True)
    cancelled_by = fields.CharField(max_length=100, null=True)

    line_items: fields.ReverseRelation["OrderItem"]

    def __str__(self):
        return f"Order {self.public_id} - Status: {self.status}"

    class Meta:
        table = "orders"


class OrderItem(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )

    order: fields.ForeignKeyRelation[Order] = fields.ForeignKeyField(
        "models.Order",
        related_name="line_items",
        on_delete=fields.CASCADE,
    )
    product_id = fields.CharField(max_length=64, description="Public id of the Product")

    quantity = fields.IntField()
    unit_price = fields.FloatField()
    total_price = fields.FloatField()

    # Denormalized copies of the product's display fields. Older items carry none.
    name = fields.CharField(max_length=255, null=True)
    category = fields.CharField(max_length=100, null=True)

    def __str__(self):
        return f"{self.quantity} x {self.name or self.product_id}"

    class Meta:
        table = "order_items"
