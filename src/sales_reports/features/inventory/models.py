"""Catalog products.

Order items point at a product through its ``public_id`` string only; that is a
lookup reference, not an ownership relation, so there is no foreign key here."""

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    name = fields.CharField(max_length=255)
    category = fields.CharField(max_length=100)
    description = fields.TextField(default="")
    quantity = fields.IntField(default=0, description="Quantity on hand")
    price = fields.FloatField(default=0.0)
    discount = fields.FloatField(default=0.0)
    unit_price = fields.FloatField(default=0.0)
    created_by = fields.CharField(max_length=100, null=True)

    def __str__(self):
        return f"{self.name} (Stock: {self.quantity}, Price: ${self.unit_price:.2f})"

    class Meta:
        table = "products"
