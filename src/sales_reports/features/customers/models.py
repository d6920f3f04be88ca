"""Customer records referenced by orders. Reports only ever read them."""

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class Customer(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    full_name = fields.CharField(max_length=255)
    email = fields.CharField(max_length=255, unique=True, db_index=True)
    phone = fields.CharField(max_length=50)

    orders: fields.ReverseRelation["Order"]

    def __str__(self):
        return f"{self.full_name} <{self.email}>"

    class Meta:
        table = "customers"
