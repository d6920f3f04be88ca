from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid

ADMIN_ROLE = "admin"


class User(TimestampMixin):
    """An operator account. Reports open only to active users holding ``ADMIN_ROLE``;
    any other role authenticates fine but is turned away at the report gate."""

    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(max_length=27, unique=True, default=generate_ksuid, db_index=True)
    username = fields.CharField(max_length=100, unique=True, db_index=True)
    email = fields.CharField(max_length=255, unique=True, db_index=True)
    hashed_password = fields.CharField(max_length=255)
    role = fields.CharField(max_length=50, default="customer")
    is_active = fields.BooleanField(default=True)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def __str__(self):
        return f"{self.username} ({self.role})"

    class Meta:
        table = "users"
