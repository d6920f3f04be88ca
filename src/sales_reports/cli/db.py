from tortoise import Tortoise

from ..core.config import TORTOISE_ORM_CONFIG


class DBConnection:
    """Async context manager that opens and closes the Tortoise connections."""

    def __init__(self, config: dict = TORTOISE_ORM_CONFIG, generate_schemas: bool = False):
        self.config = config
        self.generate_schemas = generate_schemas

    async def __aenter__(self):
        await Tortoise.init(config=self.config)
        if self.generate_schemas:
            await Tortoise.generate_schemas(safe=True) # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()
