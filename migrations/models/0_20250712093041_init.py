from tortoise import BaseDBAsyncClient


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "customers" (
    "created_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "public_id" VARCHAR(27) NOT NULL UNIQUE,
    "full_name" VARCHAR(255) NOT NULL,
    "email" VARCHAR(255) NOT NULL UNIQUE,
    "phone" VARCHAR(50) NOT NULL
);
CREATE INDEX IF NOT EXISTS "idx_customers_public__4be1f2" ON "customers" ("public_id");
CREATE INDEX IF NOT EXISTS "idx_customers_email_0d93a1" ON "customers" ("email");
CREATE TABLE IF NOT EXISTS "products" (
    "created_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "public_id" VARCHAR(27) NOT NULL UNIQUE,
    "name" VARCHAR(255) NOT NULL,
    "category" VARCHAR(100) NOT NULL,
    "description" TEXT NOT NULL,
    "quantity" INT NOT NULL DEFAULT 0 /* Quantity on hand */,
    "price" REAL NOT NULL DEFAULT 0,
    "discount" REAL NOT NULL DEFAULT 0,
    "unit_price" REAL NOT NULL DEFAULT 0,
    "created_by" VARCHAR(100)
);
CREATE INDEX IF NOT EXISTS "idx_products_public__a3e07c" ON "products" ("public_id");
CREATE TABLE IF NOT EXISTS "orders" (
    "created_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "public_id" VARCHAR(27) NOT NULL UNIQUE,
    "items" JSON NOT NULL,
    "shipping_full_name" VARCHAR(255) NOT NULL,
    "shipping_phone" VARCHAR(50) NOT NULL,
    "shipping_city" VARCHAR(100) NOT NULL,
    "shipping_location" VARCHAR(100) /* lat,lng */,
    "total_price" REAL NOT NULL,
    "unit_price" REAL NOT NULL,
    "delivery" REAL NOT NULL DEFAULT 2,
    "payment_method" VARCHAR(8) NOT NULL /* DELIVERY: delivery\nPICKUP: pickup */,
    "payment_status" VARCHAR(7) NOT NULL DEFAULT 'pending' /* PENDING: pending\nPAID: paid\nFAILED: failed */,
    "status" VARCHAR(9) NOT NULL DEFAULT 'pending' /* PENDING: pending\nCONFIRMED: confirmed\nCANCELLED: cancelled\nCOMPLETED: completed */,
    "completed" INT NOT NULL DEFAULT 0,
    "delivery_start_time" TIMESTAMP,
    "delivery_duration" INT /* Minutes */,
    "pay_by" VARCHAR(100),
    "payment_date" TIMESTAMP,
    "confirmed_by" VARCHAR(100),
    "cancelled_by" VARCHAR(100),
    "customer_id" INT REFERENCES "customers" ("id") ON DELETE SET NULL
);
CREATE INDEX IF NOT EXISTS "idx_orders_public__32168a" ON "orders" ("public_id");
CREATE TABLE IF NOT EXISTS "order_items" (
    "created_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "public_id" VARCHAR(27) NOT NULL UNIQUE,
    "product_id" VARCHAR(64) NOT NULL /* Public id of the Product */,
    "quantity" INT NOT NULL,
    "unit_price" REAL NOT NULL,
    "total_price" REAL NOT NULL,
    "name" VARCHAR(255),
    "category" VARCHAR(100),
    "order_id" INT NOT NULL REFERENCES "orders" ("id") ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS "idx_order_items_public__6f2d94" ON "order_items" ("public_id");
CREATE TABLE IF NOT EXISTS "users" (
    "created_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "public_id" VARCHAR(27) NOT NULL UNIQUE,
    "username" VARCHAR(100) NOT NULL UNIQUE,
    "email" VARCHAR(255) NOT NULL UNIQUE,
    "hashed_password" VARCHAR(255) NOT NULL,
    "role" VARCHAR(50) NOT NULL DEFAULT 'customer',
    "is_active" INT NOT NULL DEFAULT 1
);
CREATE INDEX IF NOT EXISTS "idx_users_public__e1c52b" ON "users" ("public_id");
CREATE INDEX IF NOT EXISTS "idx_users_usernam_266d2e" ON "users" ("username");
CREATE INDEX IF NOT EXISTS "idx_users_email_133a6f" ON "users" ("email");
CREATE TABLE IF NOT EXISTS "aerich" (
    "id" INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    "version" VARCHAR(255) NOT NULL,
    "app" VARCHAR(100) NOT NULL,
    "content" JSON NOT NULL
);"""


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        """
