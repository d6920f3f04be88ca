"""Admin reporting endpoints

Read-only aggregate views over the order-management store: daily and
monthly sales, customers per order status, per-customer and per-product
summaries. Every endpoint sits behind a single admin gate applied at
router level; report handlers delegate to service functions that hold the
aggregation logic and recompute from source data on every call."""
