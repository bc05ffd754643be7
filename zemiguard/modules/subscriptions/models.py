# Supabase tables: manual_subscriptions
# This file documents the expected database schema
# Rows are written only with the service role key (see service.py)

"""
Expected Supabase table structure:

manual_subscriptions:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- plan_type: text (not null) - e.g. 'pro'
- expires_at: timestamp (nullable) - null means permanent
- granted_by: text (nullable) - administrator who granted it
- reason: text (nullable)
- created_at: timestamp (default: now())
- unique constraint on (user_id)
"""

MANUAL_SUBSCRIPTIONS_TABLE = "manual_subscriptions"

# Postgres error code raised for the (user_id) unique constraint
UNIQUE_VIOLATION_CODE = "23505"
