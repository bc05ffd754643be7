# Supabase tables: quick_messages
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

quick_messages:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null) - who the canned reply belongs to
- created_by: uuid (foreign key to users.id, not null) - self, or the Texter's Owner
- content: text (not null)
- sort_order: integer (not null, default: 0)
- created_at: timestamp (default: now())
"""

QUICK_MESSAGES_TABLE = "quick_messages"
