# Supabase tables: push_tokens, user_sessions
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

push_tokens:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- token: text (not null)
- platform: text (not null) - values: ios, android, web
- created_at: timestamp (default: now())

user_sessions:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- device_name: text (nullable)
- last_active_at: timestamp (default: now())
- created_at: timestamp (default: now())
"""

PUSH_TOKENS_TABLE = "push_tokens"
USER_SESSIONS_TABLE = "user_sessions"
