# Supabase tables: call_logs
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

call_logs:
- id: uuid (primary key)
- chat_id: uuid (foreign key to chats.id, not null)
- initiator_id: uuid (foreign key to users.id, not null)
- type: text (not null) - values: voice, video
- status: text (not null) - values: ringing, answered, missed, declined, ended
- started_at: timestamp (default: now())
- ended_at: timestamp (nullable)
- duration_seconds: integer (nullable)
"""

CALL_LOGS_TABLE = "call_logs"
