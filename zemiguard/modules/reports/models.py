# Supabase tables: reports
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

reports:
- id: uuid (primary key)
- reporter_id: uuid (foreign key to users.id, not null)
- reported_user_id: uuid (foreign key to users.id, not null)
- message_id: uuid (foreign key to messages.id, nullable)
- reason: text (not null)
- status: text (not null, default: 'pending') - values: pending, reviewed
- reviewed_by: uuid (foreign key to users.id, nullable)
- reviewed_at: timestamp (nullable)
- created_at: timestamp (default: now())
"""

REPORTS_TABLE = "reports"
