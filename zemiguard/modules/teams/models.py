# Supabase tables: teams
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

teams:
- id: uuid (primary key)
- name: text (not null)
- owner_id: uuid (foreign key to users.id, not null) - one Owner per team
- plan: text (not null, default: 'free')
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""

TEAMS_TABLE = "teams"
