# Supabase tables: users
# This file documents the expected database schema
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id)
- team_id: uuid (foreign key to teams.id, not null)
- role: text (not null) - values: owner, super, texter
- zemi_number: text (unique, not null)
- display_name: text (nullable)
- avatar_url: text (nullable)
- status_message: text (nullable)
- last_seen_at: timestamp (nullable)
- is_active: boolean (not null, default: true) - Owner deactivation
- is_paused: boolean (not null, default: false) - plan member limit
- wall_enabled: boolean (not null, default: true)
- consent_accepted_at: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""

USERS_TABLE = "users"

# Columns the relationship graph reads for identity and cross-entity checks
USER_COLUMNS = "id, team_id, role, is_active, is_paused, display_name, status_message"
