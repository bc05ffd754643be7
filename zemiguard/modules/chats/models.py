# Supabase tables: chats, chat_members
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

chats:
- id: uuid (primary key)
- name: text (nullable)
- is_group: boolean (not null, default: false)
- created_by: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

chat_members:
- id: uuid (primary key)
- chat_id: uuid (foreign key to chats.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- left_at: timestamp (nullable) - null means the membership is active
- is_muted: boolean (not null, default: false)
- is_pinned: boolean (not null, default: false)
- joined_at: timestamp (default: now())
- unique constraint on (chat_id, user_id)
"""

CHATS_TABLE = "chats"
CHAT_MEMBERS_TABLE = "chat_members"
