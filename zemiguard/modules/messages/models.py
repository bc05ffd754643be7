# Supabase tables: messages, message_edits, message_reactions,
# starred_messages, message_read_receipts
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

messages:
- id: uuid (primary key)
- chat_id: uuid (foreign key to chats.id, not null)
- sender_id: uuid (foreign key to users.id, not null)
- type: text (not null, default: 'text')
- content: text (nullable)
- is_edited: boolean (not null, default: false)
- edited_at: timestamp (nullable)
- deleted_at: timestamp (nullable) - soft delete, row is kept
- deleted_by: uuid (foreign key to users.id, nullable)
- created_at: timestamp (default: now())

message_edits:
- id: uuid (primary key)
- message_id: uuid (foreign key to messages.id, not null)
- old_content: text (not null)
- edited_at: timestamp (default: now())

message_reactions:
- id: uuid (primary key)
- message_id: uuid (foreign key to messages.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- emoji: text (not null)

starred_messages:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- message_id: uuid (foreign key to messages.id, not null)

message_read_receipts:
- id: uuid (primary key)
- message_id: uuid (foreign key to messages.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- read_at: timestamp (default: now())
"""

MESSAGES_TABLE = "messages"
MESSAGE_EDITS_TABLE = "message_edits"
MESSAGE_REACTIONS_TABLE = "message_reactions"
STARRED_MESSAGES_TABLE = "starred_messages"
MESSAGE_READ_RECEIPTS_TABLE = "message_read_receipts"
