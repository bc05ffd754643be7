# Supabase tables: friendships, denied_friend_requests
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

friendships:
- id: uuid (primary key)
- requester_id: uuid (foreign key to users.id, not null)
- addressee_id: uuid (foreign key to users.id, not null)
- status: text (not null, default: 'pending') - values: pending, accepted, denied
- approved_by: uuid (foreign key to users.id, nullable) - Owner accepting for a Texter
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

denied_friend_requests:
- id: uuid (primary key)
- texter_id: uuid (foreign key to users.id, not null)
- denied_user_id: uuid (foreign key to users.id, not null)
- denied_by: uuid (foreign key to users.id, not null) - the Texter's Owner
- created_at: timestamp (default: now())
"""

FRIENDSHIPS_TABLE = "friendships"
DENIED_FRIEND_REQUESTS_TABLE = "denied_friend_requests"
