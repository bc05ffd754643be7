# Supabase tables: texter_settings
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

texter_settings:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, unique, not null) - the Texter
- can_send_images: boolean (default: true)
- can_send_voice: boolean (default: true)
- can_send_video: boolean (default: true)
- can_send_documents: boolean (default: true)
- can_share_location: boolean (default: true)
- can_voice_call: boolean (default: true)
- can_video_call: boolean (default: true)
- can_screen_share: boolean (default: true)
- can_access_wall: boolean (default: true)
- quiet_hours_start: time (nullable)
- quiet_hours_end: time (nullable)
- quiet_hours_days: integer[] (nullable) - 0 = Sunday
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""

TEXTER_SETTINGS_TABLE = "texter_settings"
