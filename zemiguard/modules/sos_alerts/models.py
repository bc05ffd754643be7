# Supabase tables: sos_alerts
# This file documents the expected database schema
# Snapshots of these rows are validated in schemas.py

"""
Expected Supabase table structure:

sos_alerts:
- id: uuid (primary key)
- texter_id: uuid (foreign key to users.id, not null)
- latitude: double precision (nullable)
- longitude: double precision (nullable)
- acknowledged_at: timestamp (nullable)
- acknowledged_by: uuid (foreign key to users.id, nullable) - the Texter's Owner
- created_at: timestamp (default: now())
"""

SOS_ALERTS_TABLE = "sos_alerts"
