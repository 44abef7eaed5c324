# Supabase table: users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- email: text (not null) - login key, uniqueness checked by the app before insert
- password: text (not null) - bcrypt hash, never the plain password
- profile_picture: text (nullable) - public URL of the hosted image
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Note: the app does not depend on a unique index on email. Adding one is
harmless and closes the window where two concurrent signups with the same
email both pass the existence check.
"""
