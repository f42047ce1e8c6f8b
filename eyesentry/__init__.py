"""
Core package for the EyeSentry admin console.

Submodules provide Supabase data access, authentication, the email
endpoint, migration helpers, and user interface rendering helpers that are
orchestrated by the top-level `app.py`.
"""
