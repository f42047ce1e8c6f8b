"""
Supabase client construction. Callers build the handle once and pass it
down; nothing here runs at import time.
"""

from __future__ import annotations

import logging

from supabase import Client, create_client

from eyesentry.config import Settings

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings, service_role: bool = False) -> Client:
    url, key = settings.require_supabase(service_role=service_role)
    logger.debug("Creating Supabase client for %s (service_role=%s)", url, service_role)
    return create_client(url, key)
