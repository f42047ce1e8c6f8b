from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from eyesentry.auth import AuthSession


@dataclass
class PageContext:
    client: Any
    auth: AuthSession
    profile: Optional[Dict[str, Any]] = None
