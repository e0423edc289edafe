from __future__ import annotations

import os
from typing import Optional


def getenv(name: str) -> Optional[str]:
    """Return an environment variable, treating empty strings as unset."""
    val = os.environ.get(name)
    return val if val not in (None, "") else None
