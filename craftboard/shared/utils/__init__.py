"""
Utilities Package

Contents:
=========
- security: JWT management
- text: Slugs, meta descriptions, excerpts

Usage:
======
    from craftboard.shared.utils.security import SecurityUtils
    from craftboard.shared.utils.text import TextUtils
"""

from craftboard.shared.utils.security import SecurityUtils
from craftboard.shared.utils.text import TextUtils

__all__ = [
    "SecurityUtils",
    "TextUtils",
]
