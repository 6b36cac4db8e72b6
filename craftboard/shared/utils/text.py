"""
Text Utilities

Slugs, meta descriptions and excerpts derived from user-supplied content.

Usage:
======
    from craftboard.shared.utils.text import TextUtils

    TextUtils.slugify("API Guide: Getting Started")      # "api-guide-getting-started"
    TextUtils.slug_with_counter("hello-world", 1)         # "hello-world-1"
    TextUtils.generate_meta_description(body, excerpt)    # ≤ 160 chars, no HTML
"""

import html
import re
from typing import Optional


class TextUtils:
    """Pure text helpers (no I/O)."""

    FALLBACK_SLUG = "untitled"
    META_DESCRIPTION_LENGTH = 160
    EXCERPT_LENGTH = 300
    TRUNCATE_SUFFIX = "..."

    _NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
    _SLUG_SEPARATORS = re.compile(r"[\s_-]+")
    _HTML_TAG = re.compile(r"<[^>]*>")
    _WHITESPACE = re.compile(r"\s+")

    # ═══════════════════════════════════════════════════════════════════════════
    # SLUGS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def slugify(value: str) -> str:
        """
        Convert a title into a URL-safe slug.

        - lowercase and trim
        - drop everything except ASCII word characters, whitespace and "-"
        - collapse runs of whitespace, "_" and "-" into a single "-"
        - strip leading/trailing "-"

        A title with no usable characters ("!!!", "日本語") becomes "untitled".
        """
        slug = value.lower().strip()
        slug = TextUtils._NON_SLUG_CHARS.sub("", slug)
        slug = TextUtils._SLUG_SEPARATORS.sub("-", slug)
        slug = slug.strip("-")
        return slug or TextUtils.FALLBACK_SLUG

    @staticmethod
    def slug_with_counter(base_slug: str, counter: int) -> str:
        return f"{base_slug}-{counter}"

    # ═══════════════════════════════════════════════════════════════════════════
    # PLAIN TEXT
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def strip_html(value: str) -> str:
        """Remove tags, decode entities and collapse whitespace."""
        text = TextUtils._HTML_TAG.sub(" ", value or "")
        text = html.unescape(text)
        return TextUtils._WHITESPACE.sub(" ", text).strip()

    @staticmethod
    def has_text(value: str) -> bool:
        """True when something other than markup and whitespace remains."""
        return bool(TextUtils.strip_html(value))

    @staticmethod
    def truncate(text: str, max_length: int, suffix: str = TRUNCATE_SUFFIX) -> str:
        """
        Shorten to ``max_length`` characters including the suffix.

        Cuts at the last word boundary when one falls in the final 20% of the
        allowed length, otherwise cuts mid-word.
        """
        if len(text) <= max_length:
            return text

        limit = max_length - len(suffix)
        truncated = text[:limit]
        last_space = truncated.rfind(" ")
        if last_space > limit * 0.8:
            truncated = truncated[:last_space]
        return truncated + suffix

    @staticmethod
    def generate_meta_description(body: str, excerpt: Optional[str] = None) -> str:
        """Excerpt if present, else body; plain text, at most 160 characters."""
        text = TextUtils.strip_html(excerpt or body or "")
        if not text:
            return ""
        return TextUtils.truncate(text, TextUtils.META_DESCRIPTION_LENGTH)

    @staticmethod
    def generate_excerpt(body: str) -> str:
        return TextUtils.truncate(TextUtils.strip_html(body), TextUtils.EXCERPT_LENGTH)
