"""Display-name validation and conversion to infrastructure-safe slugs."""

from __future__ import annotations

import re

MAX_NAME_LENGTH = 255
MAX_SLUG_LENGTH = 62
DEFAULT_SLUG = "team"

SUB_AGENT_MODELS = frozenset({"inherit", "sonnet", "opus", "haiku"})

_INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9_-]")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def validate_name(name: str) -> str:
    """Check that a display name is non-blank and at most 255 bytes long.

    Returns the name unchanged; raises ValueError otherwise.
    """
    if not name.strip():
        raise ValueError("name is required")
    if len(name.encode("utf-8")) > MAX_NAME_LENGTH:
        raise ValueError("name must be at most 255 characters")
    return name


def sanitize_name(name: str) -> str:
    """Turn a human-friendly name into a Docker/Kubernetes-safe slug.

    The result is lower case, uses hyphens for spaces, holds only
    ``[a-z0-9_-]``, has no repeated, leading or trailing hyphens, is at most
    62 characters long and is never empty.
    """
    slug = name.strip().lower().replace(" ", "-")
    slug = _INVALID_SLUG_CHARS.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    slug = slug.strip("-")
    if len(slug) > MAX_SLUG_LENGTH:
        slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    return slug or DEFAULT_SLUG


def is_valid_sub_agent_model(value: str) -> bool:
    """Return True if the value names a recognised sub-agent model."""
    return value in SUB_AGENT_MODELS