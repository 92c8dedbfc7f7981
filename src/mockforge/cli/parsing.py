"""Input parsing utilities for CLI commands."""

import json
from typing import Any


def parse_assignment(assignment: str) -> tuple[str, Any]:
    """Parse an override string.

    Format: key=value. The value is parsed as JSON when possible, so numbers,
    booleans and null keep their type; anything else stays a string.

    Examples:
        "name=Bob"      → ("name", "Bob")
        "author_id=1"   → ("author_id", 1)
        "admin=true"    → ("admin", True)

    Args:
        assignment: Override string

    Returns:
        (key, value) pair

    Raises:
        ValueError: If the format is invalid
    """
    key, sep, raw = assignment.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Invalid override: '{assignment}'. Expected format: key=value")

    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


def parse_assignments(assignments: list[str] | None) -> dict[str, Any]:
    """Parse repeated --set options into an overrides dict (later wins)."""
    return dict(parse_assignment(assignment) for assignment in assignments or [])
