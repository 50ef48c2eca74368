# issuefilter/text.py
"""Case-insensitive matching shared by every qualifier."""


def normalize(value: str | None) -> str:
    """Lower-case a possibly missing string for comparison."""
    return value.lower() if value else ""


def contains_ignore_case(haystack: str | None, needle: str) -> bool:
    return normalize(needle) in normalize(haystack)
