"""Text helpers for report comparison."""


def normalize(text: str | None) -> str:
    """Trim surrounding whitespace; ``None`` becomes an empty string."""

    return (text or "").strip()
