"""Query helpers shared by the CRUD modules."""


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input is matched literally (escape char: backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
