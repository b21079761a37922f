"""Utilities for generating filesystem-safe task IDs."""

import re
import unicodedata


def slugify(text: str) -> str:
    """
    Convert text to a filesystem-safe slug.

    Example: "Review Financial Statements!" -> "review-financial-statements"
    """
    # Fold accents to plain ASCII
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = text.lower()
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"[^a-z0-9\-]", "", text)

    return re.sub(r"-+", "-", text).strip("-")


def generate_filename(title: str, taken: set[str] | None = None) -> str:
    """Generate a unique .md filename for a task title.

    A numeric suffix is appended while the name collides with ``taken``.
    """
    slug = slugify(title) or "untitled"
    filename = f"{slug}.md"
    if not taken:
        return filename

    counter = 2
    while filename in taken:
        filename = f"{slug}-{counter}.md"
        counter += 1
    return filename
