"""Hyphen-bullet parser for credit-report sections."""

from creditbanc.report.patterns import BULLET_PREFIX


def parse_bullets(section: str) -> list[str]:
    """Return the text of every '- ' bullet in *section*, prefix removed and trimmed.

    Lines without the bullet marker are dropped, including the wrapped second
    line of a long bullet.
    """
    items: list[str] = []
    for line in section.splitlines():
        stripped = line.strip()
        if stripped.startswith(BULLET_PREFIX):
            items.append(stripped[len(BULLET_PREFIX) :].strip())
    return items
