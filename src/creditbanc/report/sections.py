"""Locate named sections in an assistant-generated credit report.

A section is the block of text that follows a heading line, up to the first
blank line (or the next heading or code fence).  Headings are matched as whole
lines rather than substrings:

    ## Credit Scores              <- heading (title "credit scores")
    | Bureau | Score | Range |    <- section body ...
    |---|---|---|
    | Experian | 720 | 300-850 |
                                  <- ... ends at the first blank line

ATX headings ("#" .. "######") are matched by title, ignoring the number of
"#" characters, emphasis markers, a trailing colon and letter case.  A line
that consists only of a (bold) title, e.g. "**Credit Scores**", is accepted
as a fallback heading when no ATX heading carries that title.

Headings inside a closed code fence or a blockquote rank last: a quoted
example never captures a section that also has a real heading, while a
report the assistant wrapped in a ```markdown fence is still read.  A
heading with trailing text ("## Credit Scores (FICO 8)") is found by a
prefix lookup when no heading carries the exact title.
"""

import logging

from creditbanc.report.patterns import (
    ATX_HEADING_RE,
    BLOCKQUOTE_RE,
    EMPHASIS_RE,
    FENCE_RE,
    WHITESPACE_RE,
)

logger = logging.getLogger(__name__)


# ─── Title Normalisation ──────────────────────────────────────────────────────


def normalise_title(heading: str) -> str:
    """Reduce a heading or title to its lookup key.

    '## Credit Scores' -> 'credit scores'
    '**Flags or Alerts:**' -> 'flags or alerts'
    """
    match = ATX_HEADING_RE.match(heading)
    title = (match.group(2) or "") if match else heading
    title = title.strip()
    # Peel emphasis and trailing colons in either order ("**Alerts:**", "**Alerts**:")
    previous = None
    while title != previous:
        previous = title
        title = EMPHASIS_RE.sub("", title).strip().rstrip(":").strip()
    return WHITESPACE_RE.sub(" ", title).casefold()


def _heading_key(line: str) -> tuple[str, bool] | None:
    """Classify a line as a heading.

    Returns (key, is_atx) for an ATX heading or a bare/bold title line, or None
    for ordinary content.  Bare title lines are only candidates: they are
    reported with is_atx=False and indexed only when no ATX heading claims the
    same title.
    """
    match = ATX_HEADING_RE.match(line)
    if match:
        return normalise_title(line), True

    stripped = line.strip()
    # Title-only line: bold, or ending in a colon, and nothing that looks like content
    is_bold = stripped.startswith(("**", "__")) and stripped.endswith(("**", "__", "**:", "__:"))
    if (is_bold or stripped.endswith(":")) and not stripped.startswith(("|", "-", ">")):
        key = normalise_title(stripped)
        # "Full Name: Jane Doe" is a label line, not a title
        if key and ":" not in key:
            return key, False
    return None


# ─── Block Scanning ───────────────────────────────────────────────────────────


def _fence_spans(lines: list[str]) -> tuple[set[int], set[int]]:
    """Return (fence_lines, fenced_lines) for every closed code fence.

    A fence that is never closed is left as ordinary text, so a stray ``` line
    cannot hide the rest of the document.
    """
    fence_lines: set[int] = set()
    fenced: set[int] = set()
    opener: int | None = None
    marker = ""

    for idx, line in enumerate(lines):
        fence_match = FENCE_RE.match(line)
        if not fence_match:
            continue
        char = fence_match.group(1)[0]
        if opener is None:
            opener, marker = idx, char
        elif char == marker:
            fence_lines.update((opener, idx))
            fenced.update(range(opener + 1, idx))
            opener = None
    return fence_lines, fenced


def _scan_blocks(lines: list[str], fence_lines: set[int], fenced: set[int]) -> list[tuple[int, str, bool, bool]]:
    """Return (line_idx, key, is_atx, hidden) for every heading line.

    Headings inside a closed fence or a blockquote are reported with
    hidden=True; a quoted heading is classified with its "> " marker removed.
    """
    headings: list[tuple[int, str, bool, bool]] = []
    for idx, line in enumerate(lines):
        if idx in fence_lines:
            continue
        hidden = idx in fenced
        quote = BLOCKQUOTE_RE.match(line)
        if quote:
            hidden = True
            line = line[quote.end() :]

        classified = _heading_key(line)
        if classified is not None:
            key, is_atx = classified
            headings.append((idx, key, is_atx, hidden))
    return headings


def _collect_body(lines: list[str], start: int, boundaries: set[int]) -> str:
    """Collect the section body beginning at line *start*.

    Skips blank lines directly after the heading, then gathers lines until the
    first blank line or a boundary line (ATX heading or code fence).
    """
    idx = start
    while idx < len(lines) and not lines[idx].strip():
        idx += 1

    body: list[str] = []
    while idx < len(lines):
        line = lines[idx]
        if not line.strip() or idx in boundaries:
            break
        body.append(line)
        idx += 1
    return "\n".join(body)


def _is_title_prefix(key: str, wanted: str) -> bool:
    """True if *key* starts with *wanted* and the match ends on a word boundary."""
    return key.startswith(wanted) and (len(key) == len(wanted) or not key[len(wanted)].isalnum())


# ─── Public API ───────────────────────────────────────────────────────────────


def index_sections(markdown: str) -> dict[str, str]:
    """Map every normalised heading title in *markdown* to its section body.

    Headings are ranked: ATX headings in the open text first, then bare/bold
    title lines, then the same two kinds found inside closed fences or
    blockquotes.  A title is taken from the best-ranked heading that carries
    it, and within a rank the first one wins.  Keys keep that order, so a
    prefix lookup also prefers the best-ranked heading.
    """
    lines = markdown.splitlines()
    fence_lines, fenced = _fence_spans(lines)
    headings = _scan_blocks(lines, fence_lines, fenced)
    unquoted = [BLOCKQUOTE_RE.sub("", line, count=1) for line in lines]
    # Only ATX headings and fences end a body; a stray bold line inside a section does not
    boundaries = {idx for idx, _, is_atx, _ in headings if is_atx} | fence_lines

    # 0: ATX, 1: title line, 2: hidden ATX, 3: hidden title line
    ranks: list[dict[str, str]] = [{}, {}, {}, {}]
    for idx, key, is_atx, hidden in headings:
        target = ranks[2 * hidden + (not is_atx)]
        if not key or key in target:
            continue
        source = unquoted if BLOCKQUOTE_RE.match(lines[idx]) else lines
        target[key] = _collect_body(source, idx + 1, boundaries)

    index: dict[str, str] = {}
    for rank in ranks:
        for key, body in rank.items():
            index.setdefault(key, body)

    logger.debug("Indexed %d sections (%d from title lines, fences or quotes)", len(index), len(index) - len(ranks[0]))
    return index


def find_section(index: dict[str, str], heading: str) -> str | None:
    """Look up *heading* in a section index; None if no heading carries that title.

    An exact title wins.  Otherwise the first heading whose title starts with
    the wanted one at a word boundary is used, so "## Credit Scores (FICO 8)"
    answers for "## Credit Scores".
    """
    wanted = normalise_title(heading)
    if not wanted:
        return None
    if wanted in index:
        return index[wanted]
    for key, body in index.items():
        if _is_title_prefix(key, wanted):
            return body
    return None


def extract_section(markdown: str, heading: str) -> str:
    """Return the text following *heading* up to the first blank line, or '' if absent."""
    body = find_section(index_sections(markdown), heading)
    return body if body is not None else ""
