"""Anchor-based text patcher.

Splices a small, well-known snippet into source text that this tool does not
parse.  Each :class:`~setup_pro.models.InsertionRule` locates an anchor (the
last import line, the first match of a pattern, the top of the file) and the
payload is inserted there.  The idempotence marker is checked before any
anchor search, so a patch is never applied twice.

Everything here is a pure function over strings: no filesystem access, same
input, same output.
"""

from __future__ import annotations

import re
from typing import Optional

from setup_pro.models import InjectionResult, InsertionRule, PatchDescriptor

_IMPORT_LINE = re.compile(r"^\s*import(?=[\s{'\"])")
_LEADING_WS = re.compile(r"[ \t]*")

_PATTERN_RULES = (InsertionRule.AFTER_FIRST_PATTERN, InsertionRule.REPLACE_FIRST_PATTERN)


def apply_patch(text: str, descriptor: PatchDescriptor) -> tuple[str, InjectionResult]:
    """Apply *descriptor* to *text*.

    Returns:
        ``(new_text, result)``.  On ``ALREADY_APPLIED`` and
        ``ANCHOR_NOT_FOUND`` the original text is returned unchanged.

    Raises:
        ValueError: If a pattern-based rule has no pattern.
    """
    if descriptor.rule in _PATTERN_RULES and not descriptor.pattern:
        raise ValueError(
            f"Insertion rule {descriptor.rule.value!r} requires a pattern "
            f"(marker {descriptor.idempotence_marker!r})"
        )

    if descriptor.idempotence_marker in text:
        return text, InjectionResult.ALREADY_APPLIED

    newline = detect_newline(text)

    if descriptor.rule is InsertionRule.AFTER_FIRST_PATTERN:
        patched = _insert_after_pattern(text, descriptor.pattern, descriptor.payload, newline)
    elif descriptor.rule is InsertionRule.REPLACE_FIRST_PATTERN:
        patched = _replace_pattern(text, descriptor.pattern, descriptor.payload, newline)
    else:
        patched = _insert_line(text, descriptor, newline)

    if patched is None:
        return text, InjectionResult.ANCHOR_NOT_FOUND
    return patched, InjectionResult.APPLIED


# ---------------------------------------------------------------------------
# Line-based rules
# ---------------------------------------------------------------------------

def _insert_line(text: str, descriptor: PatchDescriptor, newline: str) -> str:
    lines, trailing = split_lines(text, newline)
    payload_lines = descriptor.payload.split("\n")

    insert_at = 0
    if descriptor.rule is InsertionRule.AFTER_LAST_IMPORT:
        last = last_import_index(lines)
        # An import-free file is patched at the top.
        if last is not None:
            insert_at = last + 1

    lines[insert_at:insert_at] = payload_lines
    return join_lines(lines, newline, trailing)


def last_import_index(lines: list[str]) -> Optional[int]:
    """Index of the line that ends the last import statement, or ``None``.

    Lines are scanned from the end.  A multi-line ``import {`` is extended
    to the line holding its closing brace.
    """
    for index in range(len(lines) - 1, -1, -1):
        line = lines[index]
        if not _IMPORT_LINE.match(line):
            continue
        if "{" in line and "}" not in line:
            for end in range(index + 1, len(lines)):
                if "}" in lines[end]:
                    return end
        return index
    return None


# ---------------------------------------------------------------------------
# Pattern-based rules
# ---------------------------------------------------------------------------

def _insert_after_pattern(
    text: str, pattern: str, payload: str, newline: str
) -> Optional[str]:
    match = re.search(pattern, text)
    if match is None:
        return None

    line_start = text.rfind("\n", 0, match.start()) + 1
    indent = _LEADING_WS.match(text, line_start).group(0)
    line_end = text.find("\n", match.end())
    if line_end == -1:
        line_end = len(text)
    if line_end > match.end() and text[line_end - 1] == "\r":
        line_end -= 1
    rest = text[match.end():line_end].strip()
    item_indent = indent + indent_unit(text)
    if not rest:
        # Items already on their own lines keep their indentation.
        following = _next_line_indent(text, line_end)
        if following is not None and len(following) > len(indent):
            item_indent = following

    pieces = [text[: match.end()], newline, item_indent]
    pieces.append((newline + item_indent).join(payload.split("\n")))
    if rest:
        # Whatever followed the token moves to its own line; a closing
        # bracket goes back to the indentation of the matched line.
        pieces.extend([newline, indent if rest.startswith("]") else item_indent, rest])
    pieces.append(text[line_end:])
    return "".join(pieces)


def _next_line_indent(text: str, pos: int) -> Optional[str]:
    for line in text[pos:].split("\n")[1:]:
        if line.strip():
            return _LEADING_WS.match(line).group(0)
    return None


def _replace_pattern(
    text: str, pattern: str, payload: str, newline: str
) -> Optional[str]:
    match = re.search(pattern, text)
    if match is None:
        return None
    replacement = newline.join(payload.split("\n"))
    return text[: match.start()] + replacement + text[match.end():]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def indent_unit(text: str) -> str:
    """Guess one level of indentation used by *text*.

    A tab-indented file yields ``"\\t"``.  Otherwise the narrowest space
    indentation wins; continuation lines of block comments (`` * ...``)
    are skipped.  Unindented text defaults to two spaces.
    """
    widths = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("*"):
            continue
        if line.startswith("\t"):
            return "\t"
        width = len(line) - len(line.lstrip(" "))
        if width:
            widths.append(width)
    return " " * min(widths) if widths else "  "


def detect_newline(text: str) -> str:
    """Return ``"\\r\\n"`` for CRLF files, ``"\\n"`` otherwise."""
    return "\r\n" if "\r\n" in text else "\n"


def split_lines(text: str, newline: str = "\n") -> tuple[list[str], bool]:
    """Split *text* into lines and report whether it ended with *newline*."""
    if not text:
        return [], False
    trailing = text.endswith(newline)
    lines = text.split(newline)
    if trailing:
        lines.pop()
    return lines, trailing


def join_lines(lines: list[str], newline: str = "\n", trailing: bool = False) -> str:
    """Inverse of :func:`split_lines`."""
    joined = newline.join(lines)
    return joined + newline if trailing and lines else joined
