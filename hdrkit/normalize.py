"""Comment stripping and whitespace normalization for C header text."""

import re
from dataclasses import dataclass

# Whichever comment opener comes first wins, so "//" inside a block comment
# and "/*" inside a line comment are both handled.
COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
# A directive runs to the end of its line, including backslash continuations.
DIRECTIVE = re.compile(r"^[ \t]*#(?:[^\n]*\\\n)*[^\n]*$", re.MULTILINE)
WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class NormalizedContent:
    """Raw header text alongside its flattened, comment-free form."""

    raw: str
    flat: str


def _blank(match: re.Match) -> str:
    # Keep line breaks so directives stay on their own lines.
    return "\n" * match.group(0).count("\n") or " "


def strip_comments(content: str) -> str:
    """Remove // and /* */ comments.

    String literals are not recognized, so comment markers inside them are
    stripped like any other comment. An unterminated block comment is left
    in place.
    """
    return COMMENT.sub(_blank, content)


def strip_directives(content: str) -> str:
    return DIRECTIVE.sub("", content)


def collapse_whitespace(content: str) -> str:
    return WHITESPACE.sub(" ", content).strip()


def normalize_content(content: str) -> NormalizedContent:
    """Flatten header text into a single line suitable for declaration matching."""
    flat = strip_directives(strip_comments(content))
    return NormalizedContent(raw=content, flat=collapse_whitespace(flat))
