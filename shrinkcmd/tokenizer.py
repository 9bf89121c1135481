"""Split a command line into fragments and word-aligned split points."""

import re

# Whitespace, command separators and quotes end a fragment
_DELIMITERS = re.compile(r"[\s;'\"]")


def is_word_char(c: str) -> bool:
    """ASCII letters and digits; everything else is punctuation."""
    return c.isascii() and c.isalnum()


def fragments(command: str) -> list[str]:
    """Return the non-empty fragments of a command eligible for replacement.

    Assignments only contribute their value: ``FOO=a/b`` yields ``a/b``.
    """
    result = []
    for part in _DELIMITERS.split(command):
        part = part.rsplit("=", 1)[-1]
        if part:
            result.append(part)
    return result


def split_points(fragment: str) -> list[int]:
    """Offsets where a candidate substring may start or end.

    Always 0, then the start of every alphanumeric run that follows
    punctuation, then len(fragment).
    """
    points = [0]
    pending = False
    for i, c in enumerate(fragment):
        if is_word_char(c):
            if pending:
                points.append(i)
                pending = False
        else:
            pending = True
    points.append(len(fragment))
    return points
