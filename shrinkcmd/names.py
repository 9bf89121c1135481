"""Variable name synthesis.

Names are derived from the text they stand for, trying progressively
looser forms until one is free:

1. last path component, abbreviated on ``-`` boundaries
2. last path component, abbreviated on any punctuation
3. last path component, abbreviated on ``/`` boundaries
4. last path component, verbatim
5. whole text, abbreviated on ``/`` boundaries
6. ``<step 5 or WTF>_<n>`` with n = 3, 4, 5, ... forever

Every name is legalized into ``[A-Z_][A-Z0-9_]*``.
"""

from collections.abc import Callable, Set

from .tokenizer import is_word_char

_FALLBACK_BASE = "WTF"
_FINITE_STEPS = 5


class NameExhaustedError(RuntimeError):
    """No unused name could be produced for a candidate."""


def legalize(name: str) -> str:
    """Turn arbitrary non-empty text into a shell identifier."""
    name = "".join(c.upper() if is_word_char(c) else "_" for c in name)
    if name[:1].isdigit():
        return f"_{name}"
    return name


def abbreviate(text: str, is_separator: Callable[[str], bool]) -> str | None:
    """Keep the first alphanumeric character after each separator.

    Returns None when the text holds no alphanumeric character at all.
    """
    letters = []
    capture = True
    for c in text:
        if capture and is_word_char(c):
            letters.append(c)
            capture = False
        if is_separator(c):
            capture = True
    if not letters:
        return None
    return legalize("".join(letters))


def last_part(text: str) -> str | None:
    """Return the last non-empty ``/``-separated component, if any."""
    parts = [part for part in text.split("/") if part]
    return parts[-1] if parts else None


def _is_dash(c: str) -> bool:
    return c == "-"


def _is_slash(c: str) -> bool:
    return c == "/"


def _is_punctuation(c: str) -> bool:
    return not is_word_char(c)


class NameSequence:
    """Lazy, deterministic sequence of name proposals for one text.

    The finite steps are each tried once; steps that produce nothing are
    skipped. After them the numbered fallback never ends.
    """

    def __init__(self, text: str):
        self.text = text
        self.attempt = 0

    def __iter__(self):
        return self

    def __next__(self) -> str:
        while True:
            self.attempt += 1
            name = self._propose(self.attempt)
            if name:
                return name

    def _propose(self, attempt: int) -> str | None:
        if attempt > _FINITE_STEPS:
            base = abbreviate(self.text, _is_slash) or _FALLBACK_BASE
            return f"{base}_{attempt - 3}"
        if attempt == 5:
            return abbreviate(self.text, _is_slash)

        part = last_part(self.text)
        if part is None:
            return None
        if attempt == 1:
            return abbreviate(part, _is_dash)
        if attempt == 2:
            return abbreviate(part, _is_punctuation)
        if attempt == 3:
            return abbreviate(part, _is_slash)
        return legalize(part)


def var_name(used: Set[str], text: str, max_attempts: int | None = None) -> str:
    """Return the first name proposed for ``text`` that is not in ``used``.

    ``max_attempts`` bounds the search; by default it is unbounded, which
    always succeeds because fallback names never repeat.
    """
    for attempt, name in enumerate(NameSequence(text), start=1):
        if name not in used:
            return name
        if max_attempts is not None and attempt >= max_attempts:
            break
    raise NameExhaustedError(f"No available variable name found for {text!r}")
