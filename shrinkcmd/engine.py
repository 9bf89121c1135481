"""Compaction engine: greedily replaces repeated substrings with variables."""

import logging

from . import config
from .names import var_name
from .savings import build_savings_table, reference

_log = logging.getLogger("shrinkcmd.engine")

# Substitutions never save less than this, whatever the config says
MIN_SAVINGS_FLOOR = 2


class CompactionEngine:
    """Rewrites one command per call; the used-name set lives for that call only.

    Every iteration rescores the whole command and commits the single best
    candidate, until nothing saves at least ``min_savings`` bytes.
    """

    def __init__(self, min_savings: int | None = None):
        if min_savings is None:
            min_savings = config.get("min_savings")
        if isinstance(min_savings, bool):
            raise ValueError(f"min_savings must be an integer, got {min_savings!r}")
        try:
            min_savings = int(min_savings)
        except (TypeError, ValueError) as e:
            raise ValueError(f"min_savings must be an integer, got {min_savings!r}") from e
        self.min_savings = max(MIN_SAVINGS_FLOOR, min_savings)

    def compact(self, command: str) -> tuple[list[tuple[str, str]], str]:
        """Compact a command.

        Returns (bindings, compacted_command) where bindings is a list of
        (name, value) pairs in the order they were chosen.
        """
        used: set[str] = set()
        bindings: list[tuple[str, str]] = []

        while True:
            table = build_savings_table(used, command)
            if not table:
                break
            candidate, saved = table[0]
            if saved < self.min_savings:
                break

            name = var_name(used, candidate)
            if name in used:
                raise RuntimeError(f"Variable name {name} assigned twice")
            used.add(name)
            bindings.append((name, candidate))
            _log.debug("Bound %s=%r (saves %d bytes)", name, candidate, saved)

            command = command.replace(candidate, reference(name))

        return bindings, command


def format_output(bindings: list[tuple[str, str]], command: str) -> str:
    """Render assignment lines followed by the command, newline-terminated."""
    lines = [f"{name}={value}\n" for name, value in bindings]
    lines.append(command if command.endswith("\n") else command + "\n")
    return "".join(lines)
