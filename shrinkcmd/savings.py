"""Candidate enumeration and savings scoring."""

from collections import Counter
from collections.abc import Set

from .names import var_name
from .tokenizer import fragments, split_points


def reference(name: str) -> str:
    """Shell reference that replaces a candidate in the command."""
    return f"${{{name}}}"


# Characters a reference adds around the bare name: "$", "{" and "}"
REFERENCE_OVERHEAD = len(reference(""))


def count_candidates(command: str) -> Counter:
    """Count every word-aligned substring of every fragment.

    Substrings never start or end in the middle of an alphanumeric run,
    so ``home/user`` is a candidate of ``/home/user/x`` but ``ome`` is not.
    """
    counts = Counter()
    for fragment in fragments(command):
        points = split_points(fragment)
        for i, start in enumerate(points):
            for end in points[i + 1 :]:
                counts[fragment[start:end]] += 1
    return counts


def savings(candidate: str, name: str, count: int) -> int:
    """Bytes saved by replacing ``count`` occurrences of candidate with name."""
    return count * (len(candidate.encode("utf-8")) - len(name) - REFERENCE_OVERHEAD)


def build_savings_table(used: Set[str], command: str) -> list[tuple[str, int]]:
    """Score every repeated candidate against the names still available.

    Sorted by savings, highest first; equal savings are ordered by
    candidate text so the table is reproducible.
    """
    table = []
    for candidate, count in count_candidates(command).items():
        if count < 2:
            continue
        name = var_name(used, candidate)
        table.append((candidate, savings(candidate, name, count)))
    table.sort(key=lambda entry: (-entry[1], entry[0]))
    return table
