"""CLI entry point: compacts the command read from stdin.

Usage:
    echo 'cp /a/b/c/x /a/b/c/y' | shrinkcmd
    shrinkcmd --dry-run < command.sh    # Stats on stderr, input unchanged
"""

import argparse
import logging
import os
import sys

from shrinkcmd import __version__, config, data_dir
from shrinkcmd.engine import CompactionEngine, format_output

_log = logging.getLogger("shrinkcmd.cli")


def _setup_logging():
    """Write debug logs to <data_dir>/debug.log when debug is enabled."""
    root = logging.getLogger("shrinkcmd")
    root.setLevel(logging.DEBUG)
    if root.handlers:
        return
    if config.get("debug"):
        log_dir = data_dir()
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(log_dir, "debug.log"))
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
        )
        root.addHandler(handler)
    else:
        root.addHandler(logging.NullHandler())


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="shrinkcmd",
        description="Shorten a shell command by moving repeated paths into variables",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show compaction stats on stderr without rewriting the command",
    )
    parser.add_argument("--version", action="version", version=f"shrinkcmd v{__version__}")
    args = parser.parse_args()

    _setup_logging()

    raw = sys.stdin.buffer.read()
    try:
        command = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        print(f"[shrinkcmd] input is not valid UTF-8: {e}", file=sys.stderr)
        sys.exit(1)
    _log.debug("Read %d bytes", len(raw))

    try:
        engine = CompactionEngine()
    except ValueError as e:
        print(f"[shrinkcmd] invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        bindings, compacted = engine.compact(command)
    except RuntimeError as e:  # includes NameExhaustedError
        _log.exception("Compaction failed")
        print(f"[shrinkcmd] internal error: {e}", file=sys.stderr)
        sys.exit(1)

    output = format_output(bindings, compacted)

    if args.dry_run:
        original_len = len(format_output([], command).encode("utf-8"))
        compacted_len = len(output.encode("utf-8"))
        saved = original_len - compacted_len
        ratio = (saved / original_len * 100) if original_len > 0 else 0
        print(
            f"[shrinkcmd dry-run] bindings={len(bindings)} "
            f"original={original_len} compacted={compacted_len} "
            f"saved={saved} ({ratio:.1f}%)",
            file=sys.stderr,
        )
        sys.stdout.buffer.write(raw)
        sys.exit(0)

    sys.stdout.buffer.write(output.encode("utf-8"))


if __name__ == "__main__":
    main()
