"""Tests for the compaction engine."""

import json
import os
import re
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shrinkcmd import config
from shrinkcmd.engine import CompactionEngine, format_output
from shrinkcmd.savings import build_savings_table, reference

SCENARIO_A = "cp /home/user/project/src/main.rs /home/user/project/build/main.rs"

COMMANDS = [
    SCENARIO_A,
    "ls /usr/local/lib/python3/site-packages /usr/local/lib/python3/dist-packages "
    "/usr/local/lib/python3",
    "FOO=/opt/app/bin BAR=/opt/app/lib run /opt/app/bin/x --config=/opt/app/etc/x.conf",
    "gcc -I/src/vendor/include -L/src/vendor/lib -o /src/out/app /src/main.c /src/util.c",
    'rsync -a "/mnt/backup/2024/photos/" "/mnt/backup/2024/videos/"; ls /mnt/backup/2024',
]

LEGAL_NAME = re.compile(r"[A-Z_][A-Z0-9_]*")


def _expand(bindings, command):
    """Undo compaction by substituting values back, latest binding first."""
    for name, value in reversed(bindings):
        command = command.replace(reference(name), value)
    return command


class TestCompactionEngine:
    def setup_method(self):
        self.engine = CompactionEngine(min_savings=2)

    def test_scenario_a(self):
        bindings, command = self.engine.compact(SCENARIO_A)
        assert bindings == [("P", "/home/user/project/"), ("M", "main.rs")]
        assert command == "cp ${P}src/${M} ${P}build/${M}"
        assert "/home/user/project" not in command

    def test_no_repeats_unchanged(self):
        bindings, command = self.engine.compact("echo hello world")
        assert bindings == []
        assert command == "echo hello world"

    def test_empty_input(self):
        assert self.engine.compact("") == ([], "")

    def test_own_output_is_fixed_point(self):
        bindings, command = self.engine.compact(SCENARIO_A)
        rendered = format_output(bindings, command)
        again, command_again = self.engine.compact(rendered)
        assert again == []
        assert command_again == rendered

    @pytest.mark.parametrize("original", COMMANDS)
    def test_round_trip(self, original):
        bindings, command = self.engine.compact(original)
        assert _expand(bindings, command) == original

    @pytest.mark.parametrize("original", COMMANDS)
    def test_names_legal_and_unique(self, original):
        bindings, _ = self.engine.compact(original)
        names = [name for name, _ in bindings]
        assert len(names) == len(set(names))
        for name in names:
            assert LEGAL_NAME.fullmatch(name)

    @pytest.mark.parametrize("original", COMMANDS)
    def test_every_substitution_saves_at_least_two(self, original):
        bindings, _ = self.engine.compact(original)
        used = set()
        command = original
        for name, value in bindings:
            best, saved = build_savings_table(used, command)[0]
            assert best == value
            assert saved >= 2
            used.add(name)
            command = command.replace(value, reference(name))

    def test_replaced_text_gone_after_each_step(self):
        bindings, command = self.engine.compact(COMMANDS[1])
        assert bindings
        first_value = bindings[0][1]
        assert first_value not in command

    def test_assignment_target_never_bound(self):
        bindings, _ = self.engine.compact("FOO=/srv/www/site FOO=/srv/www/site")
        assert all(value != "FOO" for _, value in bindings)
        assert bindings[0][1] == "/srv/www/site"

    def test_high_threshold_disables_compaction(self):
        bindings, command = CompactionEngine(min_savings=100).compact(SCENARIO_A)
        assert bindings == []
        assert command == SCENARIO_A

    def test_negative_threshold_clamped(self):
        engine = CompactionEngine(min_savings=-50)
        assert engine.min_savings == 2
        bindings, command = engine.compact(SCENARIO_A)
        assert bindings == [("P", "/home/user/project/"), ("M", "main.rs")]
        assert command == "cp ${P}src/${M} ${P}build/${M}"

    def test_numeric_string_threshold_accepted(self):
        assert CompactionEngine(min_savings="5").min_savings == 5

    @pytest.mark.parametrize("value", ["lots", "", True, [3]])
    def test_non_integer_threshold_rejected(self, value):
        with pytest.raises(ValueError, match="min_savings"):
            CompactionEngine(min_savings=value)

    def test_string_threshold_from_config_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("SHRINKCMD_MIN_SAVINGS", raising=False)
        config_dir = tmp_path / ".shrinkcmd"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"min_savings": "5"}))
        config.reload()
        try:
            assert CompactionEngine().min_savings == 5
        finally:
            config.reload()

    def test_threshold_from_config(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("SHRINKCMD_MIN_SAVINGS", "1000")
        config.reload()
        try:
            assert CompactionEngine().min_savings == 1000
        finally:
            config.reload()


class TestFormatOutput:
    def test_assignments_then_command(self):
        out = format_output([("P", "/a/b/"), ("M", "x.rs")], "cp ${P}${M} .")
        assert out == "P=/a/b/\nM=x.rs\ncp ${P}${M} .\n"

    def test_trailing_newline_not_doubled(self):
        assert format_output([], "ls\n") == "ls\n"
