import importlib
import sys

import pytest

from undercroft.dungeon import MAXCOLS, MAXROWS

from dungeon_test_utils import level_from_lines


@pytest.fixture()
def run_module():
    # Clean import each time; run.py reads VERSION once at import.
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def _map_lines(out):
    return [line for line in out.splitlines() if not line.startswith("level=")]


def test_cli_version(run_module, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run_module.parse_args(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == f"Undercroft {run_module.__version__}"


def test_defaults_to_map(run_module):
    args = run_module.parse_args([])
    assert args.command == "map"
    assert args.level == 0


def test_walk_args(run_module):
    args = run_module.parse_args(["walk", "--turns", "4", "--goblins", "1", "--seed", "3", "--no-color"])
    assert (args.command, args.turns, args.goblins, args.seed, args.no_color) == ("walk", 4, 1, 3, True)


def test_map_prints_static_level(run_module, capsys, monkeypatch):
    monkeypatch.setenv("UNDERCROFT_LEVEL_COUNT", "1")
    assert run_module.main(["map", "--seed", "1", "--no-color"]) == 0
    lines = _map_lines(capsys.readouterr().out)
    assert len(lines) == MAXROWS
    assert all(len(line) == MAXCOLS for line in lines)
    # Border rows are never refined.
    assert lines[0] == "#" * MAXCOLS


def test_map_level_out_of_range(run_module, capsys, monkeypatch):
    monkeypatch.setenv("UNDERCROFT_LEVEL_COUNT", "1")
    assert run_module.main(["map", "--level", "5", "--no-color"]) == 1
    assert "out of range" in capsys.readouterr().err


def test_missing_static_level_is_fatal(run_module, capsys, monkeypatch, tmp_path):
    calls = []
    missing = tmp_path / "gone"
    monkeypatch.setenv("UNDERCROFT_STATIC_LEVEL", str(missing))
    monkeypatch.setattr(run_module.colorama, "deinit", lambda: calls.append(True))
    with pytest.raises(SystemExit) as excinfo:
        run_module.main(["map", "--no-color"])
    assert excinfo.value.code == 1
    assert calls == [True]
    assert f"{missing}: " in capsys.readouterr().err


def test_env_file_loaded(run_module, capsys, tmp_path):
    env = tmp_path / "test.env"
    env.write_text("UNDERCROFT_LEVEL_COUNT=1\nUNDERCROFT_SEED=4\n", encoding="utf-8")
    assert run_module.main(["--env-file", str(env), "map", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "levels=1" in out
    assert "seed=4" in out


def test_walk_reports_turns(run_module, capsys, monkeypatch):
    monkeypatch.setenv("UNDERCROFT_LEVEL_COUNT", "1")
    assert run_module.main(["walk", "--turns", "3", "--goblins", "2", "--seed", "8", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "Turns: 3" in out
    assert "@" in "\n".join(_map_lines(out)[:MAXROWS])
    assert out.count(" goblin ") == 2
    assert " human " in out


def test_render_draws_creatures_over_tiles(run_module):
    from undercroft.models import CreatureRoster, Race
    from undercroft.services.movement import place_at_stair

    level = level_from_lines(["#####", "#.<.#", "#####"])
    roster = CreatureRoster()
    place_at_stair(roster.spawn(Race.GOBLIN), level, up=True)
    assert run_module.render(level, roster) == ["#####", "#.g.#", "#####"]
    assert run_module.render(level) == ["#####", "#.<.#", "#####"]
