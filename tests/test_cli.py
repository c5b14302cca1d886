# tests/test_cli.py
import pytest

from conftest import build_fortunes
from minifortune.cli import VERSION, main
from minifortune.paths import DEBUG_ENV, FORTUNE_PATH_ENV

WISDOM = ["Look before you leap.", "He who hesitates is lost."]


@pytest.fixture
def wisdom(fortune_dir):
    build_fortunes(fortune_dir, "wisdom", WISDOM)
    return fortune_dir / "wisdom"


def test_prints_fortune(wisdom, capsys):
    assert main([str(wisdom), "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("\n")
    assert out.rstrip("\n") in WISDOM


def test_seed_is_reproducible(wisdom, capsys):
    main([str(wisdom), "--seed", "42"])
    first = capsys.readouterr().out
    main([str(wisdom), "--seed", "42"])
    assert capsys.readouterr().out == first


def test_dump_header(wisdom, capsys):
    assert main([str(wisdom), "--dump-header"]) == 0
    out = capsys.readouterr().out
    assert "wisdom.dat" in out
    assert "str_version: 2" in out
    assert "str_numstr: 2" in out


def test_error_exit_status(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    err = capsys.readouterr().err
    assert err.startswith("minifortune: ")


def test_no_fortunes_installed(monkeypatch, capsys):
    monkeypatch.delenv(FORTUNE_PATH_ENV, raising=False)
    monkeypatch.setattr("minifortune.paths.DEFAULT_FORTUNE_DIR", "/nonexistent/minifortune/fortunes")
    assert main([]) == 0
    assert "no fortunes installed" in capsys.readouterr().out


def test_env_fallback(wisdom, monkeypatch, capsys):
    monkeypatch.setenv(FORTUNE_PATH_ENV, str(wisdom))
    assert main(["--seed", "3"]) == 0
    assert capsys.readouterr().out.rstrip("\n") in WISDOM


def test_debug_trace_goes_to_stderr(wisdom, monkeypatch, capsys):
    monkeypatch.setenv(DEBUG_ENV, "1")
    main([str(wisdom), "--seed", "5"])
    captured = capsys.readouterr()
    assert "minifortune: random seed 5" in captured.err
    assert captured.out.rstrip("\n") in WISDOM


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--help"])
    assert ei.value.code == 0
    assert "fortune" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--version"])
    assert ei.value.code == 0
    assert VERSION in capsys.readouterr().out


def test_latin1_fortune_is_not_replaced(fortune_dir, capsys):
    build_fortunes(fortune_dir, "latin", [b"Caf\xe9 au lait"])
    assert main([str(fortune_dir / "latin"), "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert out == "Café au lait\n"
    assert "�" not in out


def test_dump_header_from_fallback_list_skips_missing_entry(wisdom, tmp_path, monkeypatch, capsys):
    monkeypatch.setenv(FORTUNE_PATH_ENV, f"{tmp_path / 'gone'}:{wisdom}")
    for seed in range(10):
        assert main(["--dump-header", "--seed", str(seed)]) == 0
        assert "wisdom.dat" in capsys.readouterr().out
