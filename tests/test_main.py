import sys

import pytest

from groovy_ca.main import main


def _run_cli(monkeypatch, capsys, *argv):
    monkeypatch.setattr(sys, "argv", ["groovy-ca", *argv])
    main()
    return capsys.readouterr().out


def test_table_110(monkeypatch, capsys):
    out = _run_cli(monkeypatch, capsys, "table", "110")
    assert "Rule 110" in out
    assert "001 -> 1" in out
    assert "111 -> 0" in out


def test_table_life(monkeypatch, capsys):
    out = _run_cli(monkeypatch, capsys, "table", "B36/S23")
    assert "B36/S23" in out
    assert "Survival: [2, 3]" in out


def test_run_single_cell(monkeypatch, capsys):
    out = _run_cli(monkeypatch, capsys, "run", "110", "--width", "31", "--steps", "5", "--init", "single")
    assert "Running Rule 110" in out
    assert "rho (derivative density)" in out
    assert "Second-order density" in out


def test_run_verbose(monkeypatch, capsys):
    out = _run_cli(monkeypatch, capsys, "run", "30", "--width", "16", "--steps", "3", "--seed", "1", "-v")
    assert out.count("\n0     ") == 1


def test_aware(monkeypatch, capsys):
    out = _run_cli(monkeypatch, capsys, "aware", "110", "-b", "stabilize",
                   "--width", "20", "--steps", "4", "--seed", "2")
    assert "shared history" in out
    assert "Second-order density" not in out


def test_life(monkeypatch, capsys):
    out = _run_cli(monkeypatch, capsys, "life", "B3/S23", "--grid-size", "12", "--steps", "3", "--seed", "0")
    assert "Grid size: 12x12" in out
    assert "Groovy density" in out


def test_classes(monkeypatch, capsys):
    out = _run_cli(monkeypatch, capsys, "classes", "90", "110", "--width", "20", "--steps", "5", "--seed", "4")
    lines = [line for line in out.splitlines() if line.startswith(("90 ", "110 "))]
    assert len(lines) == 2
    assert lines[0].split()[2] == "0.0000"  # rule 90 is linear


@pytest.mark.parametrize(
    "argv",
    [
        ("run", "300", "--steps", "2"),
        ("table", "B9/S2"),
        ("life", "Q3"),
        ("run", "--steps", "0"),
        (),
    ],
)
def test_errors_exit(monkeypatch, capsys, argv):
    monkeypatch.setattr(sys, "argv", ["groovy-ca", *argv])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
