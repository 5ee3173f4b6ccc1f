import json

import pytest

from lpsimplex.cli import load_model, main, model_from_config


def write_model(tmp_path, **cfg):
    path = tmp_path / "lp.json"
    path.write_text(json.dumps(cfg))
    return str(path)


def test_load_model_converts_decimals(tmp_path):
    path = tmp_path / "lp.json"
    path.write_text('{"c": [0.1, 2], "A": [[1.5, 0]], "b": [3.25]}')
    standard = load_model(str(path))
    assert standard.c == (0.1, 2.0)
    assert standard.A == ((1.5, 0.0),)
    assert standard.b == (3.25,)


def test_model_from_config_rejects_bad_input():
    with pytest.raises(ValueError, match="missing"):
        model_from_config({"c": [1], "A": [[1]]})
    with pytest.raises(ValueError):
        model_from_config([1, 2, 3])
    with pytest.raises(ValueError):
        model_from_config({"c": [1, 2], "A": [[1]], "b": [1]})


def test_main_prints_result(tmp_path, capsys):
    path = write_model(tmp_path, c=[3, 1, 2], A=[[1, 1, 3], [2, 2, 5], [4, 1, 2]], b=[30, 24, 36])
    assert main([path, "--no-verbose"]) == 0
    out = capsys.readouterr().out
    assert "Status: feasible" in out
    assert "Optimal value: 28" in out
    assert "Solution x: ['8', '4', '0']" in out
    assert "Phase II" not in out


def test_main_verbose_trace(tmp_path, capsys):
    path = write_model(tmp_path, c=[1, -1, 1], A=[[2, -1, 2], [2, -3, 1], [-1, 1, -2]], b=[4, -5, -1])
    main([path])
    out = capsys.readouterr().out
    assert "=== Phase I ===" in out
    assert "Phase II: final tableau" in out
    assert "Optimal value: 3/5" in out
    assert "Solution x: ['0', '14/5', '17/5']" in out


def test_main_reports_statuses(tmp_path, capsys):
    infeasible = write_model(tmp_path, c=[3, 1], A=[[1, -1], [-1, -1], [2, 1]], b=[-1, -3, 2])
    main([infeasible, "--no-verbose"])
    assert "Status: infeasible" in capsys.readouterr().out

    unbounded = write_model(tmp_path, c=[1, 3, -1], A=[[2, 2, -1], [3, -2, 1], [1, -3, 1]], b=[10, 10, 10])
    main([unbounded, "--no-verbose", "--eps", "1e-9"])
    out = capsys.readouterr().out
    assert "Status: unbounded" in out
    assert "Optimal value" not in out


def test_main_notes_alternate_optimum(tmp_path, capsys):
    path = write_model(tmp_path, c=[1, 1], A=[[1, 1]], b=[1])
    main([path, "--no-verbose"])
    out = capsys.readouterr().out
    assert "alternate optimal" in out
    assert "['x2']" in out
