import pytest

from armplanner.cli import PLANNERS, build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.planner == "optimization"
    assert args.step == 0.1
    assert args.obstacles is False
    assert args.no_display is False


def test_parser_rejects_unknown_planner():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--planner", "rrt"])


def test_parser_accepts_all_planners():
    for name in PLANNERS:
        assert build_parser().parse_args(["--planner", name]).planner == name


def test_main_newton_without_display(capsys):
    status = main(["--no-display", "--planner", "newton"])
    out = capsys.readouterr().out
    assert status == 0
    assert "Total q length:" in out
    assert "Program finished" in out


def test_main_optimization_without_display(capsys):
    status = main(["--no-display", "--step", "0.5"])
    out = capsys.readouterr().out
    assert status == 0
    assert "Total q length:" in out


def test_main_rejects_non_positive_step(capsys):
    assert main(["--no-display", "--step", "0"]) == 2
    assert "step must be positive" in capsys.readouterr().out