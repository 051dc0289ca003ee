"""Tests for the check_board command line."""

from PIL import Image

from check_board import main

from boardio.layout_io import load_board_png, save_board_json
from rules.types import Base, Battlefield, Model


def _write_board(tmp_path):
    board = Battlefield(
        models=[
            Model("a1", 5, 5, Base.circle(0.5), unit_id="alpha"),
            Model("a2", 30, 30, Base.circle(0.5), unit_id="alpha"),
            Model("b1", 50, 5, Base.circle(0.5), unit_id="bravo"),
        ]
    )
    path = str(tmp_path / "board.json")
    save_board_json(board, path)
    return path


def test_coherency_report(tmp_path, capsys):
    assert main([_write_board(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Unit alpha: NOT coherent" in out
    assert "Unit bravo: coherent" in out


def test_sight_on_preset(tmp_path, capsys):
    path = _write_board(tmp_path)
    code = main([path, "--preset", "Layout 8", "--sight", "a1", "b1"])
    assert code == 0
    assert "a1 -> b1:" in capsys.readouterr().out


def test_render_embeds_board(tmp_path):
    out = str(tmp_path / "out.png")
    args = [_write_board(tmp_path), "--render", out, "--ppi", "5"]
    code = main(args + ["--sight", "a1", "b1"])
    assert code == 0
    with Image.open(out) as img:
        assert img.size == (300, 220)
    assert [m.id for m in load_board_png(out).models] == ["a1", "a2", "b1"]


def test_list_presets(capsys):
    assert main(["--list-presets"]) == 0
    out = capsys.readouterr().out
    assert "Layout 1" in out
    assert "Layout 7" in out
    assert "Search and Destroy" in out
    assert "C-4-8-4" in out


def test_errors_go_to_stderr(tmp_path, capsys):
    path = _write_board(tmp_path)
    assert main([path, "--sight", "a1", "nobody"]) == 1
    assert capsys.readouterr().err == "Error: No model with id 'nobody'\n"

    assert main([str(tmp_path / "missing.json")]) == 1
    assert main([path, "--preset", "Layout 99"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_preset_keeps_board_size(tmp_path):
    board = Battlefield(width=48, height=30)
    path = str(tmp_path / "small.json")
    save_board_json(board, path)
    out = str(tmp_path / "out.png")
    args = [path, "--preset", "Layout 1", "--render", out, "--ppi", "5"]
    assert main(args) == 0
    with Image.open(out) as img:
        assert img.size == (240, 150)
    assert load_board_png(out).width == 48


def test_deployment(tmp_path, capsys):
    board = Battlefield(
        models=[
            Model("p1", 10, 40, Base.circle(0.5), player_id=1),
            Model("p2", 10, 40, Base.circle(0.5), player_id=2),
        ]
    )
    path = str(tmp_path / "board.json")
    save_board_json(board, path)
    out = str(tmp_path / "out.png")
    args = [path, "--deployment", "Dawn of War", "--render", out]
    assert main(args + ["--ppi", "5"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "Deployment Dawn of War: 1 model outside their zone" in lines
    assert "  p2 (player 2)" in lines

    assert main([path, "--deployment", "Pitched Battle"]) == 1
    assert "Unknown deployment" in capsys.readouterr().err
