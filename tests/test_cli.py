import pytest

from blockdrop.__main__ import build_parser, format_grid, main


def test_ascii_frame_shows_active_piece(capsys):
    main(["--ascii", "--seed", "1", "--log-level", "warning"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 20
    assert all(len(line) == 12 for line in lines)
    assert sum(line.count("#") for line in lines) == 4


def test_format_grid():
    assert format_grid([[0, 1], [2, 0]]) == ".#\n#."


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.drop_interval == 1000
    assert not args.ascii


def test_invalid_interval_is_rejected():
    with pytest.raises(ValueError):
        main(["--ascii", "--drop-interval", "0"])
