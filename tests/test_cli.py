"""
Command line tests. Nothing here opens a window.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from chip8.__main__ import EXIT_LOAD_ERROR, EXIT_OK, get_args, main


def test_defaults():
    args = get_args(["game.ch8"])
    assert args.rom == "game.ch8"
    assert args.cpu_hz == 600
    assert args.scale == 10
    assert not args.disassemble


def test_rom_is_required():
    with pytest.raises(SystemExit) as exc:
        get_args([])
    assert exc.value.code != 0


def test_rejects_non_positive_rate():
    with pytest.raises(SystemExit):
        get_args(["game.ch8", "--cpu-hz", "0"])


def test_missing_rom_exit_code(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ch8")]) == EXIT_LOAD_ERROR
    assert "Failure during ROM open/read" in capsys.readouterr().err


def test_oversized_rom_exit_code(tmp_path):
    path = tmp_path / "big.ch8"
    path.write_bytes(b"\x00" * 4000)
    assert main([str(path)]) == EXIT_LOAD_ERROR


def test_disassemble(tmp_path, capsys):
    path = tmp_path / "loop.ch8"
    path.write_bytes(b"\x00\xE0\x12\x02")
    assert main([str(path), "--disassemble"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == [
        "0x200:  00E0  CLS",
        "0x202:  1202  JP 0x202",
    ]
