"""
Decoder and disassembler tests.

The decoder is checked on its own, without executing anything.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from chip8.decoder import OPCODES, decode
from chip8.disasm import disassemble, listing
from chip8.errors import DecodeError


class TestDecode:

    def test_fields(self):
        ins = decode(0xD12F)
        assert ins.name == "DRW"
        assert (ins.x, ins.y, ins.n) == (1, 2, 0xF)
        assert ins.kk == 0x2F
        assert ins.nnn == 0x12F
        assert ins.word == 0xD12F

    @pytest.mark.parametrize("word, name", [
        (0x00E0, "CLS"), (0x00EE, "RET"), (0x1ABC, "JP"), (0x2ABC, "CALL"),
        (0x3A12, "SE_Vx_kk"), (0x4A12, "SNE_Vx_kk"), (0x5AB0, "SE_Vx_Vy"),
        (0x6A12, "LD_Vx_kk"), (0x7A12, "ADD_Vx_kk"),
        (0x8AB0, "LD_Vx_Vy"), (0x8AB1, "OR"), (0x8AB2, "AND"), (0x8AB3, "XOR"),
        (0x8AB4, "ADD"), (0x8AB5, "SUB"), (0x8AB6, "SHR"), (0x8AB7, "SUBN"),
        (0x8ABE, "SHL"), (0x9AB0, "SNE_Vx_Vy"), (0xA123, "LD_I"),
        (0xB123, "JP_V0"), (0xCA12, "RND"), (0xDAB5, "DRW"),
        (0xEA9E, "SKP"), (0xEAA1, "SKNP"),
        (0xFA07, "LD_Vx_DT"), (0xFA0A, "WAITKEY"), (0xFA15, "LD_DT_Vx"),
        (0xFA18, "LD_ST_Vx"), (0xFA1E, "ADD_I_Vx"), (0xFA29, "FONT"),
        (0xFA33, "BCD"), (0xFA55, "STORE"), (0xFA65, "LOAD"),
    ])
    def test_every_instruction(self, word, name):
        assert decode(word).name == name

    def test_table_has_no_overlaps(self):
        for word in range(0x10000):
            matches = [name for mask, pattern, name, _ in OPCODES if word & mask == pattern]
            assert len(matches) <= 1, f"{word:04X} matches {matches}"

    @pytest.mark.parametrize("word", [0x0000, 0x0FFF, 0x00E1, 0x5AB1, 0x9ABF, 0x800F, 0xE09F, 0xF000, 0xF0FF])
    def test_unknown(self, word):
        with pytest.raises(DecodeError) as exc:
            decode(word)
        assert exc.value.word == word


class TestDisassemble:

    @pytest.mark.parametrize("word, text", [
        (0x00E0, "CLS"),
        (0x1228, "JP 0x228"),
        (0x6A0F, "LD VA, 0x0F"),
        (0x8AB4, "ADD VA, VB"),
        (0x8A06, "SHR VA"),
        (0xD015, "DRW V0, V1, 5"),
        (0xF30A, "LD V3, K"),
        (0xF155, "LD [I], V1"),
        (0xB200, "JP V0, 0x200"),
        (0x0123, "DW 0x0123"),
    ])
    def test_mnemonics(self, word, text):
        assert disassemble(word) == text

    def test_listing(self):
        lines = list(listing(b"\x00\xE0\x12\x00\x7F"))
        assert lines == [
            "0x200:  00E0  CLS",
            "0x202:  1200  JP 0x200",
            "0x204:  7F    DB 0x7F",
        ]

    def test_listing_origin(self):
        assert list(listing(b"\xA3\x00", origin=0x300)) == ["0x300:  A300  LD I, 0x300"]
