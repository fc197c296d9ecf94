# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import pytest

from smb1protocol.exceptions import InvariantViolation, TruncatedData
from smb1protocol.framing import AndXPrelude, DataBlock, ParametersBlock, pack_blocks, unpack_blocks


class TestParametersBlock:
    def test_create_message(self):
        message = ParametersBlock()
        message["words"] = b"\x01\x00\x02\x00"
        expected = b"\x02" b"\x01\x00\x02\x00"

        actual = message.pack()
        assert len(message) == 5
        assert message["word_count"].get_value() == 2
        assert actual == expected


class TestDataBlock:
    def test_create_message(self):
        message = DataBlock()
        message["bytes"] = b"\xaa"
        expected = b"\x01\x00" b"\xaa"

        actual = message.pack()
        assert len(message) == 3
        assert actual == expected

    def test_parse_message(self):
        actual = DataBlock()
        assert actual.unpack(b"\x02\x00\xaa\xbb\xcc") == b"\xcc"
        assert actual["byte_count"].get_value() == 2
        assert actual["bytes"].get_value() == b"\xaa\xbb"


class TestAndXPrelude:
    def test_create_message(self):
        message = AndXPrelude()
        expected = b"\xff\x00\x00\x00"

        actual = message.pack()
        assert len(message) == 4
        assert actual == expected

    def test_parse_message(self):
        actual = AndXPrelude()
        actual.unpack(b"\x75\x00\x48\x00")
        assert actual["andx_command"].get_value() == 0x75
        assert actual["andx_reserved"].get_value() == 0
        assert actual["andx_offset"].get_value() == 0x48


class TestPackBlocks:
    def test_pack_empty(self):
        assert pack_blocks(b"", b"") == b"\x00\x00\x00"

    def test_pack(self):
        actual = pack_blocks(b"\x01\x02", b"\x03\x04\x05")
        assert actual == b"\x01\x01\x02\x03\x00\x03\x04\x05"

    def test_pack_big_endian(self):
        actual = pack_blocks(b"", b"\x03", byte_order=">")
        assert actual == b"\x00\x00\x01\x03"

    def test_pack_odd_parameters(self):
        with pytest.raises(InvariantViolation, match="odd parameter payload"):
            pack_blocks(b"\x01", b"")

    def test_pack_too_many_words(self):
        with pytest.raises(InvariantViolation, match="exceeds the WordCount limit"):
            pack_blocks(b"\x00" * 512, b"")

    def test_pack_too_much_data(self):
        with pytest.raises(InvariantViolation, match="exceeds the ByteCount limit"):
            pack_blocks(b"", b"\x00" * 0x10000)

    def test_pack_limits(self):
        actual = pack_blocks(b"\x00" * 510, b"\x00" * 0xFFFF)
        assert actual[:1] == b"\xff"
        assert actual[511:513] == b"\xff\xff"
        assert len(actual) == 1 + 510 + 2 + 0xFFFF


class TestUnpackBlocks:
    def test_unpack(self):
        actual = unpack_blocks(b"\x01\x01\x02\x03\x00\x03\x04\x05\xff")
        assert actual == (b"\x01\x02", b"\x03\x04\x05", 8)

    def test_unpack_empty(self):
        assert unpack_blocks(b"\x00\x00\x00") == (b"", b"", 3)

    @pytest.mark.parametrize(
        "data, field, needed, got, offset",
        [
            (b"", "WordCount", 1, 0, 0),
            (b"\x02\x00\x00", "Parameters", 4, 2, 1),
            (b"\x00\x01", "ByteCount", 2, 1, 1),
            (b"\x00\x02\x00\xaa", "Data", 2, 1, 3),
        ],
    )
    def test_unpack_truncated(self, data, field, needed, got, offset):
        with pytest.raises(TruncatedData) as err:
            unpack_blocks(data)

        assert err.value.field == field
        assert err.value.needed == needed
        assert err.value.got == got
        assert err.value.offset == offset
