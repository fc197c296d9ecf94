# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import pytest

from smb1protocol.command import Commands, Direction
from smb1protocol.exceptions import MalformedData, TruncatedData
from smb1protocol.lock import SMB1LockByteRangeRequest
from smb1protocol.read_write import SMB1ReadAndXResponse
from smb1protocol.session import SMB1EchoRequest, SMB1EchoResponse, SMB1SessionSetupAndXResponse
from smb1protocol.tree import SMB1TreeDisconnectResponse


class TestSMB1Command:
    def test_properties(self):
        message = SMB1EchoRequest()
        assert message.command_code == Commands.SMB_COM_ECHO
        assert message.direction == Direction.REQUEST
        assert not message.is_andx
        assert message.andx_command is None
        assert message.andx_offset is None
        assert repr(message) == "<SMB1EchoRequest 0x2B request>"

    def test_andx_properties(self):
        message = SMB1ReadAndXResponse()
        assert message.is_andx
        assert message.andx_command == Commands.SMB_COM_NO_ANDX_COMMAND
        assert message.andx_offset == 0

        message.andx_command = Commands.SMB_COM_CLOSE
        message.andx_offset = 0x40
        assert message.pack()[:5] == b"\x0c\x04\x00\x40\x00"

    def test_parse_andx_prelude(self):
        actual = SMB1SessionSetupAndXResponse()
        actual.unpack(b"\x03" b"\x75\x00\x50\x00" b"\x00\x00" b"\x03\x00" b"\x00\x00\x00")
        assert actual.andx_command == Commands.SMB_COM_TREE_CONNECT_ANDX
        assert actual.andx_offset == 0x50

    def test_unpack_returns_remaining(self):
        actual = SMB1EchoRequest()
        remaining = actual.unpack(b"\x01\x01\x00\x01\x00\xaa\xbb\xcc")
        assert remaining == b"\xbb\xcc"
        assert actual.byte_count == 1
        assert actual["data"].get_value() == b"\xaa"

    def test_unpack_resets_fields(self):
        actual = SMB1EchoRequest()
        actual["data"] = b"\x01\x02"
        actual.unpack(b"\x01\x01\x00\x00\x00")
        assert actual["data"].get_value() == b""

    def test_unpack_parameters_left_over(self):
        actual = SMB1LockByteRangeRequest()
        with pytest.raises(MalformedData) as err:
            actual.unpack(b"\x06" + b"\x00" * 12 + b"\x00\x00")
        assert err.value.field == "parameters"
        assert err.value.reason == "2 bytes remain after the last field"

    def test_unpack_data_left_over(self):
        actual = SMB1LockByteRangeRequest()
        with pytest.raises(MalformedData) as err:
            actual.unpack(b"\x05" + b"\x00" * 10 + b"\x01\x00\x00")
        assert err.value.field == "data"

    def test_unpack_parameters_too_short(self):
        actual = SMB1LockByteRangeRequest()
        with pytest.raises(TruncatedData) as err:
            actual.unpack(b"\x01\x00\x00\x00\x00")
        assert err.value.field == "count_of_bytes_to_lock"
        assert err.value.needed == 4
        assert err.value.got == 0
        assert err.value.offset == 3


class TestStatusOnly:
    def test_parse_response(self):
        actual = SMB1EchoResponse()
        assert actual.unpack(b"\x00\x00\x00\xff") == b"\xff"
        assert actual.status_only
        assert actual["sequence_number"].get_value() == 0
        assert actual.pack() == b"\x00\x00\x00"
        assert len(actual) == 3

    def test_set_field_clears_status_only(self):
        actual = SMB1EchoResponse()
        actual.unpack(b"\x00\x00\x00")
        actual["sequence_number"] = 1
        assert not actual.status_only
        assert actual.pack() == b"\x01\x01\x00\x00\x00"

    def test_empty_response(self):
        actual = SMB1TreeDisconnectResponse()
        actual.unpack(b"\x00\x00\x00")
        assert actual.status_only
        assert actual.pack() == b"\x00\x00\x00"

    def test_parse_empty_request(self):
        actual = SMB1EchoRequest()
        assert actual.unpack(b"\x00\x00\x00\xff") == b"\xff"
        assert actual.status_only
        assert actual["echo_count"].get_value() == 0
        assert actual["data"].get_value() == b""
        assert actual.pack() == b"\x00\x00\x00"

    def test_parse_request_missing_data(self):
        actual = SMB1EchoRequest()
        with pytest.raises(TruncatedData) as err:
            actual.unpack(b"\x01\x00\x00")
        assert err.value.field == "ByteCount"


class TestAlignmentPadField:
    def test_create_message_unicode(self):
        message = SMB1SessionSetupAndXResponse(unicode=True)
        message["native_os"] = "ab"
        expected = (
            b"\x03"
            b"\xff\x00\x00\x00"
            b"\x00\x00"
            b"\x0b\x00"
            b"\x00"
            b"\x61\x00\x62\x00\x00\x00"
            b"\x00\x00"
            b"\x00\x00"
        )

        actual = message.pack()
        assert len(message) == 20
        assert message["pad"].get_value() == b"\x00"
        assert message.get_data_position("native_os") == 42
        assert actual == expected

    def test_create_message_even_offset(self):
        message = SMB1SessionSetupAndXResponse(unicode=True, body_offset=33)
        message["native_os"] = "ab"
        assert message["pad"].get_value() == b""
        assert message.pack()[9:] == b"\x61\x00\x62\x00\x00\x00\x00\x00\x00\x00"

    def test_create_message_oem(self):
        message = SMB1SessionSetupAndXResponse()
        message["native_os"] = "ab"
        assert message["pad"].get_value() == b""
        assert message.pack()[9:] == b"ab\x00\x00\x00"

    def test_parse_message_unicode(self):
        actual = SMB1SessionSetupAndXResponse(unicode=True)
        actual.unpack(
            b"\x03"
            b"\xff\x00\x00\x00"
            b"\x01\x00"
            b"\x0b\x00"
            b"\x00"
            b"\x61\x00\x62\x00\x00\x00"
            b"\x00\x00"
            b"\x00\x00"
        )
        assert actual["action"].get_value() == 1
        assert actual["pad"].get_value() == b"\x00"
        assert actual["native_os"].get_value() == "ab"
        assert actual["native_lan_man"].get_value() == ""
        assert actual["primary_domain"].get_value() == ""


class TestDataPosition:
    def test_create_message(self):
        message = SMB1ReadAndXResponse()
        message["data"] = b"\x01\x02"
        expected = (
            b"\x0c"
            b"\xff\x00\x00\x00"
            b"\x00\x00"
            b"\x00\x00"
            b"\x00\x00"
            b"\x02\x00"
            b"\x3b\x00"
            b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
            b"\x02\x00"
            b"\x01\x02"
        )

        actual = message.pack()
        assert message["data_offset"].get_value() == 59
        assert actual == expected

    def test_body_offset(self):
        message = SMB1ReadAndXResponse(body_offset=100)
        assert message.get_data_position("data") == 127
