# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import logging

import pytest

from smb1protocol.command import Commands, Direction
from smb1protocol.exceptions import TruncatedData, UnsupportedCommand
from smb1protocol.factory import COMMAND_TYPES, build_command, unpack_command
from smb1protocol.lock import SMB1LockingAndXRequest
from smb1protocol.open import SMB1CheckDirectoryRequest
from smb1protocol.read_write import SMB1ReadRawRequest
from smb1protocol.session import SMB1EchoRequest, SMB1NTCancelRequest
from smb1protocol.structure import _get_constants

UNREGISTERED = [
    (Commands.SMB_COM_READ_RAW, Direction.RESPONSE),
    (Commands.SMB_COM_NT_CANCEL, Direction.RESPONSE),
    (Commands.SMB_COM_WRITE_COMPLETE, Direction.REQUEST),
]


class TestBuildCommand:
    def test_build_request(self):
        actual = build_command(Commands.SMB_COM_ECHO, Direction.REQUEST)
        assert isinstance(actual, SMB1EchoRequest)
        assert actual.command_code == Commands.SMB_COM_ECHO
        assert actual.direction == Direction.REQUEST

    def test_build_with_options(self):
        actual = build_command(Commands.SMB_COM_LOCKING_ANDX, Direction.REQUEST, large_files=True, byte_order=">")
        assert isinstance(actual, SMB1LockingAndXRequest)
        assert actual.large_files is True
        assert actual.byte_order == ">"

    def test_build_nt_cancel_request(self):
        actual = build_command(Commands.SMB_COM_NT_CANCEL, Direction.REQUEST)
        assert isinstance(actual, SMB1NTCancelRequest)

    def test_build_read_raw_request(self):
        assert isinstance(build_command(Commands.SMB_COM_READ_RAW, Direction.REQUEST), SMB1ReadRawRequest)

    def test_nt_cancel_response_unsupported(self):
        with pytest.raises(UnsupportedCommand) as err:
            build_command(Commands.SMB_COM_NT_CANCEL, Direction.RESPONSE)
        assert err.value.command == Commands.SMB_COM_NT_CANCEL
        assert err.value.direction == Direction.RESPONSE
        assert str(err.value) == "Command 0xA4 has no body defined in the response direction"

    @pytest.mark.parametrize("command, direction", UNREGISTERED)
    def test_unregistered(self, command, direction):
        assert (command, direction) not in COMMAND_TYPES
        with pytest.raises(UnsupportedCommand):
            build_command(command, direction)

    @pytest.mark.parametrize("command", [0x15, 0x50, 0xFE, Commands.SMB_COM_NO_ANDX_COMMAND])
    def test_unknown_code(self, command):
        with pytest.raises(UnsupportedCommand) as err:
            build_command(command, Direction.REQUEST)
        assert err.value.command == command

    def test_every_code_registered(self):
        codes = [v for k, v in _get_constants(Commands).items() if k != "SMB_COM_NO_ANDX_COMMAND"]
        for command in codes:
            for direction in [Direction.REQUEST, Direction.RESPONSE]:
                if (command, direction) in UNREGISTERED:
                    continue
                command_type = COMMAND_TYPES[(command, direction)]
                assert command_type.COMMAND == command
                assert command_type.DIRECTION == direction

        assert len(COMMAND_TYPES) == len(codes) * 2 - len(UNREGISTERED)

    def test_debug_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="smb1protocol.factory"):
            build_command(Commands.SMB_COM_CHECK_DIRECTORY, Direction.REQUEST)
        assert "Creating SMB1CheckDirectoryRequest for command 0x10 request" in caplog.text


class TestUnpackCommand:
    def test_unpack_request(self):
        data = b"\x00" b"\x06\x00" b"\x04\x5c\x61\x5c\x62\x00" b"\xff\xff"
        actual, consumed = unpack_command(Commands.SMB_COM_CHECK_DIRECTORY, Direction.REQUEST, data)
        assert isinstance(actual, SMB1CheckDirectoryRequest)
        assert consumed == 9
        assert actual["directory_name"].get_text() == "\\a\\b"

    def test_unpack_status_only(self):
        actual, consumed = unpack_command(Commands.SMB_COM_FIND, Direction.RESPONSE, b"\x00\x00\x00")
        assert actual.status_only
        assert consumed == 3

    def test_unpack_big_endian(self):
        actual, consumed = unpack_command(
            Commands.SMB_COM_ECHO, Direction.REQUEST, b"\x01\x00\x03\x00\x04\xde\xad\xbe\xef", byte_order=">"
        )
        assert consumed == 9
        assert actual["echo_count"].get_value() == 3
        assert actual["data"].get_value() == b"\xde\xad\xbe\xef"

    def test_unpack_truncated(self):
        with pytest.raises(TruncatedData) as err:
            unpack_command(Commands.SMB_COM_ECHO, Direction.REQUEST, b"\x01\x00\x03\x00\x04\xde\xad", byte_order=">")
        assert err.value.field == "Data"
        assert err.value.needed == 4
        assert err.value.got == 2
        assert err.value.offset == 5

    def test_unpack_unsupported(self):
        with pytest.raises(UnsupportedCommand):
            unpack_command(Commands.SMB_COM_READ_RAW, Direction.RESPONSE, b"\x01\x02\x03")
