# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from smb1protocol.smb_string import SMBString
from smb1protocol.tree import (
    OptionalSupport,
    ServiceType,
    SMB1QueryInformationDiskRequest,
    SMB1QueryInformationDiskResponse,
    SMB1TreeConnectAndXRequest,
    SMB1TreeConnectAndXResponse,
    SMB1TreeConnectRequest,
    SMB1TreeConnectResponse,
    SMB1TreeDisconnectRequest,
    TreeConnectFlags,
)


class TestSMB1TreeConnectRequest:
    DATA = b"\x00" b"\x0d\x00" b"\x04\x5c\x5c\x53\x5c\x41\x00" b"\x04\x00" b"\x04\x41\x3a\x00"

    def test_create_message(self):
        message = SMB1TreeConnectRequest()
        message["path"] = "\\\\S\\A"
        message["service"] = ServiceType.DISK

        actual = message.pack()
        assert len(message) == 16
        assert actual == self.DATA

    def test_parse_message(self):
        actual = SMB1TreeConnectRequest()
        actual.unpack(self.DATA)
        assert actual["path"].get_value() == SMBString.string("\\\\S\\A")
        assert actual["password"].get_text() == ""
        assert actual["service"].get_text() == "A:"


class TestSMB1TreeConnectResponse:
    def test_parse_message(self):
        actual = SMB1TreeConnectResponse()
        actual.unpack(b"\x02" b"\x04\x11" b"\x01\x00" b"\x00\x00")
        assert actual["max_buffer_size"].get_value() == 4356
        assert actual["tid"].get_value() == 1


class TestSMB1TreeConnectAndXRequest:
    DATA = (
        b"\x04"
        b"\xff\x00\x00\x00"
        b"\x08\x00"
        b"\x01\x00"
        b"\x10\x00"
        b"\x00"
        b"\x5c\x5c\x53\x5c\x49\x50\x43\x24\x00"
        b"\x3f\x3f\x3f\x3f\x3f\x00"
    )

    def test_create_message(self):
        message = SMB1TreeConnectAndXRequest()
        message["flags"] = TreeConnectFlags.TREE_CONNECT_ANDX_EXTENDED_RESPONSE
        message["password"] = b"\x00"
        message["path"] = "\\\\S\\IPC$"
        message["service"] = ServiceType.ANY

        actual = message.pack()
        assert len(message) == 27
        assert message["password_length"].get_value() == 1
        assert actual == self.DATA

    def test_create_message_unicode(self):
        message = SMB1TreeConnectAndXRequest(unicode=True)
        message["path"] = "\\"
        message["service"] = ServiceType.DISK
        expected_data = b"\x08\x00" b"\x00" b"\x5c\x00\x00\x00" b"\x41\x3a\x00"

        actual = message.pack()
        assert message["pad"].get_value() == b"\x00"
        assert actual[9:] == expected_data

    def test_parse_message(self):
        actual = SMB1TreeConnectAndXRequest()
        assert actual.unpack(self.DATA) == b""
        assert actual["flags"].has_flag(TreeConnectFlags.TREE_CONNECT_ANDX_EXTENDED_RESPONSE)
        assert actual["password_length"].get_value() == 1
        assert actual["password"].get_value() == b"\x00"
        assert actual["path"].get_value() == "\\\\S\\IPC$"
        assert actual["service"].get_value() == ServiceType.ANY


class TestSMB1TreeConnectAndXResponse:
    def test_create_message(self):
        message = SMB1TreeConnectAndXResponse()
        message["optional_support"] = OptionalSupport.SMB_SUPPORT_SEARCH_BITS
        message["service"] = ServiceType.NAMED_PIPE
        expected = b"\x03" b"\xff\x00\x00\x00" b"\x01\x00" b"\x05\x00" b"\x49\x50\x43\x00" b"\x00"

        actual = message.pack()
        assert len(message) == 14
        assert actual == expected

    def test_parse_message_unicode(self):
        actual = SMB1TreeConnectAndXResponse(unicode=True)
        actual.unpack(
            b"\x03"
            b"\xff\x00\x00\x00"
            b"\x03\x00"
            b"\x0d\x00"
            b"\x41\x3a\x00"
            b"\x4e\x00\x54\x00\x46\x00\x53\x00"
            b"\x00\x00"
        )
        assert actual["optional_support"].has_flag(OptionalSupport.SMB_SHARE_IS_IN_DFS)
        assert actual["service"].get_value() == "A:"
        assert actual["pad"].get_value() == b""
        assert actual["native_file_system"].get_value() == "NTFS"


class TestSMB1TreeDisconnectRequest:
    def test_create_message(self):
        assert SMB1TreeDisconnectRequest().pack() == b"\x00\x00\x00"


class TestSMB1QueryInformationDisk:
    def test_create_message(self):
        assert SMB1QueryInformationDiskRequest().pack() == b"\x00\x00\x00"

    def test_parse_message(self):
        actual = SMB1QueryInformationDiskResponse()
        actual.unpack(
            b"\x05"
            b"\x64\x00"
            b"\x08\x00"
            b"\x00\x02"
            b"\x32\x00"
            b"\x00\x00"
            b"\x00\x00"
        )
        assert actual["total_units"].get_value() == 100
        assert actual["blocks_per_unit"].get_value() == 8
        assert actual["block_size"].get_value() == 512
        assert actual["free_units"].get_value() == 50
        assert actual.total_size == 409600
        assert actual.free_size == 204800
