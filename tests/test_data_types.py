# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from datetime import date, datetime, timezone

import pytest

from smb1protocol.data_types import (
    DirectoryInformation,
    FileAttributes,
    LockingAndXRange32,
    LockingAndXRange64,
    ResumeKey,
    SMBDate,
    SMBDateField,
    SMBTime,
    SMBTimeField,
    UTimeField,
)
from smb1protocol.exceptions import InvariantViolation


class TestSMBDate:
    def test_to_int(self):
        assert SMBDate(2020, 3, 15).to_int() == 0x506F

    def test_from_int(self):
        actual = SMBDate.from_int(0x506F)
        assert actual == SMBDate(2020, 3, 15)
        assert actual.to_date() == date(2020, 3, 15)

    def test_zero(self):
        assert SMBDate.from_int(0) == SMBDate(1980, 0, 0)

    def test_out_of_range(self):
        with pytest.raises(InvariantViolation, match="cannot be represented as an SMB_DATE"):
            SMBDate(1979, 1, 1).to_int()


class TestSMBTime:
    def test_to_int(self):
        assert SMBTime(13, 45, 30).to_int() == 0x6DAF

    def test_from_int(self):
        assert SMBTime.from_int(0x6DAF) == SMBTime(13, 45, 30)

    def test_odd_seconds_are_truncated(self):
        assert SMBTime.from_int(SMBTime(0, 0, 31).to_int()) == SMBTime(0, 0, 30)

    def test_out_of_range(self):
        with pytest.raises(InvariantViolation, match="cannot be represented as an SMB_TIME"):
            SMBTime(32, 0, 0).to_int()


class TestSMBDateTimeFields:
    def test_date_field(self):
        field = SMBDateField()
        field.set_value(date(2020, 3, 15))
        assert field.pack() == b"\x6f\x50"
        assert str(field) == "2020-03-15"

        field.unpack(b"\x6f\x50")
        assert field.get_value() == SMBDate(2020, 3, 15)

    def test_time_field(self):
        field = SMBTimeField()
        field.set_value(datetime(2020, 3, 15, 13, 45, 30))
        assert field.pack() == b"\xaf\x6d"
        assert str(field) == "13:45:30"

        field.set_value(SMBTime(0, 0, 2))
        assert field.pack() == b"\x01\x00"


class TestUTimeField:
    def test_create_message(self):
        field = UTimeField()
        field.set_value(datetime(2020, 1, 1, tzinfo=timezone.utc))
        assert len(field) == 4
        assert field.pack() == b"\x00\xe1\x0b\x5e"

    def test_parse_message(self):
        field = UTimeField()
        field.unpack(b"\x00\xe1\x0b\x5e")
        assert field.get_value() == datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert field.get_ticks() == 1577836800


class TestLockingAndXRange32:
    def test_create_message(self):
        message = LockingAndXRange32()
        message["pid"] = 1
        message["byte_offset"] = 2
        message["length_in_bytes"] = 3
        expected = b"\x01\x00" b"\x02\x00\x00\x00" b"\x03\x00\x00\x00"

        actual = message.pack()
        assert len(message) == 10
        assert actual == expected


class TestLockingAndXRange64:
    def test_create_message(self):
        message = LockingAndXRange64()
        message["pid"] = 1
        message.byte_offset = 0x100000002
        message.length_in_bytes = 0x10
        expected = (
            b"\x01\x00"
            b"\x00\x00"
            b"\x01\x00\x00\x00"
            b"\x02\x00\x00\x00"
            b"\x00\x00\x00\x00"
            b"\x10\x00\x00\x00"
        )

        actual = message.pack()
        assert len(message) == 20
        assert actual == expected

    def test_parse_message(self):
        actual = LockingAndXRange64()
        actual.unpack(
            b"\x01\x00"
            b"\x00\x00"
            b"\x01\x00\x00\x00"
            b"\x02\x00\x00\x00"
            b"\x00\x00\x00\x00"
            b"\x10\x00\x00\x00"
        )
        assert actual["pid"].get_value() == 1
        assert actual.byte_offset == 0x100000002
        assert actual.length_in_bytes == 0x10


class TestDirectoryInformation:
    DATA = (
        b"\x00"
        b"\x11\x11\x11\x11\x11\x11\x11\x11"
        b"\x11\x11\x11\x11\x11\x11\x11\x11"
        b"\x22\x22\x22\x22"
        b"\x20"
        b"\xaf\x6d"
        b"\x6f\x50"
        b"\x00\x04\x00\x00"
        b"\x52\x45\x41\x44\x4d\x45\x2e\x54"
        b"\x58\x54\x00\x00\x00"
    )

    def test_create_message(self):
        resume_key = ResumeKey()
        resume_key["server_state"] = b"\x11" * 16
        resume_key["client_state"] = b"\x22" * 4

        message = DirectoryInformation()
        message["resume_key"] = resume_key
        message["file_attributes"] = FileAttributes.SMB_FILE_ATTRIBUTE_ARCHIVE
        message["last_write_time"] = SMBTime(13, 45, 30)
        message["last_write_date"] = SMBDate(2020, 3, 15)
        message["file_size"] = 1024
        message["file_name"] = b"README.TXT\x00\x00\x00"

        actual = message.pack()
        assert len(message) == 43
        assert actual == self.DATA

    def test_parse_message(self):
        actual = DirectoryInformation()
        assert actual.unpack(self.DATA) == b""

        resume_key = actual["resume_key"].get_value()
        assert isinstance(resume_key, ResumeKey)
        assert resume_key["server_state"].get_value() == b"\x11" * 16
        assert resume_key["client_state"].get_value() == b"\x22" * 4
        assert actual["file_attributes"].has_flag(FileAttributes.SMB_FILE_ATTRIBUTE_ARCHIVE)
        assert actual["last_write_time"].get_value() == SMBTime(13, 45, 30)
        assert actual["last_write_date"].get_value() == SMBDate(2020, 3, 15)
        assert actual["file_size"].get_value() == 1024
        assert actual.get_file_name() == "README.TXT"
