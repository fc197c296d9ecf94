# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict
from datetime import date, datetime, timezone
from typing import NamedTuple

from smb1protocol.exceptions import InvariantViolation
from smb1protocol.structure import (
    BytesField,
    DateTimeField,
    FlagField,
    IntField,
    Structure,
    StructureField,
)


class FileAttributes:
    """
    [MS-CIFS] 2.2.1.2.4 SMB_FILE_ATTRIBUTES

    16-bit attribute flags used by the core and LANMAN commands, the SEARCH
    variants select files with these attributes when searching.
    """

    SMB_FILE_ATTRIBUTE_NORMAL = 0x0000
    SMB_FILE_ATTRIBUTE_READONLY = 0x0001
    SMB_FILE_ATTRIBUTE_HIDDEN = 0x0002
    SMB_FILE_ATTRIBUTE_SYSTEM = 0x0004
    SMB_FILE_ATTRIBUTE_VOLUME = 0x0008
    SMB_FILE_ATTRIBUTE_DIRECTORY = 0x0010
    SMB_FILE_ATTRIBUTE_ARCHIVE = 0x0020
    SMB_SEARCH_ATTRIBUTE_READONLY = 0x0100
    SMB_SEARCH_ATTRIBUTE_HIDDEN = 0x0200
    SMB_SEARCH_ATTRIBUTE_SYSTEM = 0x0400
    SMB_SEARCH_ATTRIBUTE_DIRECTORY = 0x1000
    SMB_SEARCH_ATTRIBUTE_ARCHIVE = 0x2000


class ExtFileAttributes:
    """
    [MS-CIFS] 2.2.1.2.3 SMB_EXT_FILE_ATTR

    32-bit extended attributes used by the NT LAN Manager commands.
    """

    ATTR_READONLY = 0x00000001
    ATTR_HIDDEN = 0x00000002
    ATTR_SYSTEM = 0x00000004
    ATTR_DIRECTORY = 0x00000010
    ATTR_ARCHIVE = 0x00000020
    ATTR_NORMAL = 0x00000080
    ATTR_TEMPORARY = 0x00000100
    ATTR_COMPRESSED = 0x00000800
    POSIX_SEMANTICS = 0x01000000
    BACKUP_SEMANTICS = 0x02000000
    DELETE_ON_CLOSE = 0x04000000
    SEQUENTIAL_SCAN = 0x08000000
    RANDOM_ACCESS = 0x10000000
    NO_BUFFERING = 0x20000000
    WRITE_THROUGH = 0x80000000


class NamedPipeStatus:
    """
    [MS-CIFS] 2.2.1.3 SMB_NMPIPE_STATUS

    ICOUNT is an 8-bit instance count and READ_MODE/NAMED_PIPE_TYPE are 2-bit
    values, the masks cover every bit they may set.
    """

    ICOUNT = 0x00FF
    READ_MODE = 0x0300
    NAMED_PIPE_TYPE = 0x0C00
    ENDPOINT = 0x4000
    NONBLOCKING = 0x8000


class SMBDate(NamedTuple):
    """
    [MS-CIFS] 2.2.1.4.1 SMB_DATE

    Year is stored as an offset from 1980 in 7 bits, month in 4 bits and day
    in 5 bits. The raw bits map 1:1 to the tuple so a zero date is
    (1980, 0, 0) rather than a calendar date.
    """

    year: int
    month: int
    day: int

    @classmethod
    def from_int(cls, value):
        return cls(1980 + (value >> 9), (value >> 5) & 0x0F, value & 0x1F)

    def to_int(self):
        if not (1980 <= self.year <= 2107 and 0 <= self.month <= 15 and 0 <= self.day <= 31):
            raise InvariantViolation(f"{self!r} cannot be represented as an SMB_DATE")
        return ((self.year - 1980) << 9) | (self.month << 5) | self.day

    def to_date(self):
        return date(self.year, self.month, self.day)


class SMBTime(NamedTuple):
    """
    [MS-CIFS] 2.2.1.4.2 SMB_TIME

    Hours in 5 bits, minutes in 6 bits and seconds in 5 bits with a 2 second
    resolution.
    """

    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_int(cls, value):
        return cls(value >> 11, (value >> 5) & 0x3F, (value & 0x1F) * 2)

    def to_int(self):
        if not (0 <= self.hours <= 31 and 0 <= self.minutes <= 63 and 0 <= self.seconds <= 62):
            raise InvariantViolation(f"{self!r} cannot be represented as an SMB_TIME")
        return (self.hours << 11) | (self.minutes << 5) | (self.seconds // 2)


class SMBDateField(IntField):
    def __init__(self, **kwargs):
        super().__init__(size=2, **kwargs)

    def get_value(self):
        return SMBDate.from_int(super().get_value())

    def _parse_value(self, value):
        if isinstance(value, SMBDate):
            return value.to_int()
        elif isinstance(value, date):
            return SMBDate(value.year, value.month, value.day).to_int()
        return super()._parse_value(value)

    def _to_string(self):
        value = self.get_value()
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


class SMBTimeField(IntField):
    def __init__(self, **kwargs):
        super().__init__(size=2, **kwargs)

    def get_value(self):
        return SMBTime.from_int(super().get_value())

    def _parse_value(self, value):
        if isinstance(value, SMBTime):
            return value.to_int()
        elif isinstance(value, datetime):
            return SMBTime(value.hour, value.minute, value.second).to_int()
        return super()._parse_value(value)

    def _to_string(self):
        value = self.get_value()
        return f"{value.hours:02d}:{value.minutes:02d}:{value.seconds:02d}"


class UTimeField(DateTimeField):
    """
    [MS-CIFS] 2.2.1.4.3 UTIME

    The 4 byte FILETIME of the core protocol, seconds since 1970-01-01 UTC.
    """

    ORIGIN = datetime(1970, 1, 1, tzinfo=timezone.utc)
    TICKS_PER_SECOND = 1
    STRUCT_FORMAT = "I"
    SIZE = 4


class LockingAndXRange32(Structure):
    """
    [MS-CIFS] 2.2.4.32.1 SMB_COM_LOCKING_ANDX Request - LOCKING_ANDX_RANGE32

    Used when the LARGE_FILES bit of TypeOfLock is not set.
    """

    def __init__(self):
        self.fields = OrderedDict(
            [
                ("pid", IntField(size=2)),
                ("byte_offset", IntField(size=4)),
                ("length_in_bytes", IntField(size=4)),
            ]
        )
        super().__init__()


class LockingAndXRange64(Structure):
    """
    [MS-CIFS] 2.2.4.32.1 SMB_COM_LOCKING_ANDX Request - LOCKING_ANDX_RANGE64

    The offset and length are split into 32-bit high and low words, the
    byte_offset and length_in_bytes properties join them back together.
    """

    def __init__(self):
        self.fields = OrderedDict(
            [
                ("pid", IntField(size=2)),
                ("pad", IntField(size=2)),
                ("byte_offset_high", IntField(size=4)),
                ("byte_offset_low", IntField(size=4)),
                ("length_in_bytes_high", IntField(size=4)),
                ("length_in_bytes_low", IntField(size=4)),
            ]
        )
        super().__init__()

    @property
    def byte_offset(self):
        return (self["byte_offset_high"].get_value() << 32) | self["byte_offset_low"].get_value()

    @byte_offset.setter
    def byte_offset(self, value):
        self["byte_offset_high"] = value >> 32
        self["byte_offset_low"] = value & 0xFFFFFFFF

    @property
    def length_in_bytes(self):
        return (self["length_in_bytes_high"].get_value() << 32) | self["length_in_bytes_low"].get_value()

    @length_in_bytes.setter
    def length_in_bytes(self, value):
        self["length_in_bytes_high"] = value >> 32
        self["length_in_bytes_low"] = value & 0xFFFFFFFF


class ResumeKey(Structure):
    """
    [MS-CIFS] 2.2.1.1.1 SMB_Resume_Key

    Opaque to the client, it is sent back as is to continue a search.
    """

    def __init__(self):
        self.fields = OrderedDict(
            [
                ("reserved", IntField(size=1)),
                ("server_state", BytesField(size=16)),
                ("client_state", BytesField(size=4)),
            ]
        )
        super().__init__()


class DirectoryInformation(Structure):
    """
    [MS-CIFS] 2.2.4.58.2 SMB_COM_SEARCH Response - SMB_Directory_Information

    One 43 byte entry per file found, file_name is the 8.3 name padded with
    spaces and terminated with a NULL.
    """

    def __init__(self):
        self.fields = OrderedDict(
            [
                ("resume_key", StructureField(size=21, structure_type=ResumeKey)),
                (
                    "file_attributes",
                    FlagField(size=1, flag_type=FileAttributes, flag_strict=False),
                ),
                ("last_write_time", SMBTimeField()),
                ("last_write_date", SMBDateField()),
                ("file_size", IntField(size=4)),
                ("file_name", BytesField(size=13)),
            ]
        )
        super().__init__()

    def get_file_name(self):
        return self["file_name"].get_value().split(b"\x00")[0].rstrip(b" ").decode("ascii", errors="replace")
