# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import Commands, Direction, SMB1Command
from smb1protocol.data_types import LockingAndXRange32, LockingAndXRange64
from smb1protocol.exceptions import InvariantViolation
from smb1protocol.structure import FlagField, IntField, ListField


class LockType:
    """
    [MS-CIFS] 2.2.4.32.1 SMB_COM_LOCKING_ANDX Request - TypeOfLock

    READ_WRITE_LOCK is the absence of SHARED_LOCK.
    """

    READ_WRITE_LOCK = 0x00
    SHARED_LOCK = 0x01
    OPLOCK_RELEASE = 0x02
    CHANGE_LOCKTYPE = 0x04
    CANCEL_LOCK = 0x08
    LARGE_FILES = 0x10


class SMB1LockByteRangeRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.13.1 SMB_COM_LOCK_BYTE_RANGE Request
    """

    COMMAND = Commands.SMB_COM_LOCK_BYTE_RANGE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("count_of_bytes_to_lock", IntField(size=4)),
                ("lock_offset_in_bytes", IntField(size=4)),
            ]
        )
        super().__init__(**kwargs)


class SMB1LockByteRangeResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_LOCK_BYTE_RANGE
    DIRECTION = Direction.RESPONSE


class SMB1UnlockByteRangeRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.14.1 SMB_COM_UNLOCK_BYTE_RANGE Request
    """

    COMMAND = Commands.SMB_COM_UNLOCK_BYTE_RANGE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("count_of_bytes_to_unlock", IntField(size=4)),
                ("unlock_offset_in_bytes", IntField(size=4)),
            ]
        )
        super().__init__(**kwargs)


class SMB1UnlockByteRangeResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_UNLOCK_BYTE_RANGE
    DIRECTION = Direction.RESPONSE


class SMB1LockingAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.32.1 SMB_COM_LOCKING_ANDX Request

    The unlocks and locks are LockingAndXRange64 entries when large_files is
    True and LockingAndXRange32 entries when it is False. A large_files of
    None follows the LARGE_FILES bit of type_of_lock, the client sets that
    bit when CAP_LARGE_FILES was negotiated.
    """

    COMMAND = Commands.SMB_COM_LOCKING_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True

    def __init__(self, large_files=None, **kwargs):
        self.large_files = large_files
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("type_of_lock", FlagField(size=1, flag_type=LockType)),
                ("new_oplock_level", IntField(size=1)),
                ("timeout", IntField(size=4)),
                ("number_of_requested_unlocks", IntField(size=2, default=lambda s: len(s["unlocks"].get_value()))),
                ("number_of_requested_locks", IntField(size=2, default=lambda s: len(s["locks"].get_value()))),
            ]
        )
        self.data_fields = OrderedDict(
            [
                (
                    "unlocks",
                    ListField(
                        list_type=lambda s: s.range_type,
                        list_count=lambda s: s["number_of_requested_unlocks"].get_value(),
                    ),
                ),
                (
                    "locks",
                    ListField(
                        list_type=lambda s: s.range_type,
                        list_count=lambda s: s["number_of_requested_locks"].get_value(),
                    ),
                ),
            ]
        )
        super().__init__(**kwargs)

    @property
    def range_type(self):
        large_files = self.large_files
        if large_files is None:
            large_files = self["type_of_lock"].has_flag(LockType.LARGE_FILES)
        return LockingAndXRange64 if large_files else LockingAndXRange32

    def pack_data(self):
        range_type = self.range_type
        for name in ["unlocks", "locks"]:
            for entry in self[name].get_value():
                if not isinstance(entry, range_type):
                    raise InvariantViolation(
                        f"{name} entry {type(entry).__name__} does not match the {range_type.__name__} lock range "
                        "in use"
                    )
        return super().pack_data()


class SMB1LockingAndXResponse(SMB1Command):
    # [MS-CIFS] 2.2.4.32.2 SMB_COM_LOCKING_ANDX Response
    COMMAND = Commands.SMB_COM_LOCKING_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True
