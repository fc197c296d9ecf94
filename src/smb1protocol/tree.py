# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import AlignmentPadField, Commands, Direction, SMB1Command
from smb1protocol.smb_string import BufferFormat, NullStringField, SMBStringField
from smb1protocol.structure import BytesField, FlagField, IntField


class TreeConnectFlags:
    """
    [MS-CIFS] 2.2.4.55.1 SMB_COM_TREE_CONNECT_ANDX Request - Flags
    [MS-SMB] 2.2.4.7.1 Client Request Extensions
    """

    TREE_CONNECT_ANDX_DISCONNECT_TID = 0x0001
    TREE_CONNECT_ANDX_EXTENDED_SIGNATURES = 0x0004
    TREE_CONNECT_ANDX_EXTENDED_RESPONSE = 0x0008


class OptionalSupport:
    """
    [MS-CIFS] 2.2.4.55.2 SMB_COM_TREE_CONNECT_ANDX Response - OptionalSupport
    """

    SMB_SUPPORT_SEARCH_BITS = 0x0001
    SMB_SHARE_IS_IN_DFS = 0x0002


class ServiceType:
    """
    [MS-CIFS] 2.2.4.55.1 SMB_COM_TREE_CONNECT_ANDX Request - Service

    The OEM strings that name the type of resource being connected to.
    """

    DISK = "A:"
    PRINTER = "LPT1:"
    NAMED_PIPE = "IPC"
    COMM_DEVICE = "COMM"
    ANY = "?????"


class SMB1TreeConnectRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.50.1 SMB_COM_TREE_CONNECT Request
    """

    COMMAND = Commands.SMB_COM_TREE_CONNECT
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict()
        self.data_fields = OrderedDict(
            [
                ("path", SMBStringField(buffer_format=BufferFormat.STRING)),
                ("password", SMBStringField(buffer_format=BufferFormat.STRING)),
                ("service", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1TreeConnectResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.50.2 SMB_COM_TREE_CONNECT Response
    """

    COMMAND = Commands.SMB_COM_TREE_CONNECT
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("max_buffer_size", IntField(size=2)),
                ("tid", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1TreeConnectAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.55.1 SMB_COM_TREE_CONNECT_ANDX Request

    The path is aligned to a 2 byte boundary when unicode is set, the
    service is always an OEM string.
    """

    COMMAND = Commands.SMB_COM_TREE_CONNECT_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("flags", FlagField(size=2, flag_type=TreeConnectFlags)),
                ("password_length", IntField(size=2, default=lambda s: len(s["password"]))),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("password", BytesField(size=lambda s: s["password_length"].get_value())),
                ("pad", AlignmentPadField()),
                ("path", NullStringField()),
                ("service", NullStringField(oem=True)),
            ]
        )
        super().__init__(**kwargs)


class SMB1TreeConnectAndXResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.55.2 SMB_COM_TREE_CONNECT_ANDX Response
    """

    COMMAND = Commands.SMB_COM_TREE_CONNECT_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("optional_support", FlagField(size=2, flag_type=OptionalSupport, flag_strict=False)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("service", NullStringField(oem=True)),
                ("pad", AlignmentPadField()),
                ("native_file_system", NullStringField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1TreeDisconnectRequest(SMB1Command):
    # [MS-CIFS] 2.2.4.51.1 SMB_COM_TREE_DISCONNECT Request
    COMMAND = Commands.SMB_COM_TREE_DISCONNECT
    DIRECTION = Direction.REQUEST


class SMB1TreeDisconnectResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_TREE_DISCONNECT
    DIRECTION = Direction.RESPONSE


class SMB1QueryInformationDiskRequest(SMB1Command):
    # [MS-CIFS] 2.2.4.57.1 SMB_COM_QUERY_INFORMATION_DISK Request
    COMMAND = Commands.SMB_COM_QUERY_INFORMATION_DISK
    DIRECTION = Direction.REQUEST


class SMB1QueryInformationDiskResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.57.2 SMB_COM_QUERY_INFORMATION_DISK Response

    The size of the share is total_units * blocks_per_unit * block_size bytes.
    """

    COMMAND = Commands.SMB_COM_QUERY_INFORMATION_DISK
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("total_units", IntField(size=2)),
                ("blocks_per_unit", IntField(size=2)),
                ("block_size", IntField(size=2)),
                ("free_units", IntField(size=2)),
                ("reserved", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)

    @property
    def total_size(self):
        return self._get_size("total_units")

    @property
    def free_size(self):
        return self._get_size("free_units")

    def _get_size(self, units_field):
        return (
            self[units_field].get_value() * self["blocks_per_unit"].get_value() * self["block_size"].get_value()
        )
