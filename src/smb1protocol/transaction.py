# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import (
    AlignmentPadField,
    Commands,
    Direction,
    OffsetPadField,
    SMB1Command,
    SMB1TransactionCommand,
)
from smb1protocol.smb_string import NullStringField
from smb1protocol.structure import BytesField, EnumField, FlagField, IntField, ListField


class TransactionFlags:
    """
    [MS-CIFS] 2.2.4.33.1 SMB_COM_TRANSACTION Request - Flags
    """

    DISCONNECT_TID = 0x0001
    NO_RESPONSE = 0x0002


class TransactionSubcommand:
    """
    [MS-CIFS] 2.2.5 Transaction Subcommands

    The first setup word of an SMB_COM_TRANSACTION request to a named pipe.
    A write to a mailslot uses TRANS_MAILSLOT_WRITE, which shares its value
    with TRANS_SET_NMPIPE_STATE.
    """

    TRANS_SET_NMPIPE_STATE = 0x0001
    TRANS_RAW_READ_NMPIPE = 0x0011
    TRANS_QUERY_NMPIPE_STATE = 0x0021
    TRANS_QUERY_NMPIPE_INFO = 0x0022
    TRANS_PEEK_NMPIPE = 0x0023
    TRANS_TRANSACT_NMPIPE = 0x0026
    TRANS_RAW_WRITE_NMPIPE = 0x0031
    TRANS_READ_NMPIPE = 0x0036
    TRANS_WRITE_NMPIPE = 0x0037
    TRANS_WAIT_NMPIPE = 0x0053
    TRANS_CALL_NMPIPE = 0x0054
    TRANS_MAILSLOT_WRITE = 0x0001


class Transaction2Subcommand:
    """
    [MS-CIFS] 2.2.6 Transaction2 Subcommands
    """

    TRANS2_OPEN2 = 0x0000
    TRANS2_FIND_FIRST2 = 0x0001
    TRANS2_FIND_NEXT2 = 0x0002
    TRANS2_QUERY_FS_INFORMATION = 0x0003
    TRANS2_SET_FS_INFORMATION = 0x0004
    TRANS2_QUERY_PATH_INFORMATION = 0x0005
    TRANS2_SET_PATH_INFORMATION = 0x0006
    TRANS2_QUERY_FILE_INFORMATION = 0x0007
    TRANS2_SET_FILE_INFORMATION = 0x0008
    TRANS2_FSCTL = 0x0009
    TRANS2_IOCTL2 = 0x000A
    TRANS2_FIND_NOTIFY_FIRST = 0x000B
    TRANS2_FIND_NOTIFY_NEXT = 0x000C
    TRANS2_CREATE_DIRECTORY = 0x000D
    TRANS2_SESSION_SETUP = 0x000E
    TRANS2_GET_DFS_REFERRAL = 0x0010
    TRANS2_REPORT_DFS_INCONSISTENCY = 0x0011


class NtTransactFunction:
    """
    [MS-CIFS] 2.2.7 NT Transact Subcommands
    """

    NT_TRANSACT_CREATE = 0x0001
    NT_TRANSACT_IOCTL = 0x0002
    NT_TRANSACT_SET_SECURITY_DESC = 0x0003
    NT_TRANSACT_NOTIFY_CHANGE = 0x0004
    NT_TRANSACT_RENAME = 0x0005
    NT_TRANSACT_QUERY_SECURITY_DESC = 0x0006


def _count_fields(size, names):
    # Counts default to the length of the payload they describe
    payload = {
        "total_parameter_count": "trans_parameters",
        "parameter_count": "trans_parameters",
        "total_data_count": "trans_data",
        "data_count": "trans_data",
    }
    fields = []
    for name in names:
        if name in payload:
            field = IntField(size=size, default=lambda s, p=payload[name]: len(s[p]))
        else:
            field = IntField(size=size)
        fields.append((name, field))
    return fields


def _setup_fields():
    return [
        ("setup_count", IntField(size=1, default=lambda s: len(s["setup"].get_value()))),
    ]


def _setup_words():
    return [
        ("setup", ListField(list_type=IntField(size=2), list_count=lambda s: s["setup_count"].get_value())),
    ]


def _payload_fields():
    return [
        ("pad1", OffsetPadField(offset_field="parameter_offset")),
        ("trans_parameters", BytesField(size=lambda s: s["parameter_count"].get_value())),
        ("pad2", OffsetPadField(offset_field="data_offset")),
        ("trans_data", BytesField(size=lambda s: s["data_count"].get_value())),
    ]


class SMB1TransactionRequest(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.33.1 SMB_COM_TRANSACTION Request

    name is the mailslot or named pipe the transaction is sent to, it is
    aligned to 2 bytes when unicode is set. When the parameters or data do
    not fit in one request the rest are sent with
    SMB_COM_TRANSACTION_SECONDARY.
    """

    COMMAND = Commands.SMB_COM_TRANSACTION
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            _count_fields(2, ["total_parameter_count", "total_data_count", "max_parameter_count", "max_data_count"])
            + [
                ("max_setup_count", IntField(size=1)),
                ("reserved1", IntField(size=1)),
                ("flags", FlagField(size=2, flag_type=TransactionFlags)),
                ("timeout", IntField(size=4)),
                ("reserved2", IntField(size=2)),
            ]
            + _count_fields(2, ["parameter_count", "parameter_offset", "data_count", "data_offset"])
            + _setup_fields()
            + [("reserved3", IntField(size=1))]
            + _setup_words()
        )
        self.data_fields = OrderedDict(
            [
                ("name_pad", AlignmentPadField()),
                ("name", NullStringField()),
            ]
            + _payload_fields()
        )
        super().__init__(**kwargs)

    @property
    def subcommand(self):
        """
        The TransactionSubcommand or Transaction2Subcommand in the first setup
        word, None when there are no setup words.
        """
        setup = self["setup"].get_value()
        return setup[0] if setup else None


class SMB1TransactionResponse(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.33.2 SMB_COM_TRANSACTION Response

    The final response, the interim response that asks for the secondary
    requests has no parameters or data and unpacks as status_only.
    """

    COMMAND = Commands.SMB_COM_TRANSACTION
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            _count_fields(
                2,
                [
                    "total_parameter_count",
                    "total_data_count",
                    "reserved1",
                    "parameter_count",
                    "parameter_offset",
                    "parameter_displacement",
                    "data_count",
                    "data_offset",
                    "data_displacement",
                ],
            )
            + _setup_fields()
            + [("reserved2", IntField(size=1))]
            + _setup_words()
        )
        self.data_fields = OrderedDict(_payload_fields())
        super().__init__(**kwargs)


class SMB1TransactionSecondaryRequest(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.34.1 SMB_COM_TRANSACTION_SECONDARY Request

    The displacements are the offsets of this chunk in the full parameters
    and data of the transaction.
    """

    COMMAND = Commands.SMB_COM_TRANSACTION_SECONDARY
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(self._get_parameter_fields())
        self.data_fields = OrderedDict(_payload_fields())
        super().__init__(**kwargs)

    def _get_parameter_fields(self):
        return _count_fields(
            2,
            [
                "total_parameter_count",
                "total_data_count",
                "parameter_count",
                "parameter_offset",
                "parameter_displacement",
                "data_count",
                "data_offset",
                "data_displacement",
            ],
        )


class SMB1TransactionSecondaryResponse(SMB1Command):
    # The server only answers with the final SMB_COM_TRANSACTION response
    COMMAND = Commands.SMB_COM_TRANSACTION_SECONDARY
    DIRECTION = Direction.RESPONSE


class SMB1Transaction2Request(SMB1TransactionRequest):
    """
    [MS-CIFS] 2.2.4.46.1 SMB_COM_TRANSACTION2 Request

    The Transaction2Subcommand is the first setup word, name is unused and
    is left as an empty string.
    """

    COMMAND = Commands.SMB_COM_TRANSACTION2


class SMB1Transaction2Response(SMB1TransactionResponse):
    # [MS-CIFS] 2.2.4.46.2 SMB_COM_TRANSACTION2 Response
    COMMAND = Commands.SMB_COM_TRANSACTION2


class SMB1Transaction2SecondaryRequest(SMB1TransactionSecondaryRequest):
    """
    [MS-CIFS] 2.2.4.47.1 SMB_COM_TRANSACTION2_SECONDARY Request

    The same as SMB_COM_TRANSACTION_SECONDARY with the fid of the
    transaction after the data displacement.
    """

    COMMAND = Commands.SMB_COM_TRANSACTION2_SECONDARY

    def _get_parameter_fields(self):
        return super()._get_parameter_fields() + [("fid", IntField(size=2))]


class SMB1Transaction2SecondaryResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_TRANSACTION2_SECONDARY
    DIRECTION = Direction.RESPONSE


class SMB1NTTransactRequest(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.62.1 SMB_COM_NT_TRANSACT Request

    The NT LAN Manager transaction with 32-bit counts and offsets, function
    selects the subcommand.
    """

    COMMAND = Commands.SMB_COM_NT_TRANSACT
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("max_setup_count", IntField(size=1)),
                ("reserved1", IntField(size=2)),
            ]
            + _count_fields(
                4,
                [
                    "total_parameter_count",
                    "total_data_count",
                    "max_parameter_count",
                    "max_data_count",
                    "parameter_count",
                    "parameter_offset",
                    "data_count",
                    "data_offset",
                ],
            )
            + _setup_fields()
            + [("function", EnumField(size=2, enum_type=NtTransactFunction, enum_strict=False))]
            + _setup_words()
        )
        self.data_fields = OrderedDict(_payload_fields())
        super().__init__(**kwargs)


class SMB1NTTransactResponse(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.62.2 SMB_COM_NT_TRANSACT Response
    """

    COMMAND = Commands.SMB_COM_NT_TRANSACT
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("reserved1", BytesField(size=3)),
            ]
            + _count_fields(
                4,
                [
                    "total_parameter_count",
                    "total_data_count",
                    "parameter_count",
                    "parameter_offset",
                    "parameter_displacement",
                    "data_count",
                    "data_offset",
                    "data_displacement",
                ],
            )
            + _setup_fields()
            + _setup_words()
        )
        self.data_fields = OrderedDict(_payload_fields())
        super().__init__(**kwargs)


class SMB1NTTransactSecondaryRequest(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.63.1 SMB_COM_NT_TRANSACT_SECONDARY Request
    """

    COMMAND = Commands.SMB_COM_NT_TRANSACT_SECONDARY
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("reserved1", BytesField(size=3)),
            ]
            + _count_fields(
                4,
                [
                    "total_parameter_count",
                    "total_data_count",
                    "parameter_count",
                    "parameter_offset",
                    "parameter_displacement",
                    "data_count",
                    "data_offset",
                    "data_displacement",
                ],
            )
            + [("reserved2", IntField(size=1))]
        )
        self.data_fields = OrderedDict(_payload_fields())
        super().__init__(**kwargs)


class SMB1NTTransactSecondaryResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_NT_TRANSACT_SECONDARY
    DIRECTION = Direction.RESPONSE


class SMB1IoctlRequest(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.35.1 SMB_COM_IOCTL Request

    A device specific request on fid selected by category and function.
    """

    COMMAND = Commands.SMB_COM_IOCTL
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("category", IntField(size=2)),
                ("function", IntField(size=2)),
            ]
            + _count_fields(2, ["total_parameter_count", "total_data_count", "max_parameter_count", "max_data_count"])
            + [
                ("timeout", IntField(size=4)),
                ("reserved", IntField(size=2)),
            ]
            + _count_fields(2, ["parameter_count", "parameter_offset", "data_count", "data_offset"])
        )
        self.data_fields = OrderedDict(_payload_fields())
        super().__init__(**kwargs)


class SMB1IoctlResponse(SMB1TransactionCommand):
    """
    [MS-CIFS] 2.2.4.35.2 SMB_COM_IOCTL Response
    """

    COMMAND = Commands.SMB_COM_IOCTL
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            _count_fields(
                2,
                [
                    "total_parameter_count",
                    "total_data_count",
                    "parameter_count",
                    "parameter_offset",
                    "parameter_displacement",
                    "data_count",
                    "data_offset",
                    "data_displacement",
                ],
            )
        )
        self.data_fields = OrderedDict(_payload_fields())
        super().__init__(**kwargs)
