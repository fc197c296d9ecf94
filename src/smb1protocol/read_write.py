# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import Commands, Direction, SMB1Command
from smb1protocol.data_types import UTimeField
from smb1protocol.exceptions import UnsupportedCommand
from smb1protocol.smb_string import BufferFormat
from smb1protocol.structure import BytesField, FlagField, IntField


class WriteMode:
    """
    [MS-CIFS] 2.2.4.43.1 SMB_COM_WRITE_ANDX Request - WriteMode
    """

    WRITETHROUGH_MODE = 0x0001
    READ_BYTES_AVAILABLE = 0x0002
    RAW_MODE = 0x0004
    MSG_START = 0x0008


def _data_block_fields():
    # BufferFormat 0x01, a u16 length and the bytes, used by READ and WRITE
    return [
        ("buffer_format", IntField(size=1, default=BufferFormat.DATA_BLOCK)),
        ("data_length", IntField(size=2, default=lambda s: len(s["data"]))),
        ("data", BytesField(size=lambda s: s["data_length"].get_value())),
    ]


def _padded_data_fields():
    # The pad before the data is whatever is left of the data block once the
    # data_length bytes of data are taken off the end
    return [
        ("pad", BytesField(size=lambda s: s.byte_count - s["data_length"].get_value())),
        ("data", BytesField(size=lambda s: s["data_length"].get_value())),
    ]


class SMB1ReadRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.11.1 SMB_COM_READ Request
    """

    COMMAND = Commands.SMB_COM_READ
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("count_of_bytes_to_read", IntField(size=2)),
                ("read_offset_in_bytes", IntField(size=4)),
                ("estimate_of_remaining_bytes_to_be_read", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1ReadResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.11.2 SMB_COM_READ Response
    """

    COMMAND = Commands.SMB_COM_READ
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("count_of_bytes_returned", IntField(size=2, default=lambda s: len(s["data"]))),
                ("reserved", BytesField(size=8)),
            ]
        )
        self.data_fields = OrderedDict(_data_block_fields())
        super().__init__(**kwargs)


class SMB1LockAndReadRequest(SMB1ReadRequest):
    """
    [MS-CIFS] 2.2.4.20.1 SMB_COM_LOCK_AND_READ Request

    Locks the range before it is read, the layout is the same as
    SMB_COM_READ.
    """

    COMMAND = Commands.SMB_COM_LOCK_AND_READ


class SMB1LockAndReadResponse(SMB1ReadResponse):
    COMMAND = Commands.SMB_COM_LOCK_AND_READ


class SMB1WriteRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.12.1 SMB_COM_WRITE Request

    A count_of_bytes_to_write of 0 truncates or extends the file to
    write_offset_in_bytes.
    """

    COMMAND = Commands.SMB_COM_WRITE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("count_of_bytes_to_write", IntField(size=2, default=lambda s: len(s["data"]))),
                ("write_offset_in_bytes", IntField(size=4)),
                ("estimate_of_remaining_bytes_to_be_written", IntField(size=2)),
            ]
        )
        self.data_fields = OrderedDict(_data_block_fields())
        super().__init__(**kwargs)


class SMB1WriteResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.12.2 SMB_COM_WRITE Response
    """

    COMMAND = Commands.SMB_COM_WRITE
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("count_of_bytes_written", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1WriteAndUnlockRequest(SMB1WriteRequest):
    # [MS-CIFS] 2.2.4.21.1 SMB_COM_WRITE_AND_UNLOCK Request
    COMMAND = Commands.SMB_COM_WRITE_AND_UNLOCK


class SMB1WriteAndUnlockResponse(SMB1WriteResponse):
    COMMAND = Commands.SMB_COM_WRITE_AND_UNLOCK


class SMB1ReadRawRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.22.1 SMB_COM_READ_RAW Request

    offset_high is only sent with a WordCount of 0x0A, leave it as None for
    the 0x08 form.
    """

    COMMAND = Commands.SMB_COM_READ_RAW
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("offset", IntField(size=4)),
                ("max_count_of_bytes_to_return", IntField(size=2)),
                ("min_count_of_bytes_to_return", IntField(size=2)),
                ("timeout", IntField(size=4)),
                ("reserved", IntField(size=2)),
                ("offset_high", IntField(size=4, optional=True)),
            ]
        )
        super().__init__(**kwargs)


class SMB1ReadRawResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.22.2 SMB_COM_READ_RAW Response

    The server sends the file data straight on the transport without an SMB
    header, there is no command body to pack or unpack. IS_RAW tells the
    caller to read the raw bytes from the transport instead.
    """

    COMMAND = Commands.SMB_COM_READ_RAW
    DIRECTION = Direction.RESPONSE
    IS_RAW = True

    def pack(self):
        return b""

    def unpack(self, data):
        raise UnsupportedCommand(self.COMMAND, self.DIRECTION)


class SMB1ReadMpxRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.23.1 SMB_COM_READ_MPX Request
    """

    COMMAND = Commands.SMB_COM_READ_MPX
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("offset", IntField(size=4)),
                ("max_count_of_bytes_to_return", IntField(size=2)),
                ("min_count_of_bytes_to_return", IntField(size=2)),
                ("timeout", IntField(size=4)),
                ("reserved", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1ReadMpxResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.23.2 SMB_COM_READ_MPX Response

    data_offset defaults to the offset of data from the SMB header.
    """

    COMMAND = Commands.SMB_COM_READ_MPX
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("offset", IntField(size=4)),
                ("count", IntField(size=2)),
                ("remaining", IntField(size=2)),
                ("data_compaction_mode", IntField(size=2)),
                ("reserved", IntField(size=2)),
                ("data_length", IntField(size=2, default=lambda s: len(s["data"]))),
                ("data_offset", IntField(size=2, default=lambda s: s.get_data_position("data"))),
            ]
        )
        self.data_fields = OrderedDict(_padded_data_fields())
        super().__init__(**kwargs)


class SMB1WriteRawRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.25.1 SMB_COM_WRITE_RAW Request

    count_of_bytes is the total to write, data holds the bytes sent with the
    request and the rest follow raw on the transport. offset_high is only
    sent with a WordCount of 0x0E.
    """

    COMMAND = Commands.SMB_COM_WRITE_RAW
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("count_of_bytes", IntField(size=2, default=lambda s: len(s["data"]))),
                ("reserved1", IntField(size=2)),
                ("offset", IntField(size=4)),
                ("timeout", IntField(size=4)),
                ("write_mode", FlagField(size=2, flag_type=WriteMode)),
                ("reserved2", IntField(size=4)),
                ("data_length", IntField(size=2, default=lambda s: len(s["data"]))),
                ("data_offset", IntField(size=2, default=lambda s: s.get_data_position("data"))),
                ("offset_high", IntField(size=4, optional=True)),
            ]
        )
        self.data_fields = OrderedDict(_padded_data_fields())
        super().__init__(**kwargs)


class SMB1WriteRawResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.25.2 SMB_COM_WRITE_RAW Interim Server Response

    The final response is SMB_COM_WRITE_COMPLETE.
    """

    COMMAND = Commands.SMB_COM_WRITE_RAW
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("available", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1WriteMpxRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.26.1 SMB_COM_WRITE_MPX Request
    """

    COMMAND = Commands.SMB_COM_WRITE_MPX
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("total_byte_count", IntField(size=2)),
                ("reserved", IntField(size=2)),
                ("byte_offset_to_begin_write", IntField(size=4)),
                ("timeout", IntField(size=4)),
                ("write_mode", FlagField(size=2, flag_type=WriteMode)),
                ("request_mask", IntField(size=4)),
                ("data_length", IntField(size=2, default=lambda s: len(s["data"]))),
                ("data_offset", IntField(size=2, default=lambda s: s.get_data_position("data"))),
            ]
        )
        self.data_fields = OrderedDict(_padded_data_fields())
        super().__init__(**kwargs)


class SMB1WriteMpxResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.26.2 SMB_COM_WRITE_MPX Response
    """

    COMMAND = Commands.SMB_COM_WRITE_MPX
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("response_mask", IntField(size=4)),
            ]
        )
        super().__init__(**kwargs)


class SMB1WriteCompleteResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.28.2 SMB_COM_WRITE_COMPLETE Response

    The final response to SMB_COM_WRITE_RAW, there is no request.
    """

    COMMAND = Commands.SMB_COM_WRITE_COMPLETE
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("count", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1WriteAndCloseRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.40.1 SMB_COM_WRITE_AND_CLOSE Request

    reserved is only sent with a WordCount of 12, leave it as None for the
    WordCount 6 form.
    """

    COMMAND = Commands.SMB_COM_WRITE_AND_CLOSE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("count_of_bytes_to_write", IntField(size=2, default=lambda s: len(s["data"]))),
                ("write_offset_in_bytes", IntField(size=4)),
                ("last_write_time", UTimeField()),
                ("reserved", BytesField(size=12, optional=True)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("pad", BytesField(size=1)),
                ("data", BytesField(size=lambda s: s["count_of_bytes_to_write"].get_value())),
            ]
        )
        super().__init__(**kwargs)


class SMB1WriteAndCloseResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.40.2 SMB_COM_WRITE_AND_CLOSE Response
    """

    COMMAND = Commands.SMB_COM_WRITE_AND_CLOSE
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("count_of_bytes_written", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1ReadAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.42.1 SMB_COM_READ_ANDX Request

    offset_high is only sent with a WordCount of 0x0C, leave it as None for
    the 0x0A form.
    """

    COMMAND = Commands.SMB_COM_READ_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("offset", IntField(size=4)),
                ("max_count_of_bytes_to_return", IntField(size=2)),
                ("min_count_of_bytes_to_return", IntField(size=2)),
                ("timeout", IntField(size=4)),
                ("remaining", IntField(size=2)),
                ("offset_high", IntField(size=4, optional=True)),
            ]
        )
        super().__init__(**kwargs)


class SMB1ReadAndXResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.42.2 SMB_COM_READ_ANDX Response

    data_offset defaults to the offset of data from the SMB header.
    """

    COMMAND = Commands.SMB_COM_READ_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("available", IntField(size=2)),
                ("data_compaction_mode", IntField(size=2)),
                ("reserved1", IntField(size=2)),
                ("data_length", IntField(size=2, default=lambda s: len(s["data"]))),
                ("data_offset", IntField(size=2, default=lambda s: s.get_data_position("data"))),
                ("reserved2", BytesField(size=10)),
            ]
        )
        self.data_fields = OrderedDict(_padded_data_fields())
        super().__init__(**kwargs)


class SMB1WriteAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.43.1 SMB_COM_WRITE_ANDX Request

    offset_high is only sent with a WordCount of 0x0E, leave it as None for
    the 0x0C form. data_offset defaults to the offset of data from the SMB
    header.
    """

    COMMAND = Commands.SMB_COM_WRITE_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("offset", IntField(size=4)),
                ("timeout", IntField(size=4)),
                ("write_mode", FlagField(size=2, flag_type=WriteMode)),
                ("remaining", IntField(size=2)),
                ("reserved", IntField(size=2)),
                ("data_length", IntField(size=2, default=lambda s: len(s["data"]))),
                ("data_offset", IntField(size=2, default=lambda s: s.get_data_position("data"))),
                ("offset_high", IntField(size=4, optional=True)),
            ]
        )
        self.data_fields = OrderedDict(_padded_data_fields())
        super().__init__(**kwargs)


class SMB1WriteAndXResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.43.2 SMB_COM_WRITE_ANDX Response
    """

    COMMAND = Commands.SMB_COM_WRITE_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("count", IntField(size=2)),
                ("available", IntField(size=2)),
                ("reserved", IntField(size=4)),
            ]
        )
        super().__init__(**kwargs)
