# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import Commands, Direction, SMB1Command
from smb1protocol.smb_string import BufferFormat, SMBStringField
from smb1protocol.structure import BytesField, EnumField, IntField


class PrintMode:
    """
    [MS-CIFS] 2.2.4.67.1 SMB_COM_OPEN_PRINT_FILE Request - Mode
    """

    TEXT_MODE = 0x0000
    GRAPHICS_MODE = 0x0001


class SMB1OpenPrintFileRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.67.1 SMB_COM_OPEN_PRINT_FILE Request

    setup_length is the number of bytes of printer setup data at the start
    of the print file, identifier is a name for the print job.
    """

    COMMAND = Commands.SMB_COM_OPEN_PRINT_FILE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("setup_length", IntField(size=2)),
                ("mode", EnumField(size=2, enum_type=PrintMode)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("identifier", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1OpenPrintFileResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.67.2 SMB_COM_OPEN_PRINT_FILE Response
    """

    COMMAND = Commands.SMB_COM_OPEN_PRINT_FILE
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1WritePrintFileRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.68.1 SMB_COM_WRITE_PRINT_FILE Request
    """

    COMMAND = Commands.SMB_COM_WRITE_PRINT_FILE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("buffer_format", IntField(size=1, default=BufferFormat.DATA_BLOCK)),
                ("data_length", IntField(size=2, default=lambda s: len(s["data"]))),
                ("data", BytesField(size=lambda s: s["data_length"].get_value())),
            ]
        )
        super().__init__(**kwargs)


class SMB1WritePrintFileResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_WRITE_PRINT_FILE
    DIRECTION = Direction.RESPONSE


class SMB1ClosePrintFileRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.69.1 SMB_COM_CLOSE_PRINT_FILE Request

    Closing the file queues the job for printing.
    """

    COMMAND = Commands.SMB_COM_CLOSE_PRINT_FILE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1ClosePrintFileResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_CLOSE_PRINT_FILE
    DIRECTION = Direction.RESPONSE
