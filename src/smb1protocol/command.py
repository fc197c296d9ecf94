# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import logging
from collections import OrderedDict

from smb1protocol.exceptions import MalformedData
from smb1protocol.framing import AndXPrelude, pack_blocks, unpack_blocks
from smb1protocol.structure import BytesField, Structure, StructureField

log = logging.getLogger(__name__)


class Commands:
    """
    [MS-CIFS] v20180912

    2.2.2.1 SMB_COM Command Codes
    The command code of an SMB message, it is set in the SMB header and in
    the AndXCommand of the previous command in an AndX chain.
    """

    SMB_COM_CREATE_DIRECTORY = 0x00
    SMB_COM_DELETE_DIRECTORY = 0x01
    SMB_COM_OPEN = 0x02
    SMB_COM_CREATE = 0x03
    SMB_COM_CLOSE = 0x04
    SMB_COM_FLUSH = 0x05
    SMB_COM_DELETE = 0x06
    SMB_COM_RENAME = 0x07
    SMB_COM_QUERY_INFORMATION = 0x08
    SMB_COM_SET_INFORMATION = 0x09
    SMB_COM_READ = 0x0A
    SMB_COM_WRITE = 0x0B
    SMB_COM_LOCK_BYTE_RANGE = 0x0C
    SMB_COM_UNLOCK_BYTE_RANGE = 0x0D
    SMB_COM_CREATE_TEMPORARY = 0x0E
    SMB_COM_CREATE_NEW = 0x0F
    SMB_COM_CHECK_DIRECTORY = 0x10
    SMB_COM_PROCESS_EXIT = 0x11
    SMB_COM_SEEK = 0x12
    SMB_COM_LOCK_AND_READ = 0x13
    SMB_COM_WRITE_AND_UNLOCK = 0x14
    SMB_COM_READ_RAW = 0x1A
    SMB_COM_READ_MPX = 0x1B
    SMB_COM_WRITE_RAW = 0x1D
    SMB_COM_WRITE_MPX = 0x1E
    SMB_COM_WRITE_COMPLETE = 0x20
    SMB_COM_SET_INFORMATION2 = 0x22
    SMB_COM_QUERY_INFORMATION2 = 0x23
    SMB_COM_LOCKING_ANDX = 0x24
    SMB_COM_TRANSACTION = 0x25
    SMB_COM_TRANSACTION_SECONDARY = 0x26
    SMB_COM_IOCTL = 0x27
    SMB_COM_COPY = 0x29
    SMB_COM_ECHO = 0x2B
    SMB_COM_WRITE_AND_CLOSE = 0x2C
    SMB_COM_OPEN_ANDX = 0x2D
    SMB_COM_READ_ANDX = 0x2E
    SMB_COM_WRITE_ANDX = 0x2F
    SMB_COM_TRANSACTION2 = 0x32
    SMB_COM_TRANSACTION2_SECONDARY = 0x33
    SMB_COM_FIND_CLOSE2 = 0x34
    SMB_COM_FIND_NOTIFY_CLOSE = 0x35
    SMB_COM_TREE_CONNECT = 0x70
    SMB_COM_TREE_DISCONNECT = 0x71
    SMB_COM_NEGOTIATE = 0x72
    SMB_COM_SESSION_SETUP_ANDX = 0x73
    SMB_COM_LOGOFF_ANDX = 0x74
    SMB_COM_TREE_CONNECT_ANDX = 0x75
    SMB_COM_QUERY_INFORMATION_DISK = 0x80
    SMB_COM_SEARCH = 0x81
    SMB_COM_FIND = 0x82
    SMB_COM_FIND_UNIQUE = 0x83
    SMB_COM_FIND_CLOSE = 0x84
    SMB_COM_NT_TRANSACT = 0xA0
    SMB_COM_NT_TRANSACT_SECONDARY = 0xA1
    SMB_COM_NT_CREATE_ANDX = 0xA2
    SMB_COM_NT_CANCEL = 0xA4
    SMB_COM_NT_RENAME = 0xA5
    SMB_COM_OPEN_PRINT_FILE = 0xC0
    SMB_COM_WRITE_PRINT_FILE = 0xC1
    SMB_COM_CLOSE_PRINT_FILE = 0xC2
    SMB_COM_NO_ANDX_COMMAND = 0xFF


class Direction:
    REQUEST = "request"
    RESPONSE = "response"


class AlignmentPadField(BytesField):
    """
    A pad of one NULL byte when the owning command is unicode and the field
    that follows would start on an odd offset from the SMB header. A value of
    None computes the pad from the position of the field when packing.
    """

    def _get_calculated_value(self, value):
        if value is None:
            position = self.structure.get_data_position(self.name)
            return b"\x00" * self._get_pad_size(position)
        return super()._get_calculated_value(value)

    def _get_unpack_size(self, data, offset):
        return self._get_pad_size(self.structure.body_offset + offset)

    def _get_pad_size(self, position):
        return 1 if self.structure.unicode and position % 2 else 0

    def _parse_value(self, value):
        if value is None:
            return None
        return super()._parse_value(value)


class OffsetPadField(BytesField):
    """
    The Pad1/Pad2 bytes of the transaction commands. When unpacking, the pad
    runs from the current position up to the offset (from the SMB header) in
    offset_field, an offset of 0 means there is no pad.
    """

    def __init__(self, offset_field, **kwargs):
        self.offset_field = offset_field
        super().__init__(**kwargs)

    def _get_unpack_size(self, data, offset):
        target = self.structure[self.offset_field].get_value()
        if not target:
            return 0

        position = self.structure.body_offset + offset
        if target < position:
            raise MalformedData(self.offset_field, f"offset {target} points before the current position {position}")
        return target - position


class SMB1Command(Structure):
    """
    [MS-CIFS] 2.2.3 SMB Message Structure

    The body of an SMB message that follows the 32 byte SMB header. Sub
    classes set parameter_fields and data_fields to the fields of the
    Parameters and Data blocks in wire order before calling
    super().__init__(), the base class frames them with WordCount and
    ByteCount. AndX commands get the AndX prelude as the first parameter
    field.

    :param unicode: The SMB header has SMB_FLAGS2_UNICODE set, strings are
        UTF-16-LE.
    :param byte_order: The struct byte order character for multi-byte
        integers.
    :param body_offset: The offset of the body from the start of the SMB
        header, used for pads that align to the header.
    """

    COMMAND = None
    DIRECTION = None
    IS_ANDX = False
    IS_RAW = False

    def __init__(self, unicode=False, byte_order="<", body_offset=32):
        self.unicode = unicode
        self.byte_order = byte_order
        self.body_offset = body_offset
        self.status_only = False
        self.byte_count = 0

        parameter_fields = OrderedDict()
        if self.IS_ANDX:
            parameter_fields["andx"] = StructureField(size=4, structure_type=AndXPrelude)
        parameter_fields.update(getattr(self, "parameter_fields", None) or OrderedDict())
        self.parameter_fields = parameter_fields
        self.data_fields = getattr(self, "data_fields", None) or OrderedDict()

        self.fields = OrderedDict(list(self.parameter_fields.items()) + list(self.data_fields.items()))
        super().__init__()

    def __setitem__(self, key, value):
        super().__setitem__(key, value)
        self.status_only = False

    def __len__(self):
        return len(self.pack())

    def __repr__(self):
        return f"<{self.__class__.__name__} 0x{self.COMMAND:02X} {self.DIRECTION}>"

    @property
    def command_code(self):
        return self.COMMAND

    @property
    def direction(self):
        return self.DIRECTION

    @property
    def is_andx(self):
        return self.IS_ANDX

    @property
    def andx_command(self):
        if not self.IS_ANDX:
            return None
        return self["andx"].get_value()["andx_command"].get_value()

    @andx_command.setter
    def andx_command(self, value):
        self["andx"].get_value()["andx_command"] = value

    @property
    def andx_offset(self):
        if not self.IS_ANDX:
            return None
        return self["andx"].get_value()["andx_offset"].get_value()

    @andx_offset.setter
    def andx_offset(self, value):
        self["andx"].get_value()["andx_offset"] = value

    def pack(self):
        if self.status_only:
            return pack_blocks(b"", b"", self.byte_order)

        # The data is packed first as parameters can describe its layout
        data = self.pack_data()
        parameters = self.pack_parameters()
        return pack_blocks(parameters, data, self.byte_order)

    def pack_parameters(self):
        return b"".join(field.pack() for field in self.parameter_fields.values())

    def pack_data(self):
        return b"".join(field.pack() for field in self.data_fields.values())

    def unpack(self, data):
        """
        Unpacks the command body at the start of data. A body with no
        parameters and no data is an empty body, status_only is set and every
        field is left at its default. For a response this is an error
        response and the caller should check the status in the SMB header.

        :param data: The bytes that start with the WordCount of this body.
        :return: The bytes that follow the body.
        """
        parameters, block_data, bytes_read = unpack_blocks(data, self.byte_order)
        for field in self.fields.values():
            field.set_value(field.default)

        self.byte_count = len(block_data)
        self.status_only = not parameters and not block_data
        if not self.status_only:
            self._unpack_block(self.parameter_fields, parameters, 1, "parameters")
            self._unpack_block(self.data_fields, block_data, 1 + len(parameters) + 2, "data")

        return data[bytes_read:]

    def get_data_position(self, field_name):
        """
        The offset of a data block field from the start of the SMB header.
        """
        position = self.body_offset + 1 + self._get_parameters_size() + 2
        for name, field in self.data_fields.items():
            if name == field_name:
                break
            position += len(field)
        return position

    def _get_parameters_size(self):
        return sum(len(field) for field in self.parameter_fields.values())

    def _unpack_block(self, fields, data, offset, block_name):
        for field in fields.values():
            remaining = field.unpack(data, offset)
            offset += len(data) - len(remaining)
            data = remaining

        if data:
            raise MalformedData(block_name, f"{len(data)} bytes remain after the last field")


class SMB1TransactionCommand(SMB1Command):
    """
    [MS-CIFS] 2.2.4.33 / 2.2.4.46 / 2.2.4.62 Transaction Subprotocol

    Base of the transaction commands. The data block holds pad1,
    trans_parameters, pad2 and trans_data, the pads are sized by the
    parameter_offset and data_offset parameter words. Call finalize() once
    the payloads are set to align them to 4 bytes from the SMB header and
    fill in the offsets.
    """

    ALIGNMENT = 4

    def finalize(self, body_offset=None):
        if body_offset is not None:
            self.body_offset = body_offset

        self["pad1"] = b""
        self["pad2"] = b""

        parameters = self["trans_parameters"].get_value()
        position = self.get_data_position("pad1")
        pad1 = self._get_alignment(position) if parameters else 0
        self["pad1"] = b"\x00" * pad1
        self["parameter_offset"] = position + pad1 if parameters else 0
        position += pad1 + len(parameters)

        data = self["trans_data"].get_value()
        pad2 = self._get_alignment(position) if data else 0
        self["pad2"] = b"\x00" * pad2
        self["data_offset"] = position + pad2 if data else 0

        log.debug(
            "Finalized %s with parameter offset %d and data offset %d",
            self.__class__.__name__,
            self["parameter_offset"].get_value(),
            self["data_offset"].get_value(),
        )

    def _get_alignment(self, position):
        return (self.ALIGNMENT - position % self.ALIGNMENT) % self.ALIGNMENT
