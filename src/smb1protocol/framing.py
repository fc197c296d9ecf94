# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol import MAX_BYTE_COUNT, MAX_WORD_COUNT, NO_ANDX_COMMAND
from smb1protocol.exceptions import InvariantViolation, TruncatedData
from smb1protocol.structure import BytesField, IntField, Structure

# Names used in errors raised while reading the framing itself
BLOCK_NAMES = {
    "word_count": "WordCount",
    "words": "Parameters",
    "byte_count": "ByteCount",
    "bytes": "Data",
}


class ParametersBlock(Structure):
    """
    [MS-CIFS] 2.2.3.2 Parameter Block

    The word count followed by 2 * word_count bytes of parameter words.
    """

    def __init__(self):
        self.fields = OrderedDict(
            [
                ("word_count", IntField(size=1, default=lambda s: len(s["words"]) // 2)),
                ("words", BytesField(size=lambda s: s["word_count"].get_value() * 2)),
            ]
        )
        super().__init__()


class DataBlock(Structure):
    """
    [MS-CIFS] 2.2.3.3 Data Block

    The byte count followed by byte_count bytes of data.
    """

    def __init__(self):
        self.fields = OrderedDict(
            [
                ("byte_count", IntField(size=2, default=lambda s: len(s["bytes"]))),
                ("bytes", BytesField(size=lambda s: s["byte_count"].get_value())),
            ]
        )
        super().__init__()


class AndXPrelude(Structure):
    """
    [MS-CIFS] 2.2.3.4 Batched Messages ("AndX" Messages)

    The first 4 bytes of the parameter words of every AndX command. The
    andx_offset is set by the layer that lays out the whole message and is
    kept as is here.
    """

    def __init__(self):
        self.fields = OrderedDict(
            [
                ("andx_command", IntField(size=1, default=NO_ANDX_COMMAND)),
                ("andx_reserved", IntField(size=1)),
                ("andx_offset", IntField(size=2)),
            ]
        )
        super().__init__()


def pack_blocks(parameters, data, byte_order="<"):
    """
    Frames the parameter words and data bytes of a command body.

    :param parameters: The parameter words as bytes, must be an even length.
    :param data: The data block bytes.
    :param byte_order: The struct byte order character for ByteCount.
    :return: WordCount, the parameters, ByteCount and the data.
    """
    if len(parameters) % 2:
        raise InvariantViolation("odd parameter payload")
    if len(parameters) // 2 > MAX_WORD_COUNT:
        raise InvariantViolation(f"parameter payload of {len(parameters)} bytes exceeds the WordCount limit")
    if len(data) > MAX_BYTE_COUNT:
        raise InvariantViolation(f"data payload of {len(data)} bytes exceeds the ByteCount limit")

    parameters_block = ParametersBlock()
    parameters_block.byte_order = byte_order
    parameters_block["words"] = parameters

    data_block = DataBlock()
    data_block.byte_order = byte_order
    data_block["bytes"] = data

    return parameters_block.pack() + data_block.pack()


def unpack_blocks(data, byte_order="<"):
    """
    Reads the Parameters and Data blocks at the start of data.

    :param data: The bytes of the command body, extra bytes are ignored.
    :param byte_order: The struct byte order character for ByteCount.
    :return: A tuple of the parameter bytes, data bytes and the number of
        bytes that were read.
    """
    parameters_block = ParametersBlock()
    parameters_block.byte_order = byte_order
    data_block = DataBlock()
    data_block.byte_order = byte_order

    try:
        remaining = parameters_block.unpack(data)
        remaining = data_block.unpack(remaining, len(data) - len(remaining))
    except TruncatedData as err:
        raise TruncatedData(BLOCK_NAMES[err.field], err.needed, err.got, err.offset) from err

    return (
        parameters_block["words"].get_value(),
        data_block["bytes"].get_value(),
        len(data) - len(remaining),
    )
