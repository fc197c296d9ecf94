# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import struct
import types

from smb1protocol.exceptions import InvariantViolation, MalformedData, TruncatedData
from smb1protocol.structure import Field, _bytes_to_hex, _get_constants


class BufferFormat:
    """
    [MS-CIFS] 2.2.1.1 Character Sequences / 2.2.2.3 Data Buffer Formats

    The format byte that precedes each tagged string or data buffer.
    """

    DATA_BLOCK = 0x01
    DIALECT = 0x02
    PATHNAME = 0x03
    STRING = 0x04
    VARIABLE_BLOCK = 0x05


NULL_TERMINATED_FORMATS = [BufferFormat.DIALECT, BufferFormat.PATHNAME, BufferFormat.STRING]


def _encode_text(text, unicode, name):
    encoding = "utf-16-le" if unicode else "ascii"
    errors = "surrogatepass" if unicode else "strict"
    try:
        data = text.encode(encoding, errors)
    except UnicodeEncodeError as err:
        raise InvariantViolation(f"'{text}' of field '{name}' cannot be encoded as {encoding}") from err

    if _has_null(data, unicode):
        raise InvariantViolation(f"'{text}' of field '{name}' contains a NULL character")
    return data


def _decode_text(data, unicode, name):
    encoding = "utf-16-le" if unicode else "ascii"
    errors = "surrogatepass" if unicode else "strict"
    try:
        return data.decode(encoding, errors)
    except UnicodeDecodeError as err:
        raise MalformedData(name, f"string is not valid {encoding}: {err.reason}") from err


def _has_null(data, unicode):
    if not unicode:
        return b"\x00" in data
    return any(data[i : i + 2] == b"\x00\x00" for i in range(0, len(data) - 1, 2))


def _find_null(data, unicode, name, offset):
    """Returns the number of string bytes in data before the NULL terminator."""
    if not unicode:
        length = data.find(b"\x00")
        if length == -1:
            raise TruncatedData(name, len(data) + 1, len(data), offset)
        return length

    for length in range(0, len(data) - 1, 2):
        if data[length : length + 2] == b"\x00\x00":
            return length

    if len(data) % 2:
        raise MalformedData(name, "odd utf16 length")
    raise TruncatedData(name, len(data) + 2, len(data), offset)


class SMBString:
    """
    [MS-CIFS] 2.2.1.1 / 2.2.2.3 SMB_STRING

    A tagged buffer, buffer_format decides how the buffer is framed on the
    wire:

        DATA_BLOCK: u8 length then the bytes
        DIALECT: NULL terminated ASCII
        PATHNAME: NULL terminated ASCII
        STRING: NULL terminated ASCII or UTF-16-LE when Unicode is negotiated
        VARIABLE_BLOCK: u16 length then the bytes

    buffer holds the bytes without the format byte, length or terminator.
    Use the class methods to build a value of the right format.
    """

    def __init__(self, buffer_format, buffer=b""):
        if buffer_format not in _get_constants(BufferFormat).values():
            raise InvariantViolation(f"unknown SMB_STRING buffer format {buffer_format}")

        buffer = bytes(buffer)
        max_length = {BufferFormat.DATA_BLOCK: 0xFF, BufferFormat.VARIABLE_BLOCK: 0xFFFF}.get(buffer_format)
        if max_length is not None and len(buffer) > max_length:
            raise InvariantViolation(
                f"buffer of {len(buffer)} bytes exceeds the maximum of {max_length} for buffer format "
                f"0x{buffer_format:02X}"
            )

        self.buffer_format = buffer_format
        self.buffer = buffer

    @classmethod
    def data_block(cls, data):
        return cls(BufferFormat.DATA_BLOCK, data)

    @classmethod
    def dialect(cls, text):
        return cls(BufferFormat.DIALECT, _encode_text(text, False, "dialect"))

    @classmethod
    def pathname(cls, text):
        return cls(BufferFormat.PATHNAME, _encode_text(text, False, "pathname"))

    @classmethod
    def string(cls, text, unicode=False):
        return cls(BufferFormat.STRING, _encode_text(text, unicode, "string"))

    @classmethod
    def variable_block(cls, data):
        return cls(BufferFormat.VARIABLE_BLOCK, data)

    @property
    def is_text(self):
        return self.buffer_format in NULL_TERMINATED_FORMATS

    def to_text(self, unicode=False):
        return _decode_text(self.buffer, self._is_unicode(unicode), "buffer")

    def pack(self, unicode=False, byte_order="<"):
        fmt = struct.pack("B", self.buffer_format)
        if self.buffer_format == BufferFormat.DATA_BLOCK:
            return fmt + struct.pack("B", len(self.buffer)) + self.buffer
        elif self.buffer_format == BufferFormat.VARIABLE_BLOCK:
            return fmt + struct.pack(byte_order + "H", len(self.buffer)) + self.buffer

        unicode = self._is_unicode(unicode)
        if unicode and len(self.buffer) % 2:
            raise InvariantViolation(f"UTF-16-LE buffer of {len(self.buffer)} bytes has an odd length")
        if _has_null(self.buffer, unicode):
            raise InvariantViolation("buffer of a NULL terminated string contains a NULL character")
        return fmt + self.buffer + (b"\x00\x00" if unicode else b"\x00")

    def _is_unicode(self, unicode):
        # Only SMB_STRING 0x04 follows SMB_FLAGS2_UNICODE
        return unicode and self.buffer_format == BufferFormat.STRING

    def __eq__(self, other):
        if not isinstance(other, SMBString):
            return NotImplemented
        return self.buffer_format == other.buffer_format and self.buffer == other.buffer

    def __hash__(self):
        return hash((self.buffer_format, self.buffer))

    def __repr__(self):
        return f"SMBString(0x{self.buffer_format:02X}, {self.buffer!r})"


class SMBStringField(Field):
    def __init__(self, buffer_format, **kwargs):
        """
        A field that holds an SMBString of a fixed buffer format. Setting a
        str encodes it for the format and the unicode setting of the owning
        structure, setting bytes uses them as the buffer.

        :param buffer_format: The BufferFormat this field must contain.
        """
        self.buffer_format = buffer_format
        super().__init__(**kwargs)

    @property
    def unicode(self):
        return getattr(self.structure, "unicode", False)

    def get_text(self):
        return self.get_value().to_text(self.unicode)

    def unpack(self, data, offset=0):
        if self.present is not None and not self.present(self.structure):
            return data

        if not data:
            raise TruncatedData(self.name, 1, 0, offset)

        buffer_format = data[0]
        if buffer_format != self.buffer_format:
            raise MalformedData(
                self.name, f"expected buffer format 0x{self.buffer_format:02X} but got 0x{buffer_format:02X}"
            )

        if buffer_format in [BufferFormat.DATA_BLOCK, BufferFormat.VARIABLE_BLOCK]:
            length_size = 1 if buffer_format == BufferFormat.DATA_BLOCK else 2
            self._check_size(1 + length_size, data, offset)
            length_format = "B" if length_size == 1 else self.byte_order + "H"
            length = struct.unpack(length_format, data[1 : 1 + length_size])[0]
            start = 1 + length_size
            end = start + length
            self._check_size(end, data, offset)
            self.value = SMBString(buffer_format, data[start:end])
            return data[end:]

        unicode = self.unicode and buffer_format == BufferFormat.STRING
        length = _find_null(data[1:], unicode, self.name, offset + 1)
        self.value = SMBString(buffer_format, data[1 : 1 + length])
        return data[1 + length + (2 if unicode else 1) :]

    def _pack_value(self, value):
        return value.pack(self.unicode, self.byte_order)

    def _parse_value(self, value):
        if value is None:
            string_value = SMBString(self.buffer_format)
        elif isinstance(value, types.LambdaType):
            string_value = value
        elif isinstance(value, SMBString):
            if value.buffer_format != self.buffer_format:
                raise InvariantViolation(
                    f"field '{self.name}' requires buffer format 0x{self.buffer_format:02X} not "
                    f"0x{value.buffer_format:02X}"
                )
            string_value = value
        elif isinstance(value, str):
            if self.buffer_format not in NULL_TERMINATED_FORMATS:
                raise TypeError(f"Cannot set text on field {self.name} with a data buffer format")
            unicode = self.unicode and self.buffer_format == BufferFormat.STRING
            string_value = SMBString(self.buffer_format, _encode_text(value, unicode, self.name))
        elif isinstance(value, bytes):
            string_value = SMBString(self.buffer_format, value)
        else:
            raise TypeError(f"Cannot parse value for field {self.name} of type {type(value).__name__} to a string")
        return string_value

    def _to_string(self):
        value = self.get_value()
        if value.is_text:
            text = value.to_text(self.unicode)
        else:
            text = _bytes_to_hex(value.buffer)
        return f"(0x{value.buffer_format:02X}) {text}"


class NullStringField(Field):
    def __init__(self, oem=False, **kwargs):
        """
        An untagged NULL terminated string whose value is a str. It is
        UTF-16-LE when the owning structure is unicode unless oem is set, oem
        strings are always ASCII.
        """
        self.oem = oem
        super().__init__(**kwargs)

    @property
    def unicode(self):
        return not self.oem and getattr(self.structure, "unicode", False)

    def get_encoded_length(self):
        # The length of the string on the wire without the NULL terminator
        value = self._get_calculated_value(self.value)
        return len(_encode_text(value, self.unicode, self.name))

    def _get_unpack_size(self, data, offset):
        return _find_null(data, self.unicode, self.name, offset) + (2 if self.unicode else 1)

    def _unpack_value(self, data, offset):
        return _decode_text(data[: -2 if self.unicode else -1], self.unicode, self.name)

    def _pack_value(self, value):
        return _encode_text(value, self.unicode, self.name) + (b"\x00\x00" if self.unicode else b"\x00")

    def _parse_value(self, value):
        if value is None:
            string_value = ""
        elif isinstance(value, (str, types.LambdaType)):
            string_value = value
        else:
            raise TypeError(f"Cannot parse value for field {self.name} of type {type(value).__name__} to a str")
        return string_value

    def _to_string(self):
        return self.get_value()
