# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import binascii
import copy
import struct
import types
from abc import ABCMeta, abstractmethod
from datetime import datetime, timedelta, timezone

from smb1protocol.exceptions import InvalidFieldDefinition, InvariantViolation, MalformedData, TruncatedData

TAB = "    "  # Instead of displaying a tab on the print, use 4 spaces


def _bytes_to_hex(data, pretty=False, hex_per_line=8):
    hex_str = binascii.hexlify(data).decode().upper()
    hex_list = [hex_str[i : i + 2] for i in range(0, len(hex_str), 2)]
    if not pretty:
        return " ".join(hex_list)

    lines = []
    for i in range(0, len(hex_list), hex_per_line):
        lines.append(" ".join(hex_list[i : i + hex_per_line]))
    return "\n".join(lines)


def _indent_lines(string, prefix):
    return "\n".join(prefix + line for line in string.splitlines())


class Structure:
    """A declarative view over a run of bytes.

    Sub classes set self.fields to an OrderedDict of name -> Field in wire
    order before calling super().__init__(). Multi-byte integers use the
    byte_order of the structure that owns them, nested structures take the
    byte_order and unicode setting of their parent when packed or unpacked.
    """

    byte_order = "<"
    unicode = False

    def __init__(self):
        for name, field in self.fields.items():
            field.structure = self
            field.name = name
            field.set_value(field.default)

    def __str__(self):
        struct_name = self.__class__.__name__
        raw_hex = _bytes_to_hex(self.pack(), True, hex_per_line=8)
        field_strings = []

        for name, field in self.fields.items():
            field_string = str(field)
            if "\n" in field_string:
                field_string = "\n" + _indent_lines(field_string, TAB * 2)
            field_strings.append(f"{TAB}{name} = {field_string}")

        raw_hex = _indent_lines(raw_hex, TAB * 2)
        fields = "\n".join(field_strings)
        return f"{struct_name}:\n{fields}\n\n{TAB}Raw Hex:\n{raw_hex}"

    def __repr__(self):
        return f"<{self.__class__.__name__}>"

    def __setitem__(self, key, value):
        field = self._get_field(key)
        field.set_value(value)

    def __getitem__(self, key):
        return self._get_field(key)

    def __len__(self):
        length = 0
        for field in self.fields.values():
            length += len(field)
        return length

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented

        for name, field in self.fields.items():
            if field.get_raw_value() != other[name].get_raw_value():
                return False
        return True

    def pack(self):
        data = b""
        for field in self.fields.values():
            data += field.pack()
        return data

    def unpack(self, data, offset=0):
        for field in self.fields.values():
            remaining = field.unpack(data, offset)
            offset += len(data) - len(remaining)
            data = remaining
        return data

    def _get_field(self, key):
        field = self.fields.get(key, None)
        if field is None:
            raise ValueError(f"Structure does not contain field {key}")
        return field


class Field(metaclass=ABCMeta):
    def __init__(self, size=None, default=None, optional=False, present=None):
        """
        The base class of a Field object. This contains the framework that a
        field SHOULD implement in regards to packing and unpacking a value.

        :param size: The size of the field in bytes, an int, a lambda that is
            passed the owning structure or None to consume the rest of the
            data when unpacking.
        :param default: The default value of the field, can be a lambda that
            is computed when the value is read.
        :param optional: The field is at the end of its block and may be
            absent. A value of None packs to nothing and the field is left as
            None when no bytes remain on an unpack.
        :param present: A lambda passed the owning structure that returns
            whether the field exists on the wire at all.
        """
        if not (size is None or isinstance(size, int) or isinstance(size, types.LambdaType)):
            raise InvalidFieldDefinition(
                f"{self.__class__.__name__} size for field must be an int, lambda or None, not "
                f"{type(size).__name__}"
            )

        self.size = size
        self.default = default
        self.optional = optional
        self.present = present
        self.name = None
        self.structure = None
        self.value = None

    def __str__(self):
        return self._to_string()

    def __len__(self):
        if not self._is_present():
            return 0
        return self._get_packed_size()

    @property
    def byte_order(self):
        return getattr(self.structure, "byte_order", "<")

    def pack(self):
        if not self._is_present():
            return b""

        value = self._get_calculated_value(self.value)
        packed_value = self._pack_value(value)
        if isinstance(self.size, int) and len(packed_value) != self.size:
            raise InvariantViolation(
                f"field '{self.name}' packs to {len(packed_value)} bytes but its size is {self.size} bytes"
            )
        return packed_value

    def get_value(self):
        return self._get_calculated_value(self.value)

    def get_raw_value(self):
        # The value as it is stored for the wire, used when comparing
        return self.get_value()

    def set_value(self, value):
        if value is None and self.optional:
            self.value = None
        else:
            self.value = self._parse_value(value)

    def unpack(self, data, offset=0):
        """
        Takes in a byte string and sets the value of the field based on the
        length of the field. Returns the bytes that remain after the field.

        :param data: The bytes that start with this field.
        :param offset: The absolute offset of data, used in error reports.
        :return: The remaining bytes after this field was unpacked.
        """
        if self.present is not None and not self.present(self.structure):
            return data

        if self.optional and not data:
            self.value = None
            return data

        size = self._get_unpack_size(data, offset)
        self._check_size(size, data, offset)
        self.value = self._unpack_value(data[:size], offset)
        return data[size:]

    def _is_present(self):
        if self.present is not None and not self.present(self.structure):
            return False
        return not (self.optional and self.value is None)

    def _check_size(self, size, data, offset):
        if size < 0:
            raise MalformedData(self.name, f"calculated length {size} is negative")
        if size > len(data):
            raise TruncatedData(self.name, size, len(data), offset)

    def _get_unpack_size(self, data, offset):
        if self.size is None:
            return len(data)
        return self._get_calculated_size(self.size)

    def _unpack_value(self, data, offset):
        return self._parse_value(data)

    def _get_calculated_value(self, value):
        if isinstance(value, types.LambdaType):
            return value(self.structure)
        return value

    def _get_calculated_size(self, size):
        if isinstance(size, types.LambdaType):
            return size(self.structure)
        return size

    def _get_packed_size(self):
        return len(self.pack())

    @abstractmethod
    def _pack_value(self, value):
        pass  # pragma: no cover

    @abstractmethod
    def _parse_value(self, value):
        pass  # pragma: no cover

    @abstractmethod
    def _to_string(self):
        pass  # pragma: no cover


class IntField(Field):
    def __init__(self, size, unsigned=True, **kwargs):
        """
        Used to store an int value for a field. The byte order is taken from
        the structure the field belongs to.

        :param size: The size of the integer in bytes, 1, 2, 4 or 8.
        :param unsigned: Whether the value is an unsigned int or not.
        """
        if size not in [1, 2, 4, 8]:
            raise InvalidFieldDefinition(f"IntField size must have a value of 1, 2, 4, or 8 not {size}")
        self.unsigned = unsigned
        super().__init__(size=size, **kwargs)

    def _pack_value(self, value):
        try:
            return struct.pack(self.byte_order + self._get_struct_format(), value)
        except struct.error as err:
            sign = "unsigned" if self.unsigned else "signed"
            raise InvariantViolation(
                f"value {value!r} of field '{self.name}' does not fit in a {self.size} byte {sign} integer"
            ) from err

    def _parse_value(self, value):
        if value is None:
            int_value = 0
        elif isinstance(value, types.LambdaType):
            int_value = value
        elif isinstance(value, bytes):
            try:
                int_value = struct.unpack(self.byte_order + self._get_struct_format(), value)[0]
            except struct.error as err:
                raise InvariantViolation(
                    f"{len(value)} bytes cannot be read as the {self.size} byte field '{self.name}'"
                ) from err
        elif isinstance(value, int):
            int_value = value
        else:
            raise TypeError(f"Cannot parse value for field {self.name} of type {type(value).__name__} to an int")
        return int_value

    def _get_packed_size(self):
        return self.size

    def _get_struct_format(self):
        struct_format = {1: "b", 2: "h", 4: "i", 8: "q"}[self.size]
        return struct_format.upper() if self.unsigned else struct_format

    def _to_string(self):
        return str(self.get_value())


class EnumField(IntField):
    def __init__(self, size, enum_type, enum_strict=True, **kwargs):
        """
        An IntField whose value is one of the constants of enum_type. Unknown
        values are rejected when enum_strict is set.
        """
        self.enum_type = enum_type
        self.enum_strict = enum_strict
        super().__init__(size=size, **kwargs)

    def _parse_value(self, value):
        int_value = super()._parse_value(value)
        if not isinstance(int_value, types.LambdaType) and not self._is_valid(int_value):
            raise InvariantViolation(
                f"{int_value} is not a valid {self.enum_type.__name__} value for field '{self.name}'"
            )
        return int_value

    def _unpack_value(self, data, offset):
        int_value = IntField._parse_value(self, data)
        if not self._is_valid(int_value):
            raise MalformedData(self.name, f"{int_value} is not a valid {self.enum_type.__name__} value")
        return int_value

    def _is_valid(self, value):
        if not self.enum_strict:
            return True
        return value in _get_constants(self.enum_type).values()

    def _to_string(self):
        enum_name = None
        value = self.get_value()
        for name, enum_value in _get_constants(self.enum_type).items():
            if value == enum_value:
                enum_name = name
                break

        if enum_name is None:
            enum_name = "UNKNOWN_ENUM"

        return f"({value}) {enum_name}"


class FlagField(IntField):
    def __init__(self, size, flag_type, flag_strict=True, **kwargs):
        """
        An IntField holding a combination of the bit flags in flag_type.
        Unknown bits are rejected when flag_strict is set.
        """
        self.flag_type = flag_type
        self.flag_strict = flag_strict
        super().__init__(size=size, **kwargs)

    def set_flag(self, flag):
        self.set_value(self.get_value() | flag)

    def has_flag(self, flag):
        return self.get_value() & flag == flag

    def _parse_value(self, value):
        int_value = super()._parse_value(value)
        if not isinstance(int_value, types.LambdaType) and not self._is_valid(int_value):
            raise InvariantViolation(
                f"{int_value} contains bits that are not valid {self.flag_type.__name__} flags for field "
                f"'{self.name}'"
            )
        return int_value

    def _unpack_value(self, data, offset):
        int_value = IntField._parse_value(self, data)
        if not self._is_valid(int_value):
            raise MalformedData(self.name, f"{int_value} contains bits that are not {self.flag_type.__name__} flags")
        return int_value

    def _is_valid(self, value):
        if not self.flag_strict:
            return True
        all_flags = 0
        for flag in _get_constants(self.flag_type).values():
            all_flags |= flag
        return value & ~all_flags == 0

    def _to_string(self):
        field_value = self.get_value()
        if field_value is None:
            return "None"

        flags = []
        for name, flag in sorted(_get_constants(self.flag_type).items()):
            if flag and field_value & flag == flag:
                flags.append(name)
        return f"({field_value}) {', '.join(flags)}"


class BytesField(Field):
    """
    Used to store a raw bytes value, a None default is a run of NULL bytes
    that matches a fixed size or an empty byte string.
    """

    def _pack_value(self, value):
        return value

    def _parse_value(self, value):
        if value is None:
            if isinstance(self.size, int):
                bytes_value = b"\x00" * self.size
            else:
                bytes_value = b""
        elif isinstance(value, (bytes, types.LambdaType)):
            bytes_value = value
        elif isinstance(value, (bytearray, memoryview)):
            bytes_value = bytes(value)
        elif isinstance(value, Structure):
            bytes_value = value.pack()
        else:
            raise TypeError(f"Cannot parse value for field {self.name} of type {type(value).__name__} to a byte string")
        return bytes_value

    def _to_string(self):
        return _bytes_to_hex(self.get_value() or b"", True, hex_per_line=8)


class ListField(Field):
    def __init__(self, list_type, list_count=None, **kwargs):
        """
        Used to store a list of values that are all of the same type.

        :param list_type: A Field that is copied for each entry, a Structure
            class or a lambda that returns either.
        :param list_count: The number of entries, an int or lambda. When None
            the list runs to the end of the field size.
        """
        self.list_type = list_type
        self.list_count = list_count
        super().__init__(**kwargs)

    def _pack_value(self, value):
        data = b""
        for entry in value:
            field = self._new_entry()
            field.set_value(entry)
            data += field.pack()
        return data

    def _parse_value(self, value):
        if value is None:
            list_value = []
        elif isinstance(value, types.LambdaType):
            list_value = value
        elif isinstance(value, (list, tuple)):
            list_value = list(value)
        else:
            raise TypeError(f"Cannot parse value for field {self.name} of type {type(value).__name__} to a list")
        return list_value

    def unpack(self, data, offset=0):
        if self.present is not None and not self.present(self.structure):
            return data

        if self.size is None:
            chunk = data
        else:
            size = self._get_calculated_size(self.size)
            self._check_size(size, data, offset)
            chunk = data[:size]
            data = data[size:]

        count = self._get_calculated_size(self.list_count)
        values = []
        while (count is None and chunk) or (count is not None and len(values) < count):
            field = self._new_entry()
            remaining = field.unpack(chunk, offset)
            consumed = len(chunk) - len(remaining)
            if consumed == 0:
                raise MalformedData(self.name, "list entry did not consume any bytes")

            offset += consumed
            chunk = remaining
            values.append(field.get_value())

        if self.size is None:
            data = chunk
        elif chunk:
            raise MalformedData(self.name, f"{len(chunk)} bytes left over after the last list entry")

        self.value = values
        return data

    def _new_entry(self):
        list_type = self.list_type
        if isinstance(list_type, types.LambdaType):
            list_type = list_type(self.structure)

        if isinstance(list_type, Field):
            field = copy.copy(list_type)
        else:
            field = StructureField(structure_type=list_type)
        field.structure = self.structure
        field.name = self.name
        return field

    def _to_string(self):
        list_string = []
        for entry in self.get_value():
            field = self._new_entry()
            field.set_value(entry)
            list_string.append(str(field))

        if not list_string:
            return "[]"
        return "[\n" + _indent_lines(",\n".join(list_string), TAB) + "\n]"


class StructureField(Field):
    def __init__(self, structure_type, **kwargs):
        """
        Used to store a nested Structure, the nested structure packs and
        unpacks with the byte order and unicode setting of its parent.

        :param structure_type: The Structure class, instantiated without
            arguments for the default value and when unpacking.
        """
        self.structure_type = structure_type
        super().__init__(**kwargs)

    def unpack(self, data, offset=0):
        if self.present is not None and not self.present(self.structure):
            return data

        if self.size is None:
            chunk = data
        else:
            size = self._get_calculated_size(self.size)
            self._check_size(size, data, offset)
            chunk = data[:size]

        structure = self._adopt(self.structure_type())
        remaining = structure.unpack(chunk, offset)
        if self.size is None:
            data = remaining
        elif remaining:
            raise MalformedData(self.name, f"{len(remaining)} bytes left over after the structure")
        else:
            data = data[len(chunk) :]

        self.value = structure
        return data

    def _adopt(self, structure):
        if self.structure is not None:
            structure.byte_order = self.structure.byte_order
            structure.unicode = self.structure.unicode
        return structure

    def _pack_value(self, value):
        if isinstance(value, bytes):
            return value
        return self._adopt(value).pack()

    def _parse_value(self, value):
        if value is None:
            structure_value = self.structure_type()
        elif isinstance(value, (bytes, Structure, types.LambdaType)):
            structure_value = value
        else:
            raise TypeError(
                f"Cannot parse value for field {self.name} of type {type(value).__name__} to a structure"
            )
        return structure_value

    def _to_string(self):
        value = self.get_value()
        if isinstance(value, Structure):
            return str(self._adopt(value))
        return _bytes_to_hex(value, True, hex_per_line=8)


class DateTimeField(Field):
    """
    [MS-DTYP] 2.3.3 FILETIME

    The number of 100-nanosecond intervals since 1601-01-01 UTC as an 8 byte
    integer. The raw tick count is kept so values unpack and pack back to the
    same bytes, get_value() returns a timezone aware datetime. Tick counts past
    what a datetime can hold, like the 0x7FFFFFFFFFFFFFFF "never" time, are
    returned as the int tick count instead.
    """

    ORIGIN = datetime(1601, 1, 1, tzinfo=timezone.utc)
    TICKS_PER_SECOND = 10000000
    STRUCT_FORMAT = "Q"
    SIZE = 8

    def __init__(self, **kwargs):
        super().__init__(size=self.SIZE, **kwargs)

    def get_value(self):
        value = self._get_calculated_value(self.value)
        if value is None:
            return None
        ticks = self._to_ticks(value)
        microseconds = ticks * 1000000 // self.TICKS_PER_SECOND
        try:
            return self.ORIGIN + timedelta(microseconds=microseconds)
        except OverflowError:
            return ticks

    def get_ticks(self):
        return self._to_ticks(self._get_calculated_value(self.value))

    def get_raw_value(self):
        return self.get_ticks()

    def _pack_value(self, value):
        ticks = self._to_ticks(value)
        try:
            return struct.pack(self.byte_order + self.STRUCT_FORMAT, ticks)
        except struct.error as err:
            raise InvariantViolation(f"timestamp {value!r} of field '{self.name}' is out of range") from err

    def _parse_value(self, value):
        if value is None:
            datetime_value = 0
        elif isinstance(value, (int, types.LambdaType)):
            datetime_value = value
        elif isinstance(value, bytes):
            datetime_value = struct.unpack(self.byte_order + self.STRUCT_FORMAT, value)[0]
        elif isinstance(value, datetime):
            datetime_value = self._to_ticks(value)
        else:
            raise TypeError(f"Cannot parse value for field {self.name} of type {type(value).__name__} to a datetime")
        return datetime_value

    def _get_packed_size(self):
        return self.SIZE

    def _to_ticks(self, value):
        if not isinstance(value, datetime):
            return value

        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - self.ORIGIN
        microseconds = (delta.days * 86400 + delta.seconds) * 1000000 + delta.microseconds
        return microseconds * self.TICKS_PER_SECOND // 1000000

    def _to_string(self):
        value = self.get_value()
        if value is None:
            return "None"
        elif isinstance(value, int):
            return f"{value} ticks"
        return value.isoformat()


def _get_constants(constant_type):
    return {k: v for k, v in vars(constant_type).items() if not k.startswith("_") and isinstance(v, int)}
