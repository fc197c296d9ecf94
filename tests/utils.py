# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import string
import types

from smb1protocol import Dialects
from smb1protocol.command import AlignmentPadField, OffsetPadField
from smb1protocol.dialects import DialectsField
from smb1protocol.smb_string import NULL_TERMINATED_FORMATS, NullStringField, SMBStringField
from smb1protocol.structure import (
    BytesField,
    DateTimeField,
    EnumField,
    FlagField,
    IntField,
    ListField,
    StructureField,
    _get_constants,
)


def random_bytes(rng, length):
    return bytes(rng.randrange(256) for _ in range(length))


def random_text(rng, max_length=12):
    return "".join(rng.choice(string.ascii_letters + string.digits + "\\.") for _ in range(rng.randrange(max_length)))


def random_int(rng, field):
    bits = field.size * 8
    if field.unsigned:
        return rng.randrange(1 << bits)
    return rng.randrange(-(1 << (bits - 1)), 1 << (bits - 1))


def random_entry(rng, list_field):
    entry = list_field._new_entry()
    if isinstance(entry, StructureField):
        structure = entry.structure_type()
        populate_random(rng, structure)
        return structure
    return random_value(rng, entry)


def random_value(rng, field):
    if isinstance(field, EnumField):
        return rng.choice(sorted(_get_constants(field.enum_type).values()))
    elif isinstance(field, FlagField):
        if not field.flag_strict:
            return random_int(rng, field)
        value = 0
        for flag in _get_constants(field.flag_type).values():
            if rng.random() < 0.5:
                value |= flag
        return value
    elif isinstance(field, IntField):
        return random_int(rng, field)
    elif isinstance(field, DateTimeField):
        return rng.randrange(1 << (field.SIZE * 8))
    elif isinstance(field, DialectsField):
        constants = [v for k, v in vars(Dialects).items() if not k.startswith("_")]
        return [rng.choice(constants) for _ in range(rng.randrange(1, 4))]
    elif isinstance(field, ListField):
        return [random_entry(rng, field) for _ in range(rng.randrange(4))]
    elif isinstance(field, StructureField):
        structure = field.structure_type()
        populate_random(rng, structure)
        return structure
    elif isinstance(field, SMBStringField):
        if field.buffer_format in NULL_TERMINATED_FORMATS:
            return random_text(rng)
        return random_bytes(rng, rng.randrange(16))
    elif isinstance(field, NullStringField):
        return random_text(rng)
    elif isinstance(field, BytesField):
        if isinstance(field.size, int):
            return random_bytes(rng, field.size)
        return random_bytes(rng, rng.randrange(16))

    raise TypeError(f"No random value for {type(field).__name__}")


def populate_random(rng, structure):
    """
    Sets a random value on every field of the structure that is not derived
    from another field. Length and offset fields keep their computed defaults
    and pads are left for the structure to calculate.
    """
    offset_fields = set()
    for field in structure.fields.values():
        if isinstance(field, OffsetPadField):
            offset_fields.add(field.offset_field)

    for name, field in structure.fields.items():
        if (
            isinstance(field.default, types.LambdaType)
            or field.present is not None
            or isinstance(field, (AlignmentPadField, OffsetPadField))
            or name in offset_fields
            or name == "andx"
        ):
            continue

        structure[name] = random_value(rng, field)

    return structure


def field_values(structure):
    return {name: field.get_value() for name, field in structure.fields.items()}
