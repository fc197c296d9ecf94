# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import types

from smb1protocol.smb_string import BufferFormat, SMBString, SMBStringField
from smb1protocol.structure import ListField


class DialectsField(ListField):
    """
    [MS-CIFS] 2.2.4.52.1 SMB_COM_NEGOTIATE Request - Dialects

    The dialect identifiers the client understands, each one an SMB_STRING
    with the 0x02 buffer format. The data block is read until it is
    exhausted and get_value() returns the dialect names in wire order.
    """

    def __init__(self, **kwargs):
        super().__init__(list_type=SMBStringField(buffer_format=BufferFormat.DIALECT), **kwargs)

    def get_value(self):
        return [entry.to_text() for entry in super().get_value()]

    def _parse_value(self, value):
        list_value = super()._parse_value(value)
        if isinstance(list_value, types.LambdaType):
            return list_value
        return [entry if isinstance(entry, SMBString) else SMBString.dialect(entry) for entry in list_value]

    def _to_string(self):
        return ", ".join(self.get_value())
