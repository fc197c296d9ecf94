# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import Commands, Direction, SMB1Command
from smb1protocol.dialects import DialectsField
from smb1protocol.smb_string import NullStringField
from smb1protocol.structure import BytesField, DateTimeField, FlagField, IntField


class SecurityMode:
    """
    [MS-CIFS] 2.2.4.52.2 SMB_COM_NEGOTIATE Response - SecurityMode
    """

    NEGOTIATE_USER_SECURITY = 0x01
    NEGOTIATE_ENCRYPT_PASSWORDS = 0x02
    NEGOTIATE_SECURITY_SIGNATURES_ENABLED = 0x04
    NEGOTIATE_SECURITY_SIGNATURES_REQUIRED = 0x08


class Capabilities:
    """
    [MS-CIFS] 2.2.4.52.2 SMB_COM_NEGOTIATE Response - Capabilities
    [MS-SMB] 2.2.4.5.2.1 Capabilities

    Also sent by the client in SMB_COM_SESSION_SETUP_ANDX.
    """

    CAP_RAW_MODE = 0x00000001
    CAP_MPX_MODE = 0x00000002
    CAP_UNICODE = 0x00000004
    CAP_LARGE_FILES = 0x00000008
    CAP_NT_SMBS = 0x00000010
    CAP_RPC_REMOTE_APIS = 0x00000020
    CAP_STATUS32 = 0x00000040
    CAP_LEVEL_II_OPLOCKS = 0x00000080
    CAP_LOCK_AND_READ = 0x00000100
    CAP_NT_FIND = 0x00000200
    CAP_BULK_TRANSFER = 0x00000400
    CAP_COMPRESSED_DATA = 0x00000800
    CAP_DFS = 0x00001000
    CAP_QUADWORD_ALIGNED = 0x00002000
    CAP_LARGE_READX = 0x00004000
    CAP_LARGE_WRITEX = 0x00008000
    CAP_LWIO = 0x00010000
    CAP_UNIX = 0x00800000
    CAP_DYNAMIC_REAUTH = 0x20000000
    CAP_EXTENDED_SECURITY = 0x80000000


class SMB1NegotiateRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.52.1 SMB_COM_NEGOTIATE Request

    The client lists the dialects it understands, in the order of preference
    the server indexes them by.
    """

    COMMAND = Commands.SMB_COM_NEGOTIATE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict()
        self.data_fields = OrderedDict(
            [
                ("dialects", DialectsField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1NegotiateResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.52.2 SMB_COM_NEGOTIATE Response
    [MS-SMB] 2.2.4.5.2 SMB_COM_NEGOTIATE Response

    The NT LM 0.12 response with a WordCount of 17. When the server selected
    a core dialect, or none at all with a dialect_index of 0xFFFF, only the
    dialect_index is present and every other field is None.

    When CAP_EXTENDED_SECURITY is set the data block holds the server GUID
    and the security blob instead of the challenge and names.
    """

    COMMAND = Commands.SMB_COM_NEGOTIATE
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("dialect_index", IntField(size=2)),
                (
                    "security_mode",
                    FlagField(size=1, flag_type=SecurityMode, default=0, optional=True),
                ),
                ("max_mpx_count", IntField(size=2, default=0, optional=True)),
                ("max_number_vcs", IntField(size=2, default=0, optional=True)),
                ("max_buffer_size", IntField(size=4, default=0, optional=True)),
                ("max_raw_size", IntField(size=4, default=0, optional=True)),
                ("session_key", IntField(size=4, default=0, optional=True)),
                (
                    "capabilities",
                    FlagField(size=4, flag_type=Capabilities, flag_strict=False, default=0, optional=True),
                ),
                ("system_time", DateTimeField(default=0, optional=True)),
                ("server_time_zone", IntField(size=2, unsigned=False, default=0, optional=True)),
                (
                    "challenge_length",
                    IntField(size=1, default=lambda s: len(s["challenge"]), optional=True),
                ),
            ]
        )
        self.data_fields = OrderedDict(
            [
                (
                    "challenge",
                    BytesField(
                        size=lambda s: s["challenge_length"].get_value(),
                        present=lambda s: s.is_nt_lm and not s.extended_security,
                    ),
                ),
                (
                    "domain_name",
                    NullStringField(present=lambda s: s.is_nt_lm and not s.extended_security),
                ),
                (
                    "server_name",
                    NullStringField(present=lambda s: s.is_nt_lm and not s.extended_security),
                ),
                (
                    "server_guid",
                    BytesField(size=16, present=lambda s: s.is_nt_lm and s.extended_security),
                ),
                (
                    "security_blob",
                    BytesField(present=lambda s: s.is_nt_lm and s.extended_security),
                ),
            ]
        )
        super().__init__(**kwargs)

    @property
    def is_nt_lm(self):
        # The raw value, the default is computed from the challenge field
        return self["challenge_length"].value is not None

    @property
    def extended_security(self):
        capabilities = self["capabilities"].get_value()
        return capabilities is not None and capabilities & Capabilities.CAP_EXTENDED_SECURITY != 0
