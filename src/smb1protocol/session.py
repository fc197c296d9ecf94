# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import AlignmentPadField, Commands, Direction, SMB1Command
from smb1protocol.negotiate import Capabilities
from smb1protocol.smb_string import NullStringField
from smb1protocol.structure import BytesField, FlagField, IntField


class SessionSetupAction:
    """
    [MS-CIFS] 2.2.4.53.2 SMB_COM_SESSION_SETUP_ANDX Response - Action
    """

    SMB_SETUP_GUEST = 0x0001
    SMB_SETUP_USE_LANMAN_KEY = 0x0002


class SMB1SessionSetupAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.53.1 SMB_COM_SESSION_SETUP_ANDX Request

    The NT LM 0.12 form with separate OEM and Unicode passwords. The strings
    that follow the passwords are aligned to a 2 byte boundary when unicode
    is set.
    """

    COMMAND = Commands.SMB_COM_SESSION_SETUP_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("max_buffer_size", IntField(size=2)),
                ("max_mpx_count", IntField(size=2)),
                ("vc_number", IntField(size=2)),
                ("session_key", IntField(size=4)),
                ("oem_password_len", IntField(size=2, default=lambda s: len(s["oem_password"]))),
                ("unicode_password_len", IntField(size=2, default=lambda s: len(s["unicode_password"]))),
                ("reserved", IntField(size=4)),
                ("capabilities", FlagField(size=4, flag_type=Capabilities, flag_strict=False)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("oem_password", BytesField(size=lambda s: s["oem_password_len"].get_value())),
                ("unicode_password", BytesField(size=lambda s: s["unicode_password_len"].get_value())),
                ("pad", AlignmentPadField()),
                ("account_name", NullStringField()),
                ("primary_domain", NullStringField()),
                ("native_os", NullStringField()),
                ("native_lan_man", NullStringField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1SessionSetupAndXResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.53.2 SMB_COM_SESSION_SETUP_ANDX Response
    """

    COMMAND = Commands.SMB_COM_SESSION_SETUP_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("action", FlagField(size=2, flag_type=SessionSetupAction, flag_strict=False)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("pad", AlignmentPadField()),
                ("native_os", NullStringField()),
                ("native_lan_man", NullStringField()),
                ("primary_domain", NullStringField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1LogoffAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.54.1 SMB_COM_LOGOFF_ANDX Request
    """

    COMMAND = Commands.SMB_COM_LOGOFF_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True


class SMB1LogoffAndXResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_LOGOFF_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True


class SMB1EchoRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.39.1 SMB_COM_ECHO Request

    The server sends echo_count responses that each carry data back.
    """

    COMMAND = Commands.SMB_COM_ECHO
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("echo_count", IntField(size=2)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("data", BytesField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1EchoResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.39.2 SMB_COM_ECHO Response
    """

    COMMAND = Commands.SMB_COM_ECHO
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("sequence_number", IntField(size=2)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("data", BytesField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1ProcessExitRequest(SMB1Command):
    # [MS-CIFS] 2.2.4.18.1 SMB_COM_PROCESS_EXIT Request
    COMMAND = Commands.SMB_COM_PROCESS_EXIT
    DIRECTION = Direction.REQUEST


class SMB1ProcessExitResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_PROCESS_EXIT
    DIRECTION = Direction.RESPONSE


class SMB1NTCancelRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.65.1 SMB_COM_NT_CANCEL Request

    The request is matched to the pending command by the SMB header, the
    server never sends a response to it.
    """

    COMMAND = Commands.SMB_COM_NT_CANCEL
    DIRECTION = Direction.REQUEST
