# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

import logging

from smb1protocol import lock, negotiate, printer, read_write, search, session, transaction, tree
from smb1protocol import open as file_open
from smb1protocol.command import SMB1Command
from smb1protocol.exceptions import UnsupportedCommand

log = logging.getLogger(__name__)


def _get_command_types():
    command_types = {}
    for module in [negotiate, session, tree, file_open, read_write, lock, search, transaction, printer]:
        for value in vars(module).values():
            if (
                isinstance(value, type)
                and issubclass(value, SMB1Command)
                and value.__module__ == module.__name__
                and value.COMMAND is not None
                and not value.IS_RAW
            ):
                command_types[(value.COMMAND, value.DIRECTION)] = value
    return command_types


# (command code, direction) -> SMB1Command class. SMB_COM_READ_RAW responses
# are sent outside of an SMB message and SMB_COM_NT_CANCEL has no response
# so neither is registered.
COMMAND_TYPES = _get_command_types()


def build_command(command, direction, **kwargs):
    """
    Creates an empty command body for the command code and direction.

    :param command: The Commands code of the body.
    :param direction: Direction.REQUEST or Direction.RESPONSE.
    :param kwargs: Options for the body, unicode, byte_order, body_offset
        and large_files for SMB_COM_LOCKING_ANDX requests.
    :return: The SMB1Command for the command and direction.
    """
    command_type = COMMAND_TYPES.get((command, direction), None)
    if command_type is None:
        raise UnsupportedCommand(command, direction)

    log.debug("Creating %s for command 0x%02X %s", command_type.__name__, command, direction)
    return command_type(**kwargs)


def unpack_command(command, direction, data, **kwargs):
    """
    Unpacks the command body at the start of data.

    :param command: The Commands code from the SMB header.
    :param direction: Direction.REQUEST or Direction.RESPONSE.
    :param data: The bytes that start with the WordCount of the body.
    :param kwargs: Options for the body, see build_command.
    :return: A tuple of the unpacked body and the number of bytes read.
    """
    body = build_command(command, direction, **kwargs)
    remaining = body.unpack(data)
    return body, len(data) - len(remaining)
