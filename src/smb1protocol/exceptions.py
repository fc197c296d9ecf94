# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)


class SMBException(Exception):
    # Generic SMB Exception with a message
    pass


class InvalidFieldDefinition(SMBException):
    # Raised when a Field is declared with invalid arguments
    pass


class TruncatedData(SMBException):
    """The input ended before a field could be fully read.

    The offset is relative to the first byte handed to the body decoder, the
    WordCount byte of the Parameters block.
    """

    @property
    def field(self):
        return self.args[0]

    @property
    def needed(self):
        return self.args[1]

    @property
    def got(self):
        return self.args[2]

    @property
    def offset(self):
        return self.args[3]

    @property
    def message(self):
        return (
            f"Truncated data for field '{self.field}' at offset {self.offset}: needed {self.needed} bytes but only "
            f"{self.got} available"
        )

    def __str__(self):
        return self.message


class MalformedData(SMBException):
    # The input has the right length but cannot be interpreted
    @property
    def field(self):
        return self.args[0]

    @property
    def reason(self):
        return self.args[1]

    @property
    def message(self):
        return f"Malformed data for field '{self.field}': {self.reason}"

    def __str__(self):
        return self.message


class UnsupportedCommand(SMBException):
    @property
    def command(self):
        return self.args[0]

    @property
    def direction(self):
        return self.args[1]

    @property
    def message(self):
        command = self.command
        if isinstance(command, int):
            command = f"0x{command:02X}"
        return f"Command {command} has no body defined in the {self.direction} direction"

    def __str__(self):
        return self.message


class InvariantViolation(SMBException):
    # A value set on a message cannot be encoded
    @property
    def description(self):
        return self.args[0]

    @property
    def message(self):
        return f"Invalid message value: {self.description}"

    def __str__(self):
        return self.message
