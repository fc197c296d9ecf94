# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import Commands, Direction, SMB1Command
from smb1protocol.data_types import DirectoryInformation, FileAttributes, ResumeKey
from smb1protocol.smb_string import BufferFormat, SMBStringField
from smb1protocol.structure import FlagField, IntField, ListField


class SMB1SearchRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.58.1 SMB_COM_SEARCH Request

    Starts a search with an empty resume_key or continues one with the
    ResumeKey of the last entry that was returned. SMB_COM_FIND,
    SMB_COM_FIND_UNIQUE and SMB_COM_FIND_CLOSE share this layout.
    """

    COMMAND = Commands.SMB_COM_SEARCH
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("max_count", IntField(size=2)),
                ("search_attributes", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
                ("buffer_format", IntField(size=1, default=BufferFormat.VARIABLE_BLOCK)),
                ("resume_key_length", IntField(size=2, default=lambda s: len(s["resume_key"]))),
                (
                    "resume_key",
                    ListField(
                        list_type=ResumeKey,
                        size=lambda s: s["resume_key_length"].get_value(),
                    ),
                ),
            ]
        )
        super().__init__(**kwargs)


class SMB1SearchResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.58.2 SMB_COM_SEARCH Response

    One DirectoryInformation entry for each file found, count is the number
    of entries.
    """

    COMMAND = Commands.SMB_COM_SEARCH
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("count", IntField(size=2, default=lambda s: len(s["directory_information_data"].get_value()))),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("buffer_format", IntField(size=1, default=BufferFormat.VARIABLE_BLOCK)),
                ("data_length", IntField(size=2, default=lambda s: len(s["directory_information_data"]))),
                (
                    "directory_information_data",
                    ListField(
                        list_type=DirectoryInformation,
                        list_count=lambda s: s["count"].get_value(),
                        size=lambda s: s["data_length"].get_value(),
                    ),
                ),
            ]
        )
        super().__init__(**kwargs)


class SMB1FindRequest(SMB1SearchRequest):
    # [MS-CIFS] 2.2.4.59.1 SMB_COM_FIND Request
    COMMAND = Commands.SMB_COM_FIND


class SMB1FindResponse(SMB1SearchResponse):
    COMMAND = Commands.SMB_COM_FIND


class SMB1FindUniqueRequest(SMB1SearchRequest):
    """
    [MS-CIFS] 2.2.4.60.1 SMB_COM_FIND_UNIQUE Request

    A single search request that closes the search once the entries are
    returned, resume_key must be empty.
    """

    COMMAND = Commands.SMB_COM_FIND_UNIQUE


class SMB1FindUniqueResponse(SMB1SearchResponse):
    COMMAND = Commands.SMB_COM_FIND_UNIQUE


class SMB1FindCloseRequest(SMB1SearchRequest):
    """
    [MS-CIFS] 2.2.4.61.1 SMB_COM_FIND_CLOSE Request

    Closes the search of an SMB_COM_FIND, file_name is empty and the
    resume_key identifies the search.
    """

    COMMAND = Commands.SMB_COM_FIND_CLOSE


class SMB1FindCloseResponse(SMB1SearchResponse):
    # [MS-CIFS] 2.2.4.61.2 SMB_COM_FIND_CLOSE Response, count is 0
    COMMAND = Commands.SMB_COM_FIND_CLOSE


class SMB1FindClose2Request(SMB1Command):
    """
    [MS-CIFS] 2.2.4.48.1 SMB_COM_FIND_CLOSE2 Request

    Closes a search started with TRANS2_FIND_FIRST2.
    """

    COMMAND = Commands.SMB_COM_FIND_CLOSE2
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("search_handle", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1FindClose2Response(SMB1Command):
    COMMAND = Commands.SMB_COM_FIND_CLOSE2
    DIRECTION = Direction.RESPONSE


class SMB1FindNotifyCloseRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.49.1 SMB_COM_FIND_NOTIFY_CLOSE Request
    """

    COMMAND = Commands.SMB_COM_FIND_NOTIFY_CLOSE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("monitor_handle", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1FindNotifyCloseResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_FIND_NOTIFY_CLOSE
    DIRECTION = Direction.RESPONSE
