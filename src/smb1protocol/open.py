# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

from collections import OrderedDict

from smb1protocol.command import AlignmentPadField, Commands, Direction, SMB1Command
from smb1protocol.data_types import (
    ExtFileAttributes,
    FileAttributes,
    NamedPipeStatus,
    SMBDateField,
    SMBTimeField,
    UTimeField,
)
from smb1protocol.smb_string import BufferFormat, NullStringField, SMBStringField
from smb1protocol.structure import BytesField, DateTimeField, EnumField, FlagField, IntField


class AccessMode:
    """
    [MS-CIFS] 2.2.4.3.1 SMB_COM_OPEN Request - AccessMode

    The access mode is made up of 4 bit fields, these are the values of the
    AccessMode and SharingMode fields that are used the most.
    """

    ACCESS_READ = 0x0000
    ACCESS_WRITE = 0x0001
    ACCESS_READWRITE = 0x0002
    ACCESS_EXECUTE = 0x0003
    SHARE_COMPATIBILITY = 0x0000
    SHARE_DENY_READWRITE_EXECUTE = 0x0010
    SHARE_DENY_WRITE = 0x0020
    SHARE_DENY_READ_EXECUTE = 0x0030
    SHARE_DENY_NONE = 0x0040
    REFERENCE_LOCALITY_SEQUENTIAL = 0x0100
    REFERENCE_LOCALITY_RANDOM = 0x0200
    CACHE_MODE_DO_NOT_CACHE = 0x1000
    WRITE_THROUGH_MODE = 0x4000


class SeekMode:
    """
    [MS-CIFS] 2.2.4.19.1 SMB_COM_SEEK Request - Mode
    """

    SEEK_FROM_START = 0x0000
    SEEK_FROM_CURRENT = 0x0001
    SEEK_FROM_END = 0x0002


class NtRenameInformationLevel:
    """
    [MS-CIFS] 2.2.4.66.1 SMB_COM_NT_RENAME Request - InformationLevel
    """

    SMB_NT_RENAME_MOVE_CLUSTER_INFORMATION = 0x0102
    SMB_NT_RENAME_SET_LINK_INFO = 0x0103
    SMB_NT_RENAME_RENAME_FILE = 0x0104
    SMB_NT_RENAME_MOVE_FILE = 0x0105


class OpenAndXFlags:
    """
    [MS-CIFS] 2.2.4.41.1 SMB_COM_OPEN_ANDX Request - Flags
    """

    REQ_ATTRIB = 0x0001
    REQ_OPLOCK = 0x0002
    REQ_OPLOCK_BATCH = 0x0004
    SMB_OPEN_EXTENDED_RESPONSE = 0x0010


class ResourceType:
    """
    [MS-CIFS] 2.2.4.41.2 SMB_COM_OPEN_ANDX Response - ResourceType
    """

    FILE_TYPE_DISK = 0x0000
    FILE_TYPE_BYTE_MODE_PIPE = 0x0001
    FILE_TYPE_MESSAGE_MODE_PIPE = 0x0002
    FILE_TYPE_PRINTER = 0x0003
    FILE_TYPE_COMM_DEVICE = 0x0004
    FILE_TYPE_UNKNOWN = 0xFFFF


class NtCreateFlags:
    """
    [MS-CIFS] 2.2.4.64.1 SMB_COM_NT_CREATE_ANDX Request - Flags
    """

    NT_CREATE_REQUEST_OPLOCK = 0x00000002
    NT_CREATE_REQUEST_OPBATCH = 0x00000004
    NT_CREATE_OPEN_TARGET_DIR = 0x00000008
    NT_CREATE_REQUEST_EXTENDED_RESPONSE = 0x00000010


class ShareAccess:
    """
    [MS-CIFS] 2.2.4.64.1 SMB_COM_NT_CREATE_ANDX Request - ShareAccess
    """

    FILE_SHARE_NONE = 0x00000000
    FILE_SHARE_READ = 0x00000001
    FILE_SHARE_WRITE = 0x00000002
    FILE_SHARE_DELETE = 0x00000004


class CreateDisposition:
    """
    [MS-CIFS] 2.2.4.64.1 SMB_COM_NT_CREATE_ANDX Request - CreateDisposition
    """

    FILE_SUPERSEDE = 0x00000000
    FILE_OPEN = 0x00000001
    FILE_CREATE = 0x00000002
    FILE_OPEN_IF = 0x00000003
    FILE_OVERWRITE = 0x00000004
    FILE_OVERWRITE_IF = 0x00000005


class ImpersonationLevel:
    """
    [MS-CIFS] 2.2.4.64.1 SMB_COM_NT_CREATE_ANDX Request - ImpersonationLevel
    """

    SEC_ANONYMOUS = 0x00000000
    SEC_IDENTIFY = 0x00000001
    SEC_IMPERSONATE = 0x00000002
    SEC_DELEGATE = 0x00000003


class SecurityFlags:
    """
    [MS-CIFS] 2.2.4.64.1 SMB_COM_NT_CREATE_ANDX Request - SecurityFlags
    """

    SMB_SECURITY_CONTEXT_TRACKING = 0x01
    SMB_SECURITY_EFFECTIVE_ONLY = 0x02


class OplockLevel:
    """
    [MS-CIFS] 2.2.4.64.2 SMB_COM_NT_CREATE_ANDX Response - OpLockLevel
    """

    NO_OPLOCK = 0x00
    EXCLUSIVE_OPLOCK = 0x01
    BATCH_OPLOCK = 0x02
    LEVEL_II_OPLOCK = 0x03


class SMB1PathRequest(SMB1Command):
    """
    Base of the requests whose data block is a single SMB_STRING path named
    PATH_FIELD, sub classes add their parameter words with
    _get_parameter_fields().
    """

    DIRECTION = Direction.REQUEST
    PATH_FIELD = "file_name"

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(self._get_parameter_fields())
        self.data_fields = OrderedDict(
            [
                (self.PATH_FIELD, SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)

    def _get_parameter_fields(self):
        return []


class SMB1CreateDirectoryRequest(SMB1PathRequest):
    # [MS-CIFS] 2.2.4.1.1 SMB_COM_CREATE_DIRECTORY Request
    COMMAND = Commands.SMB_COM_CREATE_DIRECTORY
    PATH_FIELD = "directory_name"


class SMB1CreateDirectoryResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_CREATE_DIRECTORY
    DIRECTION = Direction.RESPONSE


class SMB1DeleteDirectoryRequest(SMB1PathRequest):
    # [MS-CIFS] 2.2.4.2.1 SMB_COM_DELETE_DIRECTORY Request
    COMMAND = Commands.SMB_COM_DELETE_DIRECTORY
    PATH_FIELD = "directory_name"


class SMB1DeleteDirectoryResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_DELETE_DIRECTORY
    DIRECTION = Direction.RESPONSE


class SMB1CheckDirectoryRequest(SMB1PathRequest):
    # [MS-CIFS] 2.2.4.17.1 SMB_COM_CHECK_DIRECTORY Request
    COMMAND = Commands.SMB_COM_CHECK_DIRECTORY
    PATH_FIELD = "directory_name"


class SMB1CheckDirectoryResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_CHECK_DIRECTORY
    DIRECTION = Direction.RESPONSE


class SMB1OpenRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.3.1 SMB_COM_OPEN Request
    """

    COMMAND = Commands.SMB_COM_OPEN
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("access_mode", FlagField(size=2, flag_type=AccessMode, flag_strict=False)),
                ("search_attributes", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1OpenResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.3.2 SMB_COM_OPEN Response
    """

    COMMAND = Commands.SMB_COM_OPEN
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("file_attrs", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
                ("last_modified", UTimeField()),
                ("file_size", IntField(size=4)),
                ("access_mode", FlagField(size=2, flag_type=AccessMode, flag_strict=False)),
            ]
        )
        super().__init__(**kwargs)


class SMB1CreateRequest(SMB1PathRequest):
    """
    [MS-CIFS] 2.2.4.4.1 SMB_COM_CREATE Request
    """

    COMMAND = Commands.SMB_COM_CREATE

    def _get_parameter_fields(self):
        return [
            ("file_attributes", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
            ("creation_time", UTimeField()),
        ]


class SMB1CreateResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.4.2 SMB_COM_CREATE Response
    """

    COMMAND = Commands.SMB_COM_CREATE
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1CreateNewRequest(SMB1CreateRequest):
    # [MS-CIFS] 2.2.4.16.1 SMB_COM_CREATE_NEW Request
    COMMAND = Commands.SMB_COM_CREATE_NEW


class SMB1CreateNewResponse(SMB1CreateResponse):
    COMMAND = Commands.SMB_COM_CREATE_NEW


class SMB1CreateTemporaryRequest(SMB1CreateRequest):
    """
    [MS-CIFS] 2.2.4.15.1 SMB_COM_CREATE_TEMPORARY Request

    The server picks a unique name for the file in directory_name.
    """

    COMMAND = Commands.SMB_COM_CREATE_TEMPORARY
    PATH_FIELD = "directory_name"


class SMB1CreateTemporaryResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.15.2 SMB_COM_CREATE_TEMPORARY Response
    """

    COMMAND = Commands.SMB_COM_CREATE_TEMPORARY
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("temporary_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1CloseRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.5.1 SMB_COM_CLOSE Request

    A last_time_modified of 0 or 0xFFFFFFFF leaves the time for the server
    to set.
    """

    COMMAND = Commands.SMB_COM_CLOSE
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("last_time_modified", UTimeField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1CloseResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_CLOSE
    DIRECTION = Direction.RESPONSE


class SMB1FlushRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.6.1 SMB_COM_FLUSH Request

    A fid of 0xFFFF flushes every file opened by the process.
    """

    COMMAND = Commands.SMB_COM_FLUSH
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1FlushResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_FLUSH
    DIRECTION = Direction.RESPONSE


def _search_attributes_parameter():
    return [
        ("search_attributes", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
    ]


class SMB1DeleteRequest(SMB1PathRequest):
    """
    [MS-CIFS] 2.2.4.7.1 SMB_COM_DELETE Request

    file_name may contain wildcards, every match with search_attributes is
    deleted.
    """

    COMMAND = Commands.SMB_COM_DELETE

    def _get_parameter_fields(self):
        return _search_attributes_parameter()


class SMB1DeleteResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_DELETE
    DIRECTION = Direction.RESPONSE


class SMB1RenameRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.8.1 SMB_COM_RENAME Request
    """

    COMMAND = Commands.SMB_COM_RENAME
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(_search_attributes_parameter())
        self.data_fields = OrderedDict(
            [
                ("old_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
                ("new_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1RenameResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_RENAME
    DIRECTION = Direction.RESPONSE


class SMB1NTRenameRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.66.1 SMB_COM_NT_RENAME Request
    """

    COMMAND = Commands.SMB_COM_NT_RENAME
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            _search_attributes_parameter()
            + [
                (
                    "information_level",
                    EnumField(
                        size=2,
                        enum_type=NtRenameInformationLevel,
                        default=NtRenameInformationLevel.SMB_NT_RENAME_RENAME_FILE,
                    ),
                ),
                ("reserved", IntField(size=4)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("old_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
                ("new_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1NTRenameResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_NT_RENAME
    DIRECTION = Direction.RESPONSE


class SMB1CopyRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.37.1 SMB_COM_COPY Request

    tid2 is the tree of the destination file.
    """

    COMMAND = Commands.SMB_COM_COPY
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("tid2", IntField(size=2)),
                ("open_function", IntField(size=2)),
                ("flags", IntField(size=2)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("old_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
                ("new_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1CopyResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.37.2 SMB_COM_COPY Response
    """

    COMMAND = Commands.SMB_COM_COPY
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("count", IntField(size=2)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("error_file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1QueryInformationRequest(SMB1PathRequest):
    # [MS-CIFS] 2.2.4.9.1 SMB_COM_QUERY_INFORMATION Request
    COMMAND = Commands.SMB_COM_QUERY_INFORMATION


class SMB1QueryInformationResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.9.2 SMB_COM_QUERY_INFORMATION Response
    """

    COMMAND = Commands.SMB_COM_QUERY_INFORMATION
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("file_attributes", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
                ("last_write_time", UTimeField()),
                ("file_size", IntField(size=4)),
                ("reserved", BytesField(size=10)),
            ]
        )
        super().__init__(**kwargs)


class SMB1SetInformationRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.10.1 SMB_COM_SET_INFORMATION Request
    """

    COMMAND = Commands.SMB_COM_SET_INFORMATION
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("file_attributes", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
                ("last_write_time", UTimeField()),
                ("reserved", BytesField(size=10)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("file_name", SMBStringField(buffer_format=BufferFormat.STRING)),
            ]
        )
        super().__init__(**kwargs)


class SMB1SetInformationResponse(SMB1Command):
    COMMAND = Commands.SMB_COM_SET_INFORMATION
    DIRECTION = Direction.RESPONSE


def _information2_times():
    return [
        ("create_date", SMBDateField()),
        ("create_time", SMBTimeField()),
        ("last_access_date", SMBDateField()),
        ("last_access_time", SMBTimeField()),
        ("last_write_date", SMBDateField()),
        ("last_write_time", SMBTimeField()),
    ]


class SMB1QueryInformation2Request(SMB1Command):
    """
    [MS-CIFS] 2.2.4.31.1 SMB_COM_QUERY_INFORMATION2 Request
    """

    COMMAND = Commands.SMB_COM_QUERY_INFORMATION2
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
            ]
        )
        super().__init__(**kwargs)


class SMB1QueryInformation2Response(SMB1Command):
    """
    [MS-CIFS] 2.2.4.31.2 SMB_COM_QUERY_INFORMATION2 Response
    """

    COMMAND = Commands.SMB_COM_QUERY_INFORMATION2
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            _information2_times()
            + [
                ("file_data_size", IntField(size=4)),
                ("file_allocation_size", IntField(size=4)),
                ("file_attributes", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
            ]
        )
        super().__init__(**kwargs)


class SMB1SetInformation2Request(SMB1Command):
    """
    [MS-CIFS] 2.2.4.30.1 SMB_COM_SET_INFORMATION2 Request

    A date and time of 0 leaves that timestamp unchanged.
    """

    COMMAND = Commands.SMB_COM_SET_INFORMATION2
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict([("fid", IntField(size=2))] + _information2_times())
        super().__init__(**kwargs)


class SMB1SetInformation2Response(SMB1Command):
    COMMAND = Commands.SMB_COM_SET_INFORMATION2
    DIRECTION = Direction.RESPONSE


class SMB1SeekRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.19.1 SMB_COM_SEEK Request

    The offset is signed as it is relative to mode.
    """

    COMMAND = Commands.SMB_COM_SEEK
    DIRECTION = Direction.REQUEST

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("mode", EnumField(size=2, enum_type=SeekMode)),
                ("offset", IntField(size=4, unsigned=False)),
            ]
        )
        super().__init__(**kwargs)


class SMB1SeekResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.19.2 SMB_COM_SEEK Response
    """

    COMMAND = Commands.SMB_COM_SEEK
    DIRECTION = Direction.RESPONSE

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("offset", IntField(size=4)),
            ]
        )
        super().__init__(**kwargs)


class SMB1OpenAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.41.1 SMB_COM_OPEN_ANDX Request
    """

    COMMAND = Commands.SMB_COM_OPEN_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("flags", FlagField(size=2, flag_type=OpenAndXFlags)),
                ("access_mode", FlagField(size=2, flag_type=AccessMode, flag_strict=False)),
                ("search_attrs", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
                ("file_attrs", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
                ("creation_time", UTimeField()),
                ("open_mode", IntField(size=2)),
                ("allocation_size", IntField(size=4)),
                ("timeout", IntField(size=4)),
                ("reserved", BytesField(size=4)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("pad", AlignmentPadField()),
                ("file_name", NullStringField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1OpenAndXResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.41.2 SMB_COM_OPEN_ANDX Response
    """

    COMMAND = Commands.SMB_COM_OPEN_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("fid", IntField(size=2)),
                ("file_attrs", FlagField(size=2, flag_type=FileAttributes, flag_strict=False)),
                ("last_write_time", UTimeField()),
                ("file_data_size", IntField(size=4)),
                ("access_rights", IntField(size=2)),
                ("resource_type", EnumField(size=2, enum_type=ResourceType, enum_strict=False)),
                ("nm_pipe_status", FlagField(size=2, flag_type=NamedPipeStatus)),
                ("open_results", IntField(size=2)),
                ("reserved", BytesField(size=6)),
            ]
        )
        super().__init__(**kwargs)


class SMB1NTCreateAndXRequest(SMB1Command):
    """
    [MS-CIFS] 2.2.4.64.1 SMB_COM_NT_CREATE_ANDX Request

    name_length is the length of file_name in bytes without the NULL
    terminator, file_name is aligned to 2 bytes when unicode is set.
    """

    COMMAND = Commands.SMB_COM_NT_CREATE_ANDX
    DIRECTION = Direction.REQUEST
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("reserved", IntField(size=1)),
                ("name_length", IntField(size=2, default=lambda s: s["file_name"].get_encoded_length())),
                ("flags", FlagField(size=4, flag_type=NtCreateFlags, flag_strict=False)),
                ("root_directory_fid", IntField(size=4)),
                ("desired_access", IntField(size=4)),
                ("allocation_size", IntField(size=8)),
                ("ext_file_attributes", FlagField(size=4, flag_type=ExtFileAttributes, flag_strict=False)),
                ("share_access", FlagField(size=4, flag_type=ShareAccess)),
                ("create_disposition", EnumField(size=4, enum_type=CreateDisposition)),
                ("create_options", IntField(size=4)),
                ("impersonation_level", EnumField(size=4, enum_type=ImpersonationLevel)),
                ("security_flags", FlagField(size=1, flag_type=SecurityFlags)),
            ]
        )
        self.data_fields = OrderedDict(
            [
                ("pad", AlignmentPadField()),
                ("file_name", NullStringField()),
            ]
        )
        super().__init__(**kwargs)


class SMB1NTCreateAndXResponse(SMB1Command):
    """
    [MS-CIFS] 2.2.4.64.2 SMB_COM_NT_CREATE_ANDX Response
    """

    COMMAND = Commands.SMB_COM_NT_CREATE_ANDX
    DIRECTION = Direction.RESPONSE
    IS_ANDX = True

    def __init__(self, **kwargs):
        self.parameter_fields = OrderedDict(
            [
                ("op_lock_level", EnumField(size=1, enum_type=OplockLevel)),
                ("fid", IntField(size=2)),
                ("create_disposition", IntField(size=4)),
                ("create_time", DateTimeField()),
                ("last_access_time", DateTimeField()),
                ("last_write_time", DateTimeField()),
                ("last_change_time", DateTimeField()),
                ("ext_file_attributes", FlagField(size=4, flag_type=ExtFileAttributes, flag_strict=False)),
                ("allocation_size", IntField(size=8)),
                ("end_of_file", IntField(size=8)),
                ("resource_type", EnumField(size=2, enum_type=ResourceType, enum_strict=False)),
                ("nm_pipe_status", FlagField(size=2, flag_type=NamedPipeStatus)),
                ("directory", IntField(size=1)),
            ]
        )
        super().__init__(**kwargs)
