# Copyright: (c) 2019, Jordan Borean (@jborean93) <jborean93@gmail.com>
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

NO_ANDX_COMMAND = 0xFF
MAX_WORD_COUNT = 0xFF
MAX_BYTE_COUNT = 0xFFFF


class Dialects:
    """
    [MS-CIFS] v20180912

    1.7 Versioning and Capability Negotiation
    The dialect identifier strings a client lists in the SMB_COM_NEGOTIATE
    request. The server answers with the index of the one it selected.
    """

    PC_NETWORK_PROGRAM_1_0 = "PC NETWORK PROGRAM 1.0"
    PCLAN1_0 = "PCLAN1.0"
    MICROSOFT_NETWORKS_1_03 = "MICROSOFT NETWORKS 1.03"
    MICROSOFT_NETWORKS_3_0 = "MICROSOFT NETWORKS 3.0"
    LANMAN1_0 = "LANMAN1.0"
    LANMAN1_2 = "LANMAN1.2"
    WINDOWS_FOR_WORKGROUPS_3_1A = "Windows for Workgroups 3.1a"
    LM1_2X002 = "LM1.2X002"
    DOS_LM1_2X002 = "DOS LM1.2X002"
    LANMAN2_0 = "LANMAN2.0"
    LANMAN2_1 = "LANMAN2.1"
    DOS_LANMAN2_1 = "DOS LANMAN2.1"
    NT_LM_0_12 = "NT LM 0.12"
