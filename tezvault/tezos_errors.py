"""Tezos application instruction codes and status words."""

from __future__ import annotations

from enum import IntEnum

CLA_TEZOS = 0x80


class Instruction(IntEnum):
    """Instruction codes understood by the Tezos Ledger applications."""

    VERSION = 0
    AUTHORIZE_BAKING = 1
    GET_PUBLIC_KEY = 2
    PROMPT_PUBLIC_KEY = 3
    SIGN = 4
    SIGN_UNSAFE = 5  # data that is already hashed
    RESET = 6
    QUERY_AUTH_KEY = 7
    QUERY_MAIN_HWM = 8
    GIT = 9
    SETUP = 10
    QUERY_ALL_HWM = 11
    DEAUTHORIZE = 12
    QUERY_AUTH_KEY_WITH_CURVE = 13
    HMAC = 14
    SIGN_WITH_HASH = 15


ERR_INCORRECT_LENGTH = 0x6700
ERR_INCOMPATIBLE_FILE_STRUCTURE = 0x6981
ERR_SECURITY_STATUS_UNSATISFIED = 0x6982
ERR_HID_REQUIRED = 0x6983
ERR_CONDITIONS_OF_USE_NOT_SATISFIED = 0x6985
ERR_INCORRECT_DATA = 0x6A80
ERR_FILE_NOT_FOUND = 0x9404
ERR_PARSE_ERROR = 0x9405
ERR_INCORRECT_PARAMS = 0x6B00
ERR_INCORRECT_LENGTH_LE = 0x6C00
ERR_INS_NOT_SUPPORTED = 0x6D00
ERR_INCORRECT_CLASS = 0x6E00
ERR_OK = 0x9000
ERR_INCORRECT_LENGTH_FOR_INS = 0x917E
ERR_MEMORY_ERROR = 0x9200
ERR_REFERENCED_DATA_NOT_FOUND = 0x6A88

_DESCRIPTIONS = {
    ERR_INCORRECT_LENGTH: "Incorrect length",
    ERR_INCOMPATIBLE_FILE_STRUCTURE: "Incompatible file structure",
    ERR_SECURITY_STATUS_UNSATISFIED: "Security status unsatisfied",
    ERR_HID_REQUIRED: "HID required",
    ERR_CONDITIONS_OF_USE_NOT_SATISFIED: "Conditions of use not satisfied",
    ERR_INCORRECT_DATA: "Incorrect data",
    ERR_FILE_NOT_FOUND: "File not found",
    ERR_PARSE_ERROR: "Parse error",
    ERR_INCORRECT_PARAMS: "Incorrect params",
    ERR_INCORRECT_LENGTH_LE: "Incorrect length",
    ERR_INS_NOT_SUPPORTED: "Ins not supported",
    ERR_INCORRECT_CLASS: "Incorrect class",
    ERR_OK: "Ok",
    ERR_INCORRECT_LENGTH_FOR_INS: "Incorrect length for ins",
    ERR_MEMORY_ERROR: "Memory error",
    ERR_REFERENCED_DATA_NOT_FOUND: "Referenced data not found",
}


class TezosError(Exception):
    """A non-success status word returned by the Tezos application."""

    def __init__(self, sw: int) -> None:
        self.sw = sw
        super().__init__(sw)

    @property
    def description(self) -> str:
        sw = self.sw
        if sw in _DESCRIPTIONS:
            return _DESCRIPTIONS[sw]
        if sw & 0xFFF0 == 0x63C0:
            return f"Invalid pin {sw & 0xF}"
        if sw & 0xFF00 == 0x6F00:
            return f"Technical problem {sw & 0xFF}"
        return "Unknown error"

    def __str__(self) -> str:
        return f"[{self.sw:#04x}]: {self.description}"