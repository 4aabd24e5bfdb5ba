"""Error taxonomy shared by the converter and the validators.

Every error is terminal for the current invocation. The CLI catches
`J2CError` once, prints the message to stderr and exits with `exit_code`.
"""


class J2CError(Exception):
    """Base class for conversion and validation failures."""

    kind = "Error"
    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InputNotFoundError(J2CError):
    kind = "NotFound"


class EmptyInputError(J2CError):
    kind = "EmptyInput"


class UnsupportedKeyError(J2CError):
    kind = "UnsupportedKey"


class MalformedJsonError(J2CError):
    kind = "MalformedJson"


class MalformedCsvError(J2CError):
    kind = "MalformedCsv"


class SeparateModeError(J2CError, NotImplementedError):
    """Raised when `separate` array mode meets sibling array fields."""

    kind = "NotImplemented"
