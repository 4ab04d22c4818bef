from typing import Iterable, Optional


class TOTPError(Exception):
    """
    Base class for every error raised by totpclip.

    :param message: A human-readable description of the error.
    :type message: str
    """

    def __init__(self, message: str = "TOTP error.") -> None:
        self.message = message
        super().__init__(self.message)


class DecodeError(TOTPError, ValueError):
    """
    Raised when a secret is not valid base32 once whitespace is removed
    and letters are upper-cased.

    The full secret is never part of the message; only the offending
    character (if any) and the reason.
    """

    def __init__(self, reason: str, character: Optional[str] = None, position: Optional[int] = None) -> None:
        self.reason = reason
        self.character = character
        self.position = position
        if character is not None:
            message = "invalid base32 secret: {} {!r} at position {}".format(reason, character, position)
        else:
            message = "invalid base32 secret: {}".format(reason)
        super().__init__(message)


class ConfigError(TOTPError):
    """
    Raised when the secrets file is missing or cannot be parsed.
    """


class UnknownIdentityError(TOTPError, LookupError):
    """
    Raised by the secret store when no secret is registered for an identifier.

    :param identifier: the identifier as the user typed it
    :param available: the identifiers that do exist
    """

    def __init__(self, identifier: str, available: Iterable[str] = ()) -> None:
        self.identifier = identifier
        self.available = sorted(available)
        super().__init__("User '{}' not found".format(identifier))


class ClipboardError(TOTPError):
    """
    Raised when the code could not be written to the clipboard.
    """
