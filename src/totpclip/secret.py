import base64
import binascii

from .exceptions import DecodeError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

# Unpadded lengths (mod 8) that leave a partial byte behind.
_INVALID_REMAINDERS = {1, 3, 6}


def normalize(secret: str) -> str:
    """
    Strips all whitespace and upper-cases the secret, so that
    "jbsw y3dp" and "JBSWY3DP" are the same secret.
    """
    return "".join(secret.split()).upper()


def decode(secret: str) -> bytes:
    """
    Decodes a base32 secret into raw key bytes.

    Padding is optional; missing "=" characters are added back before
    decoding.

    :param secret: the secret in base32 format, any case, spaces allowed
    :returns: the key bytes
    :raises DecodeError: if the secret is not valid base32
    """
    stripped = "".join(secret.split())
    # str.upper maps some non-ASCII letters into the alphabet
    for position, char in enumerate(stripped):
        if not char.isascii():
            raise DecodeError("illegal character", character=char, position=position)
    normalized = stripped.upper()
    unpadded = normalized.rstrip("=")
    if not unpadded:
        raise DecodeError("no key material")

    for position, char in enumerate(unpadded):
        if char not in ALPHABET:
            reason = "misplaced padding" if char == "=" else "illegal character"
            raise DecodeError(reason, character=char, position=position)

    if len(unpadded) % 8 in _INVALID_REMAINDERS:
        raise DecodeError("length {} does not decode to whole bytes".format(len(unpadded)))

    missing_padding = len(unpadded) % 8
    if missing_padding != 0:
        unpadded += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(unpadded)
    except binascii.Error as e:
        raise DecodeError(str(e)) from e
