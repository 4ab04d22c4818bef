import hashlib
import hmac
import logging

from . import secret as secret_codec

log = logging.getLogger(__name__)

DIGITS = 6
MAX_COUNTER = 2**64 - 1


def format_code(value: int) -> str:
    """
    Renders a truncated HMAC value as a fixed-width code, keeping
    leading zeros: 42 -> "000042".
    """
    return str(value % 10**DIGITS).zfill(DIGITS)


class OTP(object):
    """
    Base class for OTP handlers: HMAC-SHA1 over an 8 byte counter,
    dynamically truncated to six digits (RFC 4226).
    """

    def __init__(self, s: str) -> None:
        """
        :param s: secret in base32 format
        """
        self.secret = s

    def generate_otp(self, input: int) -> str:
        """
        :param input: the counter fed to the HMAC; a plain counter for
            HOTP, the number of elapsed time steps for TOTP
        :returns: six digit code
        :raises DecodeError: if the secret is not valid base32
        """
        key = self.byte_secret()
        if input < 0 or input > MAX_COUNTER:
            raise ValueError("input must be an unsigned 64-bit integer")
        log.debug("Generating OTP for counter %d", input)
        hmac_hash = hmac.new(key, self.int_to_bytestring(input), hashlib.sha1).digest()
        # low nibble of the last byte picks which 4 bytes to keep
        offset = hmac_hash[-1] & 0xF
        code = int.from_bytes(hmac_hash[offset : offset + 4], "big") & 0x7FFFFFFF
        return format_code(code)

    def byte_secret(self) -> bytes:
        return secret_codec.decode(self.secret)

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Big-endian counter message, zero padded to ``padding`` bytes.
        """
        return i.to_bytes(padding, "big")
