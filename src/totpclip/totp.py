import calendar
import datetime
import math
import time
from typing import Optional, Union

from .otp import OTP

INTERVAL = 30

Instant = Union[int, float, datetime.datetime]


def _unix_seconds(for_time: Instant) -> int:
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo:
            return calendar.timegm(for_time.utctimetuple())
        # naive datetimes are local time
        return math.floor(time.mktime(for_time.timetuple()))
    return math.floor(for_time)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def timecode(self, for_time: Instant) -> int:
        """
        Accepts either a datetime or a Unix timestamp and returns the
        number of whole intervals elapsed since the epoch.
        """
        return _unix_seconds(for_time) // INTERVAL

    def at(self, for_time: Instant, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def remaining(self, for_time: Optional[Instant] = None) -> int:
        """
        Seconds until the code for ``for_time`` (default: now) expires,
        between 1 and 30.
        """
        if for_time is None:
            for_time = time.time()
        return INTERVAL - _unix_seconds(for_time) % INTERVAL


def generate(secret: str, now: Optional[Instant] = None) -> str:
    """
    Computes the six digit TOTP code for a base32 secret.

    :param secret: the shared secret in base32, any case, spaces allowed
    :param now: the instant to compute the code for, defaults to the
        current time
    :returns: the code, always six digits
    :raises DecodeError: if the secret is not valid base32
    """
    totp = TOTP(secret)
    if now is None:
        return totp.now()
    return totp.at(now)
