from .exceptions import ClipboardError as ClipboardError
from .exceptions import ConfigError as ConfigError
from .exceptions import DecodeError as DecodeError
from .exceptions import TOTPError as TOTPError
from .exceptions import UnknownIdentityError as UnknownIdentityError
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import format_code as format_code
from .secret import decode as decode
from .totp import TOTP as TOTP
from .totp import generate as generate
