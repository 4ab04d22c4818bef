import json
import logging
from os import getenv
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigError, UnknownIdentityError

log = logging.getLogger(__name__)

CONFIG_ENV = "TOTP_CONFIG"
CONFIG_FILENAME = ".totp_config.json"
CONFIG_FORMAT = '{"user_1": "totp_secret_1", "user_2": "totp_secret_2"}'


def config_path() -> Path:
    """
    Location of the secrets file: $TOTP_CONFIG (a .env file in the
    working directory is honoured), else ~/.totp_config.json
    """
    load_dotenv(find_dotenv(usecwd=True))
    override = getenv(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILENAME


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """
    Reads the identifier -> secret mapping from a JSON file.

    :param path: the file to read, defaults to config_path()
    :returns: the mapping, keys as written in the file
    :raises ConfigError: if the file is missing or malformed
    """
    path = Path(path).expanduser() if path is not None else config_path()
    if not path.exists():
        raise ConfigError(
            "config file not found: {}\nCreate a JSON file with format: {}".format(path, CONFIG_FORMAT)
        )

    log.debug("Reading secrets from %s", path)
    try:
        data = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError("error reading config file: {}".format(e)) from e

    try:
        config = json.loads(data)
    except json.JSONDecodeError as e:
        raise ConfigError("invalid JSON in config file: {}".format(e)) from e

    if not isinstance(config, dict):
        raise ConfigError("invalid config file: expected a JSON object like {}".format(CONFIG_FORMAT))
    for identifier, secret in config.items():
        if not isinstance(secret, str):
            raise ConfigError("invalid config file: secret for '{}' must be a string".format(identifier))
    return config


class SecretStore(Mapping[str, str]):
    """
    Case-insensitive view over the identifier -> secret mapping.
    """

    def __init__(self, config: Mapping[str, str]) -> None:
        self._names = {identifier.lower(): identifier for identifier in config}
        self._secrets = {identifier.lower(): secret for identifier, secret in config.items()}

    @classmethod
    def from_file(cls, path: Optional[Union[str, Path]] = None) -> "SecretStore":
        return cls(load_config(path))

    def lookup(self, identifier: str) -> str:
        """
        :param identifier: the user id, any case
        :returns: the base32 secret
        :raises UnknownIdentityError: if no secret is registered under that id
        """
        try:
            return self._secrets[identifier.lower()]
        except KeyError:
            raise UnknownIdentityError(identifier, self._names.values()) from None

    def identities(self):
        return sorted(self._names.values())

    def __getitem__(self, identifier: str) -> str:
        return self._secrets[identifier.lower()]

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.lower() in self._secrets

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._secrets)
