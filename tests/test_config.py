"""
Tests for reading the secrets file and case-insensitive lookup.
"""

import json
from pathlib import Path

import pytest

from totpclip import ConfigError, UnknownIdentityError
from totpclip.config import CONFIG_ENV, SecretStore, config_path, load_config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "totp.json"
    path.write_text(json.dumps({"Alice": "JBSWY3DPEHPK3PXP", "bob": "GEZDGNBVGY3TQOJQ"}))
    return path


def test_load_config(config_file):
    assert load_config(config_file) == {"Alice": "JBSWY3DPEHPK3PXP", "bob": "GEZDGNBVGY3TQOJQ"}


def test_missing_file(tmp_path):
    """The error explains the expected file format."""
    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path / "nope.json")

    assert "config file not found" in excinfo.value.message
    assert '"user_1": "totp_secret_1"' in excinfo.value.message


@pytest.mark.parametrize(
    "content, message",
    [
        ("{not json", "invalid JSON"),
        ('["JBSWY3DPEHPK3PXP"]', "expected a JSON object"),
        ('{"alice": 12}', "must be a string"),
    ],
    ids=["bad_json", "not_an_object", "non_string_secret"],
)
def test_malformed_file(tmp_path, content, message):
    path = tmp_path / "totp.json"
    path.write_text(content)

    with pytest.raises(ConfigError, match=message):
        load_config(path)


def test_config_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "secrets.json"))

    assert config_path() == tmp_path / "secrets.json"


def test_config_path_from_dotenv(monkeypatch, tmp_path):
    """A .env file in the working directory may point at the secrets file."""
    (tmp_path / ".env").write_text("{}={}\n".format(CONFIG_ENV, tmp_path / "from_dotenv.json"))
    # setenv first so monkeypatch restores the variable dotenv loads
    monkeypatch.setenv(CONFIG_ENV, "placeholder")
    monkeypatch.delenv(CONFIG_ENV)
    monkeypatch.chdir(tmp_path)

    assert config_path() == tmp_path / "from_dotenv.json"


def test_config_path_default(monkeypatch, tmp_path):
    monkeypatch.setenv(CONFIG_ENV, "")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    assert config_path() == Path(tmp_path) / ".totp_config.json"


@pytest.mark.parametrize("identifier", ["alice", "ALICE", "Alice", "aLiCe"])
def test_lookup_is_case_insensitive(config_file, identifier):
    store = SecretStore.from_file(config_file)

    assert store.lookup(identifier) == "JBSWY3DPEHPK3PXP"
    assert identifier in store


def test_unknown_identity(config_file):
    """Misses name the identifier and list the users that do exist."""
    store = SecretStore.from_file(config_file)

    with pytest.raises(UnknownIdentityError) as excinfo:
        store.lookup("Carol")

    assert excinfo.value.identifier == "Carol"
    assert excinfo.value.available == ["Alice", "bob"]
    assert "carol" not in store


def test_store_mapping_protocol(config_file):
    store = SecretStore.from_file(config_file)

    assert len(store) == 2
    assert store.identities() == ["Alice", "bob"]
    assert sorted(store) == ["Alice", "bob"]
    assert store["BOB"] == "GEZDGNBVGY3TQOJQ"
    assert 42 not in store
