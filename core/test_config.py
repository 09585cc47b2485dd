import json

import pytest

from core.config import DEFAULT_TARGET_URL, Config, apply_env_overrides, load_config
from core.exceptions import ConfigurationError


def test_load_config_creates_default_file(tmp_path):
    config_file = tmp_path / "reencrypt-proxy" / "config.json"

    config = load_config(config_file, environ={})

    assert config == Config()
    assert config.proxy.port == 3000
    assert config.proxy.log_level == "info"
    assert config.client.target_url == DEFAULT_TARGET_URL
    assert json.loads(config_file.read_text())["proxy"]["port"] == 3000


def test_load_config_reads_existing_file(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"proxy": {"port": 4000, "dashboard": False}}))

    config = load_config(config_file, environ={})

    assert config.proxy.port == 4000
    assert config.proxy.dashboard is False
    assert config.client.proxy_address == "http://localhost:3000"


def test_corrupt_config_is_backed_up(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")

    config = load_config(config_file, environ={})

    assert config == Config()
    assert (tmp_path / "config.json.bak").read_text() == "{not json"
    assert json.loads(config_file.read_text()) == Config().model_dump()


def test_env_overrides_file_values(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"proxy": {"port": 4000}}))

    config = load_config(
        config_file,
        environ={
            "PROXY_PORT": "3333",
            "PROXY_LOG_LEVEL": "debug",
            "PROXY_DASHBOARD": "false",
            "PROXY_ADDRESS": "http://proxy:3333",
            "TARGET_URL": "http://target/data.json",
        },
    )

    assert config.proxy.port == 3333
    assert config.proxy.log_level == "debug"
    assert config.proxy.dashboard is False
    assert config.client.proxy_address == "http://proxy:3333"
    assert config.client.target_url == "http://target/data.json"


def test_empty_env_value_keeps_default():
    config = apply_env_overrides(Config(), {"PROXY_PORT": ""})
    assert config.proxy.port == 3000


def test_invalid_port_raises_configuration_error():
    with pytest.raises(ConfigurationError, match="Invalid environment configuration"):
        apply_env_overrides(Config(), {"PROXY_PORT": "not-a-port"})
