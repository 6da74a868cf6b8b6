from pathlib import Path

import pytest

from layercache.domain.exceptions import CacheConfigurationError
from layercache.domain.models.common import CacheOptions
from layercache.infrastructure.config import settings
from layercache.infrastructure.config.settings import (
    clear_test_config,
    env_var_name,
    get_cache_options,
    get_config,
    load_configuration,
    set_config_for_testing,
)


@pytest.fixture
def yaml_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "cache:\n"
        "  capacity: 25\n"
        "  ttl_seconds: 12.5\n"
        "logging.level: DEBUG\n"
    )
    return path


def test_env_var_name():
    assert env_var_name("cache.capacity") == "LAYERCACHE_CACHE_CAPACITY"


def test_default_returned_when_missing():
    assert get_config("cache.capacity") is None
    assert get_config("cache.capacity", 7) == 7


def test_yaml_values_loaded_as_nested_and_flat_keys(yaml_file: Path, tmp_path: Path):
    load_configuration(config_file=yaml_file, env_file=tmp_path / "absent.env", force=True)
    assert get_config("cache.capacity") == 25
    assert get_config("cache.ttl_seconds") == 12.5
    assert get_config("logging.level") == "DEBUG"


def test_environment_overrides_yaml(yaml_file: Path, tmp_path: Path, monkeypatch):
    load_configuration(config_file=yaml_file, env_file=tmp_path / "absent.env", force=True)
    monkeypatch.setenv("LAYERCACHE_CACHE_CAPACITY", "40")
    monkeypatch.setenv("LAYERCACHE_CACHE_THREAD_SAFE", "true")
    assert get_config("cache.capacity") == 40
    assert get_config("cache.thread_safe") is True


def test_dotenv_file_does_not_override_environment(tmp_path: Path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("LAYERCACHE_CACHE_CAPACITY=11\nLAYERCACHE_CACHE_TTL_SECONDS=4.5\n")
    monkeypatch.setenv("LAYERCACHE_CACHE_CAPACITY", "99")
    # Registered with monkeypatch so the value loaded from .env is cleaned up
    monkeypatch.setenv("LAYERCACHE_CACHE_TTL_SECONDS", "")
    monkeypatch.delenv("LAYERCACHE_CACHE_TTL_SECONDS")
    load_configuration(config_file=tmp_path / "missing.yaml", env_file=env_file, force=True)
    assert get_config("cache.capacity") == 99
    assert get_config("cache.ttl_seconds") == 4.5


def test_dotenv_found_by_searching_upwards(tmp_path: Path, monkeypatch):
    (tmp_path / ".env").write_text("A=1\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    assert settings.find_dotenv_path() == tmp_path / ".env"


def test_test_overrides_take_precedence(monkeypatch):
    monkeypatch.setenv("LAYERCACHE_CACHE_CAPACITY", "40")
    set_config_for_testing({"cache.capacity": 3})
    assert get_config("cache.capacity") == 3
    clear_test_config()
    assert get_config("cache.capacity") == 40


def test_invalid_yaml_raises_configuration_error(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("cache: [unclosed\n")
    with pytest.raises(CacheConfigurationError):
        load_configuration(config_file=bad, env_file=tmp_path / "absent.env", force=True)


def test_cache_options_default_to_plain_store():
    assert get_cache_options() == CacheOptions()


def test_cache_options_from_config():
    set_config_for_testing({
        "cache.capacity": "50",
        "cache.ttl_seconds": 30,
        "cache.flush_interval_seconds": "120",
        "cache.thread_safe": "yes",
    })
    assert get_cache_options() == CacheOptions(capacity=50, ttl=30.0, flush_interval=120.0, thread_safe=True)


@pytest.mark.parametrize("key,value", [
    ("cache.capacity", "lots"),
    ("cache.capacity", 0),
    ("cache.capacity", True),
    ("cache.ttl_seconds", "soon"),
    ("cache.thread_safe", "maybe"),
])
def test_invalid_cache_options_raise(key, value):
    set_config_for_testing({key: value})
    with pytest.raises(CacheConfigurationError):
        get_cache_options()


@pytest.mark.parametrize("value", [2.5, "2.5"])
def test_fractional_capacity_is_rejected(value):
    set_config_for_testing({"cache.capacity": value})
    with pytest.raises(CacheConfigurationError):
        get_cache_options()


def test_fractional_capacity_from_environment_is_rejected(monkeypatch):
    monkeypatch.setenv("LAYERCACHE_CACHE_CAPACITY", "2.5")
    with pytest.raises(CacheConfigurationError):
        get_cache_options()


def test_whole_float_capacity_is_accepted():
    set_config_for_testing({"cache.capacity": 4.0})
    assert get_cache_options().capacity == 4
