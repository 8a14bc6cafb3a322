"""Tests for environment-driven service configuration."""

import pytest

from reversi.config import ServiceConfig, load_config
from reversi.errors import ConfigurationError
from reversi.models import Difficulty


def test_defaults():
    config = load_config({})
    assert config == ServiceConfig()
    assert config.ai_move_delay_ms == 1000
    assert config.ai_move_delay_s == 1.0
    assert config.default_difficulty == Difficulty.MEDIUM
    assert config.max_search_depth == 5
    assert config.game_store_ttl_sec == 3600
    assert config.game_store_max == 1024
    assert config.log_level == "INFO"
    assert config.service_port == 8001
    assert config.cors_origins == ("*",)


def test_overrides():
    config = load_config({
        "REVERSI_AI_MOVE_DELAY_MS": "0",
        "REVERSI_DEFAULT_DIFFICULTY": "Hard",
        "REVERSI_MAX_SEARCH_DEPTH": "3",
        "REVERSI_GAME_STORE_TTL_SEC": "60",
        "REVERSI_GAME_STORE_MAX": "2",
        "REVERSI_LOG_LEVEL": "debug",
        "REVERSI_SERVICE_PORT": "9000",
        "CORS_ORIGINS": "http://a.example, http://b.example",
    })
    assert config.ai_move_delay_s == 0.0
    assert config.default_difficulty == Difficulty.HARD
    assert config.max_search_depth == 3
    assert config.game_store_ttl_sec == 60
    assert config.game_store_max == 2
    assert config.log_level == "DEBUG"
    assert config.service_port == 9000
    assert config.cors_origins == ("http://a.example", "http://b.example")


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("REVERSI_MAX_SEARCH_DEPTH", "2")
    assert load_config().max_search_depth == 2


def test_blank_value_uses_default():
    assert load_config({"REVERSI_AI_MOVE_DELAY_MS": " "}).ai_move_delay_ms == 1000


@pytest.mark.parametrize(
    "name,value",
    [
        ("REVERSI_AI_MOVE_DELAY_MS", "soon"),
        ("REVERSI_AI_MOVE_DELAY_MS", "-5"),
        ("REVERSI_MAX_SEARCH_DEPTH", "0"),
        ("REVERSI_MAX_SEARCH_DEPTH", "11"),
        ("REVERSI_GAME_STORE_MAX", "0"),
        ("REVERSI_SERVICE_PORT", "70000"),
        ("REVERSI_DEFAULT_DIFFICULTY", "nightmare"),
        ("REVERSI_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_raise(name, value):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config({name: value})
    assert exc_info.value.setting == name
    assert exc_info.value.context["setting"] == name


def test_config_is_frozen():
    config = ServiceConfig()
    with pytest.raises(AttributeError):
        config.max_search_depth = 3
