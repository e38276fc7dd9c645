import logging
import os
from unittest import mock

from injector import Injector
import pytest
import requests

from config import Config, ConfigLoader, ConfigModule
from logger import LoggingModule

TESTS_DIR = os.path.dirname(__file__)


def _load(name: str) -> Config:
    inj = Injector([
        ConfigModule(os.path.join(TESTS_DIR, "configs", name)),
        LoggingModule,
    ])
    return inj.get(Config)


def test_defaults():
    config = _load("defaults.yml")
    assert config['diff_source'] == 'http://localhost:8080'
    assert config['repo_path'] == '.'
    assert config['max_fetch_tries'] == 1
    assert config['request_timeout_s'] == 30
    assert config['ignore_stale_responses'] is False
    assert config['lineno_width'] == 4
    assert config['use_color'] is True


def test_all_set():
    inj = Injector([
        ConfigModule(os.path.join(TESTS_DIR, "configs/full.yml")),
        LoggingModule,
    ])
    config = inj.get(Config)
    assert config['diff_source'] == 'tests/data/diffs.json'
    assert config['repo_path'] == '/work/repo'
    assert config['max_fetch_tries'] == 3
    assert config['request_timeout_s'] == 10
    assert config['ignore_stale_responses'] is True
    assert config['lineno_width'] == 6
    assert config['use_color'] is False
    assert inj.get(logging.Logger).level == logging.DEBUG


def test_invalid():
    with pytest.raises(AssertionError):
        _load("invalid_max_fetch_tries.yml")


def test_loader_keeps_config():
    inj = Injector([
        ConfigModule(os.path.join(TESTS_DIR, "configs/defaults.yml")),
        LoggingModule,
    ])
    loader = inj.get(ConfigLoader)
    config = loader.load_config()
    assert config['diff_source'] == 'http://localhost:8080'
    assert loader.config is config


@mock.patch("config.loader.time.sleep")
@mock.patch.object(requests, "get")
def test_load_from_url(mock_requests_get, mock_sleep):
    response = mock.MagicMock()
    response.text = "diff_source: data.json\n"
    mock_requests_get.side_effect = [requests.ConnectionError("Connection refused"), response]
    inj = Injector([
        ConfigModule("https://example.com/config.yml"),
        LoggingModule,
    ])
    config = inj.get(Config)
    assert config['diff_source'] == 'data.json'
    assert mock_requests_get.call_count == 2
    mock_sleep.assert_called_once_with(1)
