from typing import Callable

from injector import Injector, Module, provider, singleton
import pytest

from config import Config
from logger import LoggingModule
from viewer_module import DiffViewerModule


def make_config(**overrides) -> Config:
    config: Config = {
        'diff_source': 'http://localhost:9999',
        'repo_path': '/repo',
        'log_level': 'DEBUG',
        'max_fetch_tries': 1,
        'request_timeout_s': 5,
        'ignore_stale_responses': False,
        'lineno_width': 4,
        'use_color': False,
    }
    config.update(overrides)  # type: ignore
    return config


class StaticConfigModule(Module):
    def __init__(self, config: Config) -> None:
        self.config = config

    @provider
    @singleton
    def provide_config(self) -> Config:
        return self.config


@pytest.fixture
def make_injector() -> Callable[..., Injector]:
    def _make_injector(**overrides) -> Injector:
        return Injector([
            StaticConfigModule(make_config(**overrides)),
            LoggingModule,
            DiffViewerModule,
        ])
    return _make_injector
