from .config import (DEFAULT_LINENO_WIDTH, DEFAULT_MAX_FETCH_TRIES,
                     DEFAULT_REQUEST_TIMEOUT_S, Config)
from .config_module import ConfigModule
from .loader import ConfigLoader

__all__ = [
    'Config',
    'ConfigLoader',
    'ConfigModule',
    'DEFAULT_LINENO_WIDTH',
    'DEFAULT_MAX_FETCH_TRIES',
    'DEFAULT_REQUEST_TIMEOUT_S',
]
