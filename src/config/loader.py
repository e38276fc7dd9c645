import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from injector import inject
import requests
import yaml

from .config import (DEFAULT_LINENO_WIDTH, DEFAULT_MAX_FETCH_TRIES,
                     DEFAULT_REQUEST_TIMEOUT_S, Config)


@inject
@dataclass
class ConfigLoader:
    config_source: str
    logger: logging.Logger

    config: Config = field(init=False)

    def load_config(self) -> Config:
        config_contents: Optional[str] = None
        if self.config_source.startswith('https://') or self.config_source.startswith('http://'):
            max_num_tries = 3
            for try_num in range(max_num_tries):
                try:
                    r = requests.get(self.config_source)
                    r.raise_for_status()
                    config_contents = r.text
                    break
                except requests.RequestException:
                    if try_num == max_num_tries - 1:
                        raise
                    self.logger.exception(f"Error while downloading config from '{self.config_source}'.")
                    time.sleep(1 + try_num * 2)
        else:
            with open(self.config_source, 'r', encoding='utf-8') as f:
                config_contents = f.read()

        assert config_contents is not None
        self.logger.info("Loading configuration from '%s'.", self.config_source)
        config: Config = yaml.safe_load(config_contents)
        assert isinstance(config, dict), f"The configuration must be a mapping. Got: {config} with type: {type(config)}"

        log_level = logging.getLevelName(config.get('log_level', 'INFO') or 'INFO')
        self.logger.setLevel(log_level)

        diff_source = config.get('diff_source')
        assert isinstance(diff_source, str) and diff_source, f"`diff_source` must be a URL or a file path. Got: {diff_source}"
        # Allow a base URL with or without a trailing slash.
        config['diff_source'] = diff_source.rstrip('/') if diff_source.startswith(('http://', 'https://')) else diff_source

        if config.get('repo_path') is None:
            config['repo_path'] = '.'

        max_fetch_tries = config.get('max_fetch_tries')
        if max_fetch_tries is None:
            config['max_fetch_tries'] = DEFAULT_MAX_FETCH_TRIES
        else:
            assert isinstance(max_fetch_tries, int) and max_fetch_tries >= 1, f"`max_fetch_tries` must be a positive integer. Got: {max_fetch_tries}"

        if config.get('request_timeout_s') is None:
            config['request_timeout_s'] = DEFAULT_REQUEST_TIMEOUT_S

        if config.get('ignore_stale_responses') is None:
            config['ignore_stale_responses'] = False

        lineno_width = config.get('lineno_width')
        if lineno_width is None:
            config['lineno_width'] = DEFAULT_LINENO_WIDTH
        else:
            assert isinstance(lineno_width, int) and lineno_width >= 1, f"`lineno_width` must be a positive integer. Got: {lineno_width}"

        if config.get('use_color') is None:
            config['use_color'] = True

        self.config = config
        self.logger.info("Loaded configuration for diff source '%s'.", config['diff_source'])
        return config
