# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration management for charm metadata tooling."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging

ENV_PREFIX = 'CHARM_METADATA_'


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _level(name: str, fallback: int) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else fallback


@dataclass
class MetadataConfig:
    """Settings for loading and linting metadata, read from CHARM_METADATA_* variables."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    cache_enabled: bool = True
    max_cache_size: int = 128

    @classmethod
    def from_env(cls) -> 'MetadataConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=_env('LOG_LEVEL', cls.log_level),
            print_level=_env('PRINT_LEVEL', cls.print_level),
            cache_enabled=_env('CACHE_ENABLED', 'true').lower() == 'true',
            max_cache_size=int(_env('MAX_CACHE_SIZE', str(cls.max_cache_size))),
        )

    def set_logging(self) -> logging.Logger:
        """Send log records below print_level to stdout and the rest to stderr."""
        configure_split_stream_logging(
            level=_level(self.log_level, logging.INFO),
            stderr_level=_level(self.print_level, logging.WARNING),
            formatter=logging.Formatter(DEFAULT_FORMAT),
        )
        return logging.getLogger('charm_metadata')


# Global configuration instance
metadata_config = MetadataConfig.from_env()
