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

"""Configuration management for the event validator."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .utils.logging_utils import configure_split_stream_logging, level_from_name


@dataclass
class ValidatorConfig:
    """Process-wide settings for validation callers and the linter."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    # None selects the latest registered schema generation
    default_version: Optional[str] = None
    max_suggestions: int = 3

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('PORTCALL_EVENTS_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('PORTCALL_EVENTS_PRINT_LEVEL', 'WARNING'),
            default_version=os.getenv('PORTCALL_EVENTS_DEFAULT_VERSION') or None,
            max_suggestions=int(os.getenv('PORTCALL_EVENTS_MAX_SUGGESTIONS', '3')),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = level_from_name(self.log_level, logging.INFO)
        stderr_level = level_from_name(self.print_level, logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('portcall_event_validator')


# Global configuration instance
validator_config = ValidatorConfig.from_env()
