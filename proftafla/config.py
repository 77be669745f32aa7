"""
load the config from config.yaml and .env
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any
from dotenv import load_dotenv

load_dotenv()

DEFAULT_PREFIX = "proftafla"


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to config.yaml file. If None, uses the config.yaml
                        shipped next to this module.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'REDIS_URL': ('redis', 'url'),
            'REDIS_EXPIRE': ('redis', 'expire'),
            'REDIS_PREFIX': ('redis', 'prefix'),
            'UPSTREAM_URL': ('upstream', 'url'),
            'UPSTREAM_TIMEOUT': ('upstream', 'timeout'),
            'UPSTREAM_USER_AGENT': ('upstream', 'user_agent'),
            'LOG_LEVEL': ('logging', 'level'),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config
                for key in config_path[:-1]:
                    if key not in current:
                        current[key] = {}
                    current = current[key]

                final_key = config_path[-1]
                current[final_key] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value by nested keys.

        Args:
            *keys: Configuration keys (e.g., 'redis', 'url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def redis(self) -> Dict[str, Any]:
        """Get cache store configuration."""
        return self.get('redis', default={})

    @property
    def upstream(self) -> Dict[str, Any]:
        """Get upstream endpoint configuration."""
        return self.get('upstream', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})

    @property
    def redis_url(self) -> str:
        return self.redis.get('url')

    @property
    def ttl(self) -> int:
        return int(self.redis.get('expire', 3600))

    @property
    def prefix(self) -> str:
        # An empty REDIS_PREFIX still falls back to the default namespace
        return str(self.redis.get('prefix') or DEFAULT_PREFIX)
