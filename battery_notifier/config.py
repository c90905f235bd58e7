"""
Configuration management for Battery Notifier.

Handles loading and validating application configuration. Values are fixed
for the lifetime of the process.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict


class ConfigManager:
    """Thread-safe, read-only configuration manager."""

    DEFAULT_CONFIG = {
        "high_threshold_percent": 80,
        "low_threshold_percent": 30,
        "critical_threshold_percent": 10,
        "polling_interval_seconds": 30,
        "sampler": "polling",
        "polling_provider": "psutil",
        "enable_notifications": True,
        "log_level": "INFO",
        "log_dir": "data/logs",
        "log_retention_days": 30
    }

    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    VALID_SAMPLERS = ["polling", "events"]
    VALID_PROVIDERS = ["psutil", "sysfs"]

    def __init__(self, config_path: str = "config.json"):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path)
        self.lock = threading.Lock()
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file, applying defaults if missing.

        Returns:
            Configuration dictionary
        """
        config = self.DEFAULT_CONFIG.copy()

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    user_config = json.load(f)

                if not isinstance(user_config, dict):
                    raise ValueError("top-level value must be an object")

                # Merge user config with defaults
                config.update(user_config)
                print(f"Configuration loaded from {self.config_path}")

            except json.JSONDecodeError as e:
                print(f"Error parsing config file: {e}")
                print("Using default configuration")
            except Exception as e:
                print(f"Error loading config: {e}")
                print("Using default configuration")
        else:
            print(f"Config file not found at {self.config_path}")
            print("Using default configuration")

        return self._validate_config(config)

    @staticmethod
    def _clamp(config: Dict, key: str, default: float, low: float, high: float):
        value = config.get(key)
        # bool is an int subclass but never a valid number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            config[key] = default
        else:
            config[key] = max(low, min(high, value))

    def _validate_config(self, config: Dict) -> Dict:
        """
        Validate and sanitize configuration values.

        Args:
            config: Configuration dictionary to validate

        Returns:
            Validated configuration dictionary
        """
        # Validate thresholds
        self._clamp(config, "high_threshold_percent", 80, 50, 100)
        self._clamp(config, "low_threshold_percent", 30, 5, 60)
        self._clamp(config, "critical_threshold_percent", 10, 1, 30)

        # Ensure critical is lower than low
        if config["critical_threshold_percent"] >= config["low_threshold_percent"]:
            config["critical_threshold_percent"] = max(1, config["low_threshold_percent"] - 5)

        # Ensure low is lower than high
        if config["low_threshold_percent"] >= config["high_threshold_percent"]:
            config["low_threshold_percent"] = config["high_threshold_percent"] - 10
            if config["critical_threshold_percent"] >= config["low_threshold_percent"]:
                config["critical_threshold_percent"] = max(1, config["low_threshold_percent"] - 5)

        # Validate polling interval
        self._clamp(config, "polling_interval_seconds", 30, 1, 3600)

        # Validate sampling strategy
        if config.get("sampler") not in self.VALID_SAMPLERS:
            config["sampler"] = "polling"

        if config.get("polling_provider") not in self.VALID_PROVIDERS:
            config["polling_provider"] = "psutil"

        # Validate logging
        if config.get("log_level") not in self.VALID_LOG_LEVELS:
            config["log_level"] = "INFO"

        if not isinstance(config.get("log_dir"), str) or not config["log_dir"]:
            config["log_dir"] = "data/logs"

        self._clamp(config, "log_retention_days", 30, 1, 365)

        # Validate boolean settings
        if not isinstance(config.get("enable_notifications"), bool):
            config["enable_notifications"] = True

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        with self.lock:
            return self.config.get(key, default)

    def get_all(self) -> Dict:
        """
        Get all configuration values.

        Returns:
            Copy of configuration dictionary
        """
        with self.lock:
            return self.config.copy()
