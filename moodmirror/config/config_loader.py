"""Configuration loader for MoodMirror"""

import yaml
from pathlib import Path
from typing import Any, Dict
import os


CONFIG_DIR = Path(__file__).resolve().parent


class Config:
    """Configuration manager for MoodMirror"""

    def __init__(self, config_path: str = None):
        if config_path is None:
            env = os.getenv('MOODMIRROR_ENV', 'development')
            config_dir = Path(os.getenv('MOODMIRROR_CONFIG_DIR', CONFIG_DIR))
            # Try environment-specific config first, fall back to default
            env_config = config_dir / f"config.{env}.yaml"
            if env_config.exists():
                config_path = str(env_config)
            else:
                config_path = str(config_dir / "config.yaml")

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            return yaml.safe_load(f) or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., 'detector.simulated_latency')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access"""
        return self.get(key)

    def validate(self) -> None:
        """Validate configuration values"""
        sensitivity = self.get('detector.sensitivity')
        if sensitivity is not None and not 0 <= sensitivity <= 1:
            raise ValueError(f"Invalid sensitivity: {sensitivity}, must be in [0, 1]")

        model = self.get('detector.model')
        if model is not None and model not in ('basic', 'advanced', 'custom'):
            raise ValueError(f"Invalid detector model: {model}")

        latency = self.get('detector.simulated_latency', 0.0)
        if latency < 0:
            raise ValueError(f"Invalid simulated_latency: {latency}, must be non-negative")

        threshold = self.get('history.trend_threshold', 0.1)
        if not 0 <= threshold <= 1:
            raise ValueError(f"Invalid trend_threshold: {threshold}, must be in [0, 1]")

        extractor = self.get('detector.extractor', 'random')
        if extractor not in ('random', 'acoustic'):
            raise ValueError(f"Unknown feature extractor: {extractor}")


# Global config instance
config = Config()
