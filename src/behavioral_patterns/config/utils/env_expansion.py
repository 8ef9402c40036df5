"""Environment variable expansion for configuration values."""
import os
from typing import Any


def expand_env_vars(value: str) -> str:
    """Expand ``$VAR``, ``${VAR}`` and a leading ``~``; unknown variables are left as-is."""
    return os.path.expanduser(os.path.expandvars(value))


def expand_config_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in every string of a config structure."""
    if isinstance(config, dict):
        return {key: expand_config_env_vars(value) for key, value in config.items()}
    if isinstance(config, list):
        return [expand_config_env_vars(item) for item in config]
    if isinstance(config, str):
        return expand_env_vars(config)
    return config
