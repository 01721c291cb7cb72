"""Configuration loader for the onetimesecret CLI."""
import os
import logging
from pathlib import Path
from typing import Dict, Optional
import yaml

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("username", "apitoken")

# Environment variables that override the config file
ENV_VARS = {
    "username": "OTS_USERNAME",
    "apitoken": "OTS_APITOKEN",
}


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def default_config_path() -> Path:
    """Default config location: ~/.onetimesecret.yaml"""
    return Path.home() / ".onetimesecret.yaml"


def _read_config_file(config_path: Path) -> Dict[str, str]:
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    # An empty file is a valid, empty configuration
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file at {config_path} must be a mapping\n"
            f"Required format:\n"
            f"username: <username>\n"
            f"apitoken: <apitoken>"
        )

    values = {}
    for key in CONFIG_KEYS:
        value = config.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' in {config_path} must be a string")
        values[key] = value
    return values


def load_config(
    config_path: Optional[str] = None,
    username: Optional[str] = None,
    apitoken: Optional[str] = None,
) -> Dict[str, str]:
    """
    Resolve username and API token.

    Priority order (highest first):
    1. Explicit arguments (command-line flags)
    2. OTS_USERNAME / OTS_APITOKEN environment variables
    3. Config file (config_path, or ~/.onetimesecret.yaml)

    Args:
        config_path: Explicit config file; it must exist
        username: Username override
        apitoken: API token override

    Returns:
        Dict with 'username' and 'apitoken'. Both are empty strings unless
        both resolved to non-empty values.

    Raises:
        ConfigError: If an explicit config file is missing, or any config file
            cannot be read or parsed
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Configuration file not found at: {path}")
        config = _read_config_file(path)
        logger.info(f"Using config from: {path}")
    else:
        path = default_config_path()
        if path.is_file():
            config = _read_config_file(path)
            logger.info(f"Using default config location: {path}")
        else:
            logger.debug(f"No config file at {path}, continuing without one")
            config = {}

    for key, env_var in ENV_VARS.items():
        env_value = os.getenv(env_var)
        if env_value:
            logger.debug(f"Using {key} from environment: {env_var}")
            config[key] = env_value

    if username:
        config["username"] = username
    if apitoken:
        config["apitoken"] = apitoken

    resolved_username = config.get("username", "")
    resolved_apitoken = config.get("apitoken", "")
    if not (resolved_username and resolved_apitoken):
        if resolved_username or resolved_apitoken:
            logger.warning("Only one of username and apitoken is set, continuing anonymously")
        return {"username": "", "apitoken": ""}

    logger.debug(f"Using username: {resolved_username}")
    return {"username": resolved_username, "apitoken": resolved_apitoken}
