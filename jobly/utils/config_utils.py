"""Utility functions for configuration handling."""

import logging
import re
from typing import Dict, NamedTuple

import yaml

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = r"<%=\s*@(\w+)\s*%>"


class ServerConfig(NamedTuple):
    """Where the HTTP server listens."""

    host: str
    port: int


# Load Configuration
def load_config(config_path="config.yml") -> Dict:
    """
    Load the configuration from the specified file path, handling includes and placeholders.
    The main file takes priority over the included one.
    """
    logger.info("Loading configuration from %s", config_path)
    config = load_yaml_file(config_path)

    # Handle included configurations if present
    included_config = {}
    if "include" in config:
        included_config_path = config["include"]
        logger.info("Loading included configuration from %s", included_config_path)
        included_config = load_yaml_file(included_config_path)

        # Merge configurations, with config taking priority
        merged_config = merge_configs(included_config, config)
        merged_config.pop("include", None)
    else:
        merged_config = config

    # Resolve placeholders using the combined configuration
    replace_placeholders(merged_config, merged_config)

    warn_conflicting_values(config, included_config)

    return merged_config


def load_yaml_file(file_path) -> Dict:
    """Helper function to load a YAML file."""
    with open(file_path, "r", encoding="UTF-8") as file:
        return yaml.safe_load(file) or {}


def merge_configs(base_config, override_config):
    """Recursively merge two configurations, with override_config taking priority."""
    merged = base_config.copy()
    for key, value in override_config.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def replace_placeholders(config, dynamic_values):
    """Recursively replace placeholders in the configuration, if any."""
    if isinstance(config, dict):
        for key, value in config.items():
            if isinstance(value, (dict, list)):
                replace_placeholders(value, dynamic_values)
            elif isinstance(value, str):
                config[key] = resolve_placeholder(value, dynamic_values)
    elif isinstance(config, list):
        for i, item in enumerate(config):
            if isinstance(item, (dict, list)):
                replace_placeholders(item, dynamic_values)
            elif isinstance(item, str):
                config[i] = resolve_placeholder(item, dynamic_values)
    return config


def resolve_placeholder(value, dynamic_values):
    """Resolve a single placeholder string."""
    match = re.search(PLACEHOLDER_PATTERN, value)
    if match:
        placeholder = match.group(1)
        return dynamic_values.get(
            placeholder, value
        )  # Return the value if found, else the original string
    return value


def get_server_config(config: Dict) -> ServerConfig:
    """Read the server section, falling back to localhost:3001."""
    server = config.get("server", {})
    return ServerConfig(
        host=server.get("host", "127.0.0.1"), port=int(server.get("port", 3001))
    )


def warn_conflicting_values(config: Dict, included_config: Dict):
    """Warn users if there are conflicting values between the two files,
    showing which value will be used."""
    for key, value in included_config.items():
        if key in config and config[key] != value:
            logger.warning(
                "Conflicting value for '%s'. Using value from the main config: %s",
                key,
                config[key],
            )
