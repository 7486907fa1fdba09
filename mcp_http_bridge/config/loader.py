"""Configuration loading and validation.

Builds a :class:`BridgeConfig` from, in increasing precedence:

1. model defaults
2. an optional YAML file (``${ENV_VAR}`` placeholders expanded)
3. ``MCP_*`` environment variables
4. explicit overrides (CLI flags)

All validation problems are reported at once as a
:class:`ConfigurationError`.
"""

import logging
import os
import re
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import ValidationError

from mcp_http_bridge.config.schema import BridgeConfig
from mcp_http_bridge.constants import (
    ENV_AUTH_TOKEN,
    ENV_CLIENT_NAME,
    ENV_ENDPOINT_PATTERN,
    ENV_GATEWAY_URL,
    ENV_REQUEST_TIMEOUT,
    ENV_SERVERS,
)
from mcp_http_bridge.errors import ConfigurationError

logger = logging.getLogger(__name__)

_YAML_EXTS = frozenset({".yaml", ".yml"})

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

# config field -> environment variable
ENV_FIELDS: Dict[str, str] = {
    "gateway_url": ENV_GATEWAY_URL,
    "servers": ENV_SERVERS,
    "client_name": ENV_CLIENT_NAME,
    "auth_token": ENV_AUTH_TOKEN,
    "endpoint_pattern": ENV_ENDPOINT_PATTERN,
    "request_timeout": ENV_REQUEST_TIMEOUT,
}


def expand_env_vars(value: Any, env: Optional[Mapping[str, str]] = None) -> Any:
    """Recursively expand ``${VAR}`` references in string values.

    Unset variables are left as-is.
    """
    env = os.environ if env is None else env
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: env.get(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item, env) for item in value]
    return value


def _read_config_file(cfg_fpath: str) -> Dict[str, Any]:
    """Read and parse a YAML config file from *cfg_fpath*."""
    ext = os.path.splitext(cfg_fpath)[1].lower()
    if ext not in _YAML_EXTS:
        raise ConfigurationError(
            f"Unsupported config file extension '{ext}'. "
            "Only YAML files (.yaml, .yml) are supported."
        )
    if not os.path.exists(cfg_fpath):
        raise ConfigurationError(f"Configuration file does not exist: {cfg_fpath}")

    try:
        with open(cfg_fpath, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Error reading configuration file: {cfg_fpath}\n  {exc}") from exc

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            "Top-level configuration content must be a YAML mapping (dictionary)."
        )
    return raw_data


def _read_env(env: Mapping[str, str]) -> Dict[str, Any]:
    """Collect config values from environment variables; empty means unset."""
    values: Dict[str, Any] = {}
    for field_name, var in ENV_FIELDS.items():
        raw = env.get(var)
        if raw is not None and raw.strip():
            values[field_name] = raw
    return values


def _format_validation_errors(exc: ValidationError) -> str:
    """Format Pydantic validation errors into a readable multi-line string."""
    lines: List[str] = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"]) or "config"
        lines.append(f"  • {loc}: {err['msg']}")
    return "\n".join(lines)


def load_bridge_config(
    cfg_fpath: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> BridgeConfig:
    """Load, merge and validate the bridge configuration.

    Args:
        cfg_fpath: Optional YAML file with keys named like the
            :class:`BridgeConfig` fields.
        env: Environment mapping (defaults to ``os.environ``).
        overrides: Highest-precedence values; ``None`` entries are ignored.

    Raises:
        ConfigurationError: On file errors or validation failures.
    """
    env = os.environ if env is None else env
    raw_data: Dict[str, Any] = {}

    if cfg_fpath:
        logger.debug("Loading configuration file: %s", cfg_fpath)
        raw_data.update(expand_env_vars(_read_config_file(cfg_fpath), env))

    env_values = _read_env(env)
    if env_values:
        logger.debug("Environment overrides: %s", sorted(env_values))
    raw_data.update(env_values)

    if overrides:
        raw_data.update({k: v for k, v in overrides.items() if v is not None})

    if "servers" not in raw_data:
        raise ConfigurationError(
            f"{ENV_SERVERS} is required (comma-separated list of server names)"
        )

    try:
        config = BridgeConfig.model_validate(raw_data)
    except ValidationError as exc:
        error_summary = _format_validation_errors(exc)
        raise ConfigurationError(
            f"Configuration validation failed ({len(exc.errors())} error(s)):\n{error_summary}"
        ) from exc

    logger.info(
        "Configuration loaded: gateway %s, %d server(s).",
        config.gateway_url,
        len(config.servers),
    )
    return config
