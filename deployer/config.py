"""
Configuration loading

Defaults are merged with an optional ``.config.json`` file, then with
environment overrides when an environment mapping is given.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Mapping, Optional

from .constants import ARTIFACTS_DIR, CONFIG_FILE, LOG_DIR, LOGGER_NAME
from .exceptions import ConfigError

logger = logging.getLogger(LOGGER_NAME)

# Keys recognised in the JSON file, mapped to DeployConfig fields
FILE_KEYS = {
    'url': 'url',
    'pk': 'pk',
    'gasPrice': 'gas_price',
    'users': 'users',
}

ENV_KEYS = {
    'DEPLOY_RPC_URL': 'url',
    'DEPLOY_PRIVATE_KEY': 'pk',
    'DEPLOY_GAS_PRICE_GWEI': 'gas_price',
}


@dataclass(frozen=True)
class DeployConfig:
    """Settings for one deployment run"""
    url: Optional[str] = ""
    pk: Optional[str] = ""
    gas_price: Optional[str] = "10"  # gwei
    users: Optional[List[str]] = field(default_factory=list)
    artifacts_dir: Path = ARTIFACTS_DIR
    receipt_timeout: Optional[float] = None  # None waits forever
    log_dir: str = LOG_DIR


def _read_config_file(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {path}: expected a JSON object")
    return data


def _apply_env(config: DeployConfig, env: Mapping[str, str]) -> DeployConfig:
    overrides = {}
    for var, attr in ENV_KEYS.items():
        if env.get(var):
            overrides[attr] = env[var]

    if env.get('DEPLOY_ARTIFACTS_DIR'):
        overrides['artifacts_dir'] = Path(env['DEPLOY_ARTIFACTS_DIR'])
    if env.get('DEPLOY_LOG_DIR'):
        overrides['log_dir'] = env['DEPLOY_LOG_DIR']
    if env.get('DEPLOY_RECEIPT_TIMEOUT'):
        try:
            overrides['receipt_timeout'] = float(env['DEPLOY_RECEIPT_TIMEOUT'])
        except ValueError as e:
            raise ConfigError(f"DEPLOY_RECEIPT_TIMEOUT must be a number: {e}") from e

    return replace(config, **overrides) if overrides else config


def load_config(path: Path = CONFIG_FILE, env: Optional[Mapping[str, str]] = None) -> DeployConfig:
    """Build the run configuration.

    Only keys already known to the defaults are taken from the file, and a
    key that is present in the file always wins, even when its value is
    ``null``. Unknown keys are ignored.
    """
    values = {}
    path = Path(path)
    if path.exists():
        file_config = _read_config_file(path)
        for key, attr in FILE_KEYS.items():
            if key in file_config:
                values[attr] = file_config[key]
        logger.debug(f"Loaded config from {path}")
    else:
        logger.debug(f"No config file at {path}, using defaults")

    config = DeployConfig(**values)
    if env is not None:
        config = _apply_env(config, env)
    return config
