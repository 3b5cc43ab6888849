"""
Store configuration
===================

Connection settings come from the environment (a ``.env`` file is honoured)
and, optionally, from a YAML file named by ``ARTGRAPH_CONFIG``:

    neo4j:
      uri: bolt://localhost:7687
      user: neo4j
      password: secret
      max_transaction_retry_time: 30

Environment values win over the file.
"""
import os
from typing import Optional, Dict, Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .storage.errors import ConfigurationError


DEFAULT_RETRY_WINDOW = 30.0

# (primary, fallback) environment variable names
ENV_KEYS = {
    'uri': ('ENDPOINT_URI', 'NEO4J_URI'),
    'user': ('ENDPOINT_USER', 'NEO4J_USER'),
    'password': ('ENDPOINT_PASSWORD', 'NEO4J_PASSWORD'),
    'max_transaction_retry_time': ('ENDPOINT_RETRY_WINDOW', None),
}


class StoreConfig(BaseModel):
    """Neo4j connection configuration"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    uri: Optional[str] = Field(default=None, description="Neo4j connection URI, e.g. bolt://localhost:7687")
    user: Optional[str] = Field(default=None, description="Neo4j username")
    password: Optional[str] = Field(default=None, description="Neo4j password")
    max_transaction_retry_time: float = Field(
        default=DEFAULT_RETRY_WINDOW,
        gt=0,
        description="Maximum seconds to retry a failed transactional unit of work"
    )

    def missing_fields(self) -> list:
        """Names of required settings that are absent or blank"""
        return [
            name for name in ('uri', 'user', 'password')
            if not (getattr(self, name) or '').strip()
        ]

    def safe_dict(self) -> Dict[str, Any]:
        """Configuration without the password, for logging"""
        data = self.model_dump()
        data.pop('password', None)
        return data


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    section = data.get('neo4j') or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"The neo4j section of {path} must be a mapping")
    return section


def load_store_config(config_path: Optional[str] = None, env_file: Optional[str] = None) -> StoreConfig:
    """
    Build a StoreConfig from the YAML file (if any) and the environment.

    Missing values are left as None; initialize() decides whether the result
    is usable.

    Args:
        config_path: YAML file path; defaults to ARTGRAPH_CONFIG
        env_file: .env file to load; defaults to python-dotenv's lookup

    Raises:
        ConfigurationError: the YAML file cannot be read or parsed, or a value
            has the wrong type
    """
    load_dotenv(env_file)

    values: Dict[str, Any] = {}
    config_path = config_path or os.environ.get('ARTGRAPH_CONFIG')
    if config_path:
        values.update(_read_yaml(config_path))

    for field, (primary, fallback) in ENV_KEYS.items():
        value = os.environ.get(primary)
        if not value and fallback:
            value = os.environ.get(fallback)
        if value:
            values[field] = value

    try:
        return StoreConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Neo4j configuration: {e}") from e
