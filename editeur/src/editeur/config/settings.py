"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, test.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_HEX_KEY = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
SUI_NETWORKS = ("mainnet", "testnet", "devnet", "localnet")


def _one_of(name: str, value: str, allowed: tuple) -> str:
    if value not in allowed:
        raise ValueError(f"{name} must be one of {', '.join(allowed)}, got {value!r}")
    return value


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Private keys should come from environment variables, not from YAML
    files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    ENV: str = Field(default="development", description="Environment name")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000, ge=1, le=65535)

    # Chain A (EVM) - REQUIRED
    EVM_RPC_URL: str = Field(..., description="Chain-A JSON-RPC endpoint")
    EVM_PRIVATE_KEY: str = Field(
        ..., description="Custodial chain-A key (derives publisher address)"
    )
    EVM_RPC_TIMEOUT: float = Field(default=10.0, gt=0)

    # Chain B (Sui) - REQUIRED key
    SUI_NETWORK: str = Field(default="testnet")
    SUI_FULLNODE: Optional[str] = Field(
        default=None,
        description="Chain-B JSON-RPC endpoint (derived from SUI_NETWORK if unset)",
    )
    SUI_PRIVATE_KEY: str = Field(
        ..., description="Custodial Ed25519 key (base64 keystore form or 0x-hex)"
    )
    SUI_FINALITY_TIMEOUT: float = Field(default=60.0, gt=0)

    # Storage network
    STORAGE_BRIDGE_URL: str = Field(default="http://127.0.0.1:8768")
    STORAGE_TIMEOUT: float = Field(default=60.0, gt=0)

    # Pricing & limits
    STORE_FEE_WEI: int = Field(..., gt=0, description="Publish fee in wei")
    DEFAULT_MIN_CONFIRMATIONS: int = Field(default=1, ge=0)
    MAX_STORAGE_EPOCHS: int = Field(default=53, ge=1)
    DEFAULT_STORAGE_EPOCHS: int = Field(default=3, ge=1)
    MAX_CONTENT_BYTES: int = Field(default=50 * 1024 * 1024, ge=1)

    # Resilience
    RETRY_MAX_ATTEMPTS: int = Field(default=3, ge=1, le=10)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=False)

    # Monitoring
    METRICS_ENABLED: bool = Field(default=True)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return _one_of("LOG_LEVEL", v.upper(), LOG_LEVELS)

    @field_validator("SUI_NETWORK")
    @classmethod
    def validate_sui_network(cls, v: str) -> str:
        return _one_of("SUI_NETWORK", v.lower(), SUI_NETWORKS)

    @field_validator("EVM_PRIVATE_KEY")
    @classmethod
    def validate_evm_private_key(cls, v: str) -> str:
        """Validate hex private key shape."""
        v = v.strip()
        if not _HEX_KEY.match(v):
            raise ValueError("EVM_PRIVATE_KEY must be 32 bytes of hex")
        return v if v.startswith("0x") else f"0x{v}"

    @field_validator("DEFAULT_STORAGE_EPOCHS")
    @classmethod
    def validate_default_epochs(cls, v: int, info: ValidationInfo) -> int:
        """Default duration must fit under the maximum."""
        maximum = info.data.get("MAX_STORAGE_EPOCHS")
        if maximum is not None and v > maximum:
            raise ValueError(
                f"DEFAULT_STORAGE_EPOCHS ({v}) exceeds MAX_STORAGE_EPOCHS ({maximum})"
            )
        return v


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        loaded = yaml.safe_load(f)
    return loaded or {}


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename (in config/) or path
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "development")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    default_env_file, default_config_file = env_map.get(
        environment, (".env.production", "production.yaml")
    )

    env_file_path = project_root / (env_file or default_env_file)
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    if config_file is None:
        config_file = os.getenv("EDITEUR_CONFIG") or default_config_file

    merged_config = _read_yaml(config_dir / "default.yaml")

    config_path = Path(config_file)
    if not config_path.is_absolute() and not config_path.exists():
        config_path = config_dir / config_file
    merged_config.update(_read_yaml(config_path))

    # Init kwargs outrank the environment in pydantic-settings
    merged_config = {k: v for k, v in merged_config.items() if k not in os.environ}

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings
