"""
Configuration Settings
======================

Configuration management for the exchange hub: which exchange to bind,
its API credentials, the market stream to follow and logging.

Features:
- Environment-based configuration (.env files via python-dotenv)
- Optional encryption of API keys at rest (Fernet)
- Validation of exchange names and log levels
- Cached global settings accessor
"""

import os
import json
import logging
from typing import Optional, Any, List, Tuple
from pathlib import Path
from dataclasses import dataclass, field

from cryptography.fernet import Fernet, InvalidToken
from dotenv import load_dotenv

from exchange_core.identity import Exchange
from exchange_core.utils.exceptions import ConfigurationError, ValidationError


ENCRYPTED_PLACEHOLDER = "ENCRYPTED"


@dataclass
class ExchangeConfig:
    """Exchange selection and API credentials."""
    name: str = "binance"
    api_key: str = ""
    secret_key: str = ""
    testnet: bool = False

    # Security settings
    encrypt_keys: bool = False
    key_file: str = "data/.api_keys"
    encryption_key_file: str = "data/.encryption_key"

    def __post_init__(self):
        """Validate the exchange name and secure the credentials."""
        try:
            Exchange.from_string(self.name)
        except ValidationError as e:
            raise ConfigurationError(
                f"Unknown exchange '{self.name}'", config_key="EXCHANGE", config_value=self.name
            ) from e

        # Validate key format (basic check)
        if self.api_key and self.api_key != ENCRYPTED_PLACEHOLDER and len(self.api_key) < 30:
            raise ConfigurationError("Invalid API key format", config_key="EXCHANGE_API_KEY")

        if self.secret_key and self.secret_key != ENCRYPTED_PLACEHOLDER and len(self.secret_key) < 30:
            raise ConfigurationError("Invalid secret key format", config_key="EXCHANGE_SECRET_KEY")

        if self.encrypt_keys and self.api_key and self.secret_key \
                and self.api_key != ENCRYPTED_PLACEHOLDER:
            self._encrypt_keys()

    @property
    def exchange(self) -> Exchange:
        return Exchange.from_string(self.name)

    def _fernet(self) -> Fernet:
        """Load the Fernet key, generating it on first use."""
        key_path = Path(self.encryption_key_file)
        if not key_path.exists():
            key_path.parent.mkdir(parents=True, exist_ok=True)
            key_path.write_bytes(Fernet.generate_key())
            key_path.chmod(0o600)  # Read/write for owner only
        return Fernet(key_path.read_bytes())

    def _encrypt_keys(self):
        """Write the API keys encrypted to ``key_file`` and drop them from memory."""
        try:
            fernet = self._fernet()
            encrypted_keys = {
                'api_key': fernet.encrypt(self.api_key.encode()).decode(),
                'secret_key': fernet.encrypt(self.secret_key.encode()).decode(),
                'encrypted': True
            }

            key_file_path = Path(self.key_file)
            key_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(key_file_path, 'w') as f:
                json.dump(encrypted_keys, f)
            key_file_path.chmod(0o600)

        except OSError as e:
            raise ConfigurationError(f"Key encryption failed: {e}", config_key="ENCRYPT_API_KEYS") from e

        self.api_key = ENCRYPTED_PLACEHOLDER
        self.secret_key = ENCRYPTED_PLACEHOLDER

    def get_decrypted_keys(self) -> Tuple[str, str]:
        """Get the API key and secret in clear text."""
        if not self.encrypt_keys or self.api_key != ENCRYPTED_PLACEHOLDER:
            return self.api_key, self.secret_key

        try:
            key_file_path = Path(self.key_file)
            if not key_file_path.exists():
                raise ConfigurationError("Encrypted keys file not found", config_key="key_file",
                                         config_value=self.key_file)

            with open(key_file_path, 'r') as f:
                data = json.load(f)

            fernet = self._fernet()
            api_key = fernet.decrypt(data['api_key'].encode()).decode()
            secret_key = fernet.decrypt(data['secret_key'].encode()).decode()

            return api_key, secret_key

        except (OSError, KeyError, ValueError, InvalidToken) as e:
            raise ConfigurationError(f"Failed to decrypt keys: {e}") from e


@dataclass
class StreamingConfig:
    """Market data stream settings."""
    symbol: str = "btcusdt"
    queue_size: int = 1000

    def __post_init__(self):
        if not self.symbol:
            raise ConfigurationError("Stream symbol is required", config_key="STREAM_SYMBOL")
        if self.queue_size < 0:
            raise ConfigurationError("Stream queue size cannot be negative",
                                     config_key="STREAM_QUEUE_SIZE", config_value=self.queue_size)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file_path: str = "logs/exchange_hub.log"

    # File rotation
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5

    # Format settings
    detailed_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    simple_format: str = "%(asctime)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    def __post_init__(self):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.level.upper() not in valid_levels:
            raise ConfigurationError(f"Invalid log level. Valid options: {valid_levels}",
                                     config_key="LOG_LEVEL", config_value=self.level)


@dataclass
class Settings:
    """Main settings class with all configuration sections."""

    exchange: ExchangeConfig = field(default_factory=ExchangeConfig)
    streaming: StreamingConfig = field(default_factory=StreamingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Environment info
    environment: str = "development"
    debug: bool = False

    def __post_init__(self):
        """Post-initialization validation."""
        valid_environments = ["development", "testing", "staging", "production"]
        if self.environment not in valid_environments:
            raise ConfigurationError(f"Invalid environment. Valid options: {valid_environments}",
                                     config_key="ENVIRONMENT", config_value=self.environment)

        if self.environment == "production":
            self.debug = False


class SettingsLoader:
    """Settings loader with multiple environment support."""

    @staticmethod
    def load_env_file(env_file: str = None) -> None:
        """Load environment variables from file with fallbacks."""
        if env_file is None:
            env_files = [
                f".env.{os.getenv('ENVIRONMENT', 'development')}",
                ".env.local",
                ".env"
            ]
        else:
            env_files = [env_file]

        loaded_file = None
        for env_file in env_files:
            env_path = Path(env_file)
            if env_path.exists():
                load_dotenv(env_path)
                loaded_file = env_file
                logging.info(f"📝 Loaded environment file: {env_file}")
                break

        if not loaded_file:
            logging.debug("No environment file found, using system environment variables")

    @staticmethod
    def get_env(key: str, default: Any = None, required: bool = False,
                data_type: type = str) -> Any:
        """
        Get environment variable with type conversion and validation.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: Whether the variable is required
            data_type: Expected data type

        Returns:
            Converted environment variable value
        """
        value = os.getenv(key)

        if required and value is None:
            raise ConfigurationError(f"Required environment variable {key} is not set",
                                     config_key=key)

        if value is None:
            return default

        try:
            if data_type == bool:
                return str(value).lower() in ('true', '1', 'yes', 'on', 'enabled')
            elif data_type == int:
                return int(value)
            elif data_type == float:
                return float(value)
            elif data_type == list:
                return [item.strip() for item in str(value).split(',') if item.strip()]
            else:
                return str(value)

        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid {data_type.__name__} value for {key}: {value}",
                                     config_key=key, config_value=value) from e

    @classmethod
    def load_settings(cls, env_file: str = None) -> Settings:
        """
        Load settings from environment variables.

        Args:
            env_file: Path to environment file (optional)

        Returns:
            Fully configured Settings object
        """
        cls.load_env_file(env_file)

        environment = cls.get_env("ENVIRONMENT", "development")

        exchange_config = ExchangeConfig(
            name=cls.get_env("EXCHANGE", "binance"),
            api_key=cls.get_env("EXCHANGE_API_KEY", ""),
            secret_key=cls.get_env("EXCHANGE_SECRET_KEY", ""),
            testnet=cls.get_env("EXCHANGE_TESTNET", False, data_type=bool),
            encrypt_keys=cls.get_env("ENCRYPT_API_KEYS", False, data_type=bool)
        )

        streaming_config = StreamingConfig(
            symbol=cls.get_env("STREAM_SYMBOL", "btcusdt"),
            queue_size=cls.get_env("STREAM_QUEUE_SIZE", 1000, data_type=int)
        )

        logging_config = LoggingConfig(
            level=cls.get_env("LOG_LEVEL", "INFO").upper(),
            file_path=cls.get_env("LOG_FILE", "logs/exchange_hub.log")
        )

        return Settings(
            exchange=exchange_config,
            streaming=streaming_config,
            logging=logging_config,
            environment=environment,
            debug=cls.get_env("DEBUG", environment == "development", data_type=bool)
        )


class ConfigurationValidator:
    """Configuration validation utilities."""

    @staticmethod
    def validate_production_config(settings: Settings) -> List[str]:
        """
        Validate configuration for production deployment.

        Returns:
            List of validation warnings
        """
        issues = []

        if settings.environment == "production":
            if settings.exchange.testnet:
                issues.append("Testnet mode enabled in production environment")

            if not settings.exchange.encrypt_keys:
                issues.append("API key encryption should be enabled in production")

        if settings.exchange.exchange == Exchange.UNKNOWN:
            issues.append("No exchange selected")

        if not settings.exchange.api_key:
            issues.append("No API credentials configured; account operations will fail")

        return issues


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(reload: bool = False, env_file: str = None) -> Settings:
    """
    Get global settings instance with caching and validation.

    Args:
        reload: Force reload settings from environment
        env_file: Specific environment file to load

    Returns:
        Global settings instance
    """
    global _settings

    if _settings is None or reload:
        try:
            _settings = SettingsLoader.load_settings(env_file)
        except ConfigurationError as e:
            logging.error(f"❌ Failed to load settings: {e}")
            raise

        issues = ConfigurationValidator.validate_production_config(_settings)
        for issue in issues:
            logging.warning(f"⚠️ {issue}")

        logging.info(f"✅ Settings loaded successfully (environment: {_settings.environment})")

    return _settings
