import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

SUPPORTED_OUTPUT_FORMATS = {"csv", "xlsx"}
SUPPORTED_NOTIFIERS = {"log", "webhook"}


class BaseConfig(BaseSettings):
    ENV_STATE: Optional[str] = "prod"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class GlobalConfig(BaseConfig):
    DATABASE_URL: str = "sqlite:///processed_files.db"
    HISTORY_ENABLED: bool = True

    OUTPUT_FORMAT: str = "csv"
    OUTPUT_DIRECTORY: Union[Path, str] = Path("output")
    CSV_ENCODING: str = "utf-8-sig"
    MAX_FILE_SIZE_BYTES: int = 50 * 1024 * 1024

    # pendulum format tokens
    DATE_FORMAT: str = "YYYY-MM-DD"
    ORDER_TIME_FORMAT: str = "YYYY-MM-DD HH:mm:ss"

    LOG_LEVEL: str = "INFO"

    NOTIFIER: str = "log"
    # Generic webhook notification settings (works with Slack, MS Teams, etc.)
    WEBHOOK_URL: Optional[str] = None

    @field_validator("OUTPUT_FORMAT", mode="before")
    @classmethod
    def lowercase_output_format(cls, v):
        if v is None:
            return "csv"
        v_lower = str(v).lower().lstrip(".")
        if v_lower not in SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(
                f"OUTPUT_FORMAT must be one of {SUPPORTED_OUTPUT_FORMATS}, got: {v}"
            )
        return v_lower

    @field_validator("NOTIFIER", mode="before")
    @classmethod
    def lowercase_notifier(cls, v):
        if v is None:
            return "log"
        v_lower = str(v).lower()
        if v_lower not in SUPPORTED_NOTIFIERS:
            raise ValueError(f"NOTIFIER must be one of {SUPPORTED_NOTIFIERS}, got: {v}")
        return v_lower

    @field_validator("OUTPUT_DIRECTORY", mode="before")
    @classmethod
    def convert_path(cls, v):
        if isinstance(v, Path):
            return v
        return Path(str(v))


class DevConfig(GlobalConfig):
    DATABASE_URL: str = "sqlite:///dev_processed_files.db"
    OUTPUT_DIRECTORY: Union[Path, str] = Path("dev_output")
    LOG_LEVEL: str = "DEBUG"

    model_config = SettingsConfigDict(env_prefix="DEV_")


class TestConfig(GlobalConfig):
    DATABASE_URL: str = "sqlite:///:memory:"
    OUTPUT_DIRECTORY: Union[Path, str] = Path("spreadsheet_rescue/tests/output")
    LOG_LEVEL: str = "DEBUG"

    model_config = SettingsConfigDict(env_prefix="TEST_")


class ProdConfig(GlobalConfig):
    LOG_LEVEL: Optional[str] = "WARNING"

    model_config = SettingsConfigDict(env_prefix="PROD_")


@lru_cache()
def get_config(env_state: str):
    if not env_state:
        raise ValueError("ENV_STATE is not set. Possible values are: DEV, TEST, PROD")
    env_state = env_state.lower()

    configs = {"dev": DevConfig, "prod": ProdConfig, "test": TestConfig}
    if env_state not in configs:
        raise ValueError(
            f"Unknown ENV_STATE: {env_state}. Possible values are: DEV, TEST, PROD"
        )
    config_instance = configs[env_state]()
    logger.debug(f"Loaded {type(config_instance).__name__} for ENV_STATE={env_state}")

    return config_instance


config = get_config(BaseConfig().ENV_STATE)


def get_database_config():
    config_dict = {
        "sqlalchemy.url": config.DATABASE_URL,
        "sqlalchemy.echo": False,
        "sqlalchemy.future": True,
    }

    if config.DATABASE_URL.startswith("sqlite"):
        config_dict["sqlalchemy.connect_args"] = {"check_same_thread": False}
    else:
        config_dict["sqlalchemy.pool_size"] = 5
        config_dict["sqlalchemy.max_overflow"] = 10
        config_dict["sqlalchemy.pool_timeout"] = 30

    return config_dict
