"""
Collab client settings provider
"""

import os
import logging
from typing import Any, Dict, List, Optional, Tuple, Type

try:
    import ujson as json
except ImportError:
    import json

from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .schemas import config


logger = logging.getLogger(__name__)

CONFIG_PATHS: List[str] = ["collab_client.json", os.path.join(os.path.expanduser("~"), ".collab_client.json")]
"""
list of search paths for the config file, can be overwritten by the env variable ``COLLAB_CONFIG_PATH``
"""

if os.environ.get("COLLAB_CONFIG_PATH"):
    CONFIG_PATHS = [os.environ.get("COLLAB_CONFIG_PATH")]


class JsonFileSettingsSource(PydanticBaseSettingsSource):
    """
    Settings source reading the first existing config file of ``CONFIG_PATHS``
    """

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        return read_settings_from_file()


class Settings(BaseSettings, config.ClientConfig):
    """
    Collab client settings

    Values are taken from environment variables (prefixed with ``COLLAB_``,
    using ``__`` as delimiter for nested values, e.g. ``COLLAB_LOGGING__ROOT``),
    a ``.env`` file, the first existing config file and finally the keyword
    arguments, with the earlier sources taking precedence over the later ones.
    """

    model_config = SettingsConfigDict(env_prefix="COLLAB_", env_nested_delimiter="__", env_file=".env")

    @classmethod
    def settings_customise_sources(
            cls,
            settings_cls: Type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, file_secret_settings, JsonFileSettingsSource(settings_cls), init_settings


def read_settings_from_file() -> Dict[str, Any]:
    for path in CONFIG_PATHS:
        if os.path.exists(path):
            logger.debug(f"Reading config file {path!r}")
            with open(path, "r", encoding="UTF-8") as file:
                return json.load(file)
    return {}


def store_configuration(conf: Optional[config.ClientConfig] = None, path: Optional[str] = None) -> config.ClientConfig:
    p = path or os.path.abspath(CONFIG_PATHS[0])
    conf = conf or get_default_client_config()
    with open(p, "w", encoding="UTF-8") as f:
        f.write(conf.model_dump_json(indent=4))
    logger.info(f"A new config file has been created as {p!r}.")
    return conf


def get_default_client_config(url_override: Optional[str] = None) -> config.ClientConfig:
    c = config.ClientConfig(logging=config.LoggingConfig())
    if url_override:
        c.url = url_override.rstrip("/")
    return c


def get_default_config() -> Dict[str, Any]:
    return get_default_client_config().model_dump()
