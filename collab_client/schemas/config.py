"""
Special schemas for the configuration file and its properties
"""

from typing import Dict, Optional, Union

import pydantic


class LoggingConfig(pydantic.BaseModel):
    version: pydantic.conint(ge=1, le=1) = 1
    disable_existing_loggers: bool = False
    incremental: bool = False
    filters: Dict[str, Dict[str, Union[str, list]]] = {
        "urllib3_no_debug": {
            "()": "collab_client.misc.logger.NoDebugFilter",
            "name": "urllib3.connectionpool"
        },
        "redact_tokens": {
            "()": "collab_client.misc.logger.TokenRedactingFilter"
        }
    }
    formatters: Dict[str, Dict[str, str]] = {
        "default": {
            "style": "{",
            "format": "{asctime}: collab_client {process}: [{levelname}] {name}: {message}",
            "datefmt": "%d.%m.%Y %H:%M:%S"
        }
    }
    loggers: Dict[str, dict] = {}
    handlers: Dict[str, Dict[str, Union[str, list]]] = {
        "default": {
            "level": "WARNING",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "default",
            "filters": ["urllib3_no_debug", "redact_tokens"]
        }
    }
    root: dict = {
        "level": "WARNING",
        "handlers": ["default"]
    }


class ClientConfig(pydantic.BaseModel):
    url: pydantic.constr(min_length=1) = "http://localhost:8065"
    timeout: Optional[pydantic.PositiveFloat] = None
    strict_decoding: bool = False
    logging: LoggingConfig = LoggingConfig()

    @pydantic.field_validator("url")
    @classmethod
    def enforce_http_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("Field 'url' must start with 'http://' or 'https://'")
        return value.rstrip("/")
