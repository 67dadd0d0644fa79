from __future__ import annotations
import os
from dataclasses import dataclass

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class StoreConfig:
    database_url: str = "sqlite:///swift_codes.db"


def get_store_config() -> StoreConfig:
    return StoreConfig(database_url=os.getenv("DATABASE_URL", StoreConfig.database_url))


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=os.getenv("HOST", ServerConfig.host),
        port=int(os.getenv("PORT", str(ServerConfig.port))),
    )


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    json: bool = False


def get_log_config() -> LogConfig:
    return LogConfig(
        level=os.getenv("LOG_LEVEL", LogConfig.level).upper(),
        json=os.getenv("LOG_JSON", "").lower() in _TRUTHY,
    )
