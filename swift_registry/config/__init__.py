from .env import (
    LogConfig,
    ServerConfig,
    StoreConfig,
    get_log_config,
    get_server_config,
    get_store_config,
)

__all__ = [
    "LogConfig",
    "ServerConfig",
    "StoreConfig",
    "get_log_config",
    "get_server_config",
    "get_store_config",
]
