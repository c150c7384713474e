from .logging_config import configure_logging, mcp_logger
from .settings import ImportServiceConfig, RegistryClientConfig

__all__ = [
    "ImportServiceConfig",
    "RegistryClientConfig",
    "configure_logging",
    "mcp_logger"
]
