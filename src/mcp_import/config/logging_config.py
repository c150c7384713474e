"""
Logging Configuration

Structured logging for the MCP import service.
"""

import logging

import structlog

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Configure simple structured logging for the import service
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)


def configure_logging(level: int = logging.INFO):
    """Route structlog through stdlib logging.

    Opt-in: only the service entry point calls this, so a host application
    keeps its own structlog setup.
    """
    logging.getLogger().setLevel(level)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Create import logger
mcp_logger = structlog.get_logger("mcp_import")
