"""
FortuneWheel Deployer - Main Entry Point
Deploys the FortuneWheel contract to the configured network
"""

import sys
from typing import Optional
from loguru import logger

from deployer.engine import deploy_fortune_wheel
from utils.settings import ConfigError, load_config


CONSOLE_FORMAT = "{message}"
ERROR_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Route results to stdout and problems to stderr

    Args:
        level: Minimum level for console output
        log_file: Optional file sink (rotated daily)
    """
    logger.remove()

    # diagnose=False: tracebacks must not print local variables (private keys)
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=level,
        filter=lambda record: record["level"].no < logger.level("WARNING").no,
        diagnose=False
    )
    logger.add(
        sys.stderr,
        format=ERROR_FORMAT,
        level="WARNING",
        diagnose=False
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG",
            diagnose=False
        )


def main() -> int:
    """
    Run one deployment

    Returns:
        Process exit code (0 success, 1 failure)
    """
    configure_logging()

    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        configure_logging(config.log_level, config.log_file)
    except (OSError, ValueError) as e:
        configure_logging()
        logger.error(f"Cannot set up logging: {e}")
        return 1

    result = deploy_fortune_wheel(config)
    return result.exit_code


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
