"""Configuration Validator Module."""

import logging

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Configuration Validator Class."""

    SUPPORTED_DRIVERS = ["postgresql+asyncpg", "sqlite+aiosqlite"]
    VERBOSITY_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    LOG_FORMATS = ["standard", "json"]

    def __init__(self, config: dict):
        """
        Initialize the ConfigValidator with the provided configuration.
        Args:
            config (dict): The configuration dictionary to validate.
        """
        self.config = config

    def validate_database_keys(self, database_url=None) -> bool:
        """Ensure a database URL is available and uses an async driver."""
        url = database_url or self.config.get("database", {}).get("url")
        if not url:
            logger.error("❌ 'url' key is missing in the database section.")
            return False

        driver = url.split("://", 1)[0]
        if driver not in self.SUPPORTED_DRIVERS:
            logger.error(
                "❌ Unsupported database driver '%s'. Use one of: %s",
                driver,
                ", ".join(self.SUPPORTED_DRIVERS),
            )
            return False

        logger.info("✅ Database Configurations are present.")
        return True

    def validate_server_keys(self) -> bool:
        """Ensure the server port, if given, is a valid TCP port."""
        server_section = self.config.get("server", {})
        port = server_section.get("port", 3001)
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
            logger.error("❌ 'port' in server section must be an integer 1-65535.")
            return False

        logger.info("✅ Server Configurations are valid.")
        return True

    def validate_logging_keys(self) -> bool:
        """Ensure the logging verbosity and format are known values."""
        logging_section = self.config.get("logging", {})
        verbosity = logging_section.get("verbosity", "INFO")
        if verbosity not in self.VERBOSITY_LEVELS:
            logger.error("❌ Unknown logging verbosity: %s", verbosity)
            return False

        log_format = logging_section.get("format", "standard")
        if log_format not in self.LOG_FORMATS:
            logger.error("❌ Unknown logging format: %s", log_format)
            return False

        return True

    def run_config_validation(self, database_url=None) -> bool:
        """
        Run all configuration validation checks.
        Returns:
            bool: True if all validations pass, False otherwise.
        """
        logger.info(
            "-------------------- Running Configuration Checks ----------------------"
        )
        database_valid = self.validate_database_keys(database_url)
        server_valid = self.validate_server_keys()
        logging_valid = self.validate_logging_keys()

        if not (database_valid and server_valid and logging_valid):
            logger.error("Configuration validation failed.")
            return False
        logger.info(
            "-------------------- Configuration Validation Passed ------------------"
        )
        return True
