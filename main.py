"""Main file for the backend"""

import argparse
import asyncio
import logging

from aiohttp import web

from jobly.app_setup import create_app, record_factory, setup_database, setup_logging
from jobly.db.database import database_url_from_config
from jobly.utils.config_utils import get_server_config, load_config
from jobly.validators import ConfigValidator


async def main(config_file):
    """Main function for the backend."""
    # Load configuration and set up logging
    config = load_config(config_file)

    setup_logging(config)
    logging.setLogRecordFactory(record_factory)

    if not ConfigValidator(config).run_config_validation(
        database_url_from_config(config)
    ):
        return

    db = setup_database(config)
    try:
        await db.init_db()
        logging.info("Database initialized successfully.")
    except Exception as e:  # pylint: disable=broad-except
        logging.error("Database initialization failed: %s", e)
        await db.close()
        return

    server = get_server_config(config)
    runner = web.AppRunner(create_app(db))
    await runner.setup()
    try:
        site = web.TCPSite(runner, server.host, server.port)
        await site.start()
        logging.info("Serving on http://%s:%d", server.host, server.port)
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


if __name__ == "__main__":
    # Loads configuration file
    parser = argparse.ArgumentParser(
        prog="Jobly",
        description="Jobly REST backend for companies and jobs.",
    )

    parser.add_argument(
        "-c",
        "--configfile",
        help="Specify a file to override default configuration",
        default="config.yml",
    )

    arguments = parser.parse_args()

    try:
        asyncio.run(main(config_file=arguments.configfile))
    except KeyboardInterrupt:
        pass
