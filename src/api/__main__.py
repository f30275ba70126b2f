"""
Reference contact server.
Run: python -m api [-c config.yaml] [-a ADDRESS] [-p PORT]
"""
import argparse
import logging
import sys

import uvicorn

from contactdash.config import check_server_settings, load_dotenv_files, load_settings

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contact API reference server")
    parser.add_argument("-c", "--config-file", help="YAML config file")
    parser.add_argument("-a", "--address", help="The address to listen on for HTTP requests")
    parser.add_argument("-p", "--port", type=int, help="The port to listen on for HTTP requests")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv_files()
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(
            args.config_file,
            overrides={"address": args.address, "port": args.port, "log_level": args.log_level},
        )
        check_server_settings(settings)
    except ValueError as e:
        logger.error("error: %s", e)
        return 2
    logging.getLogger().setLevel(settings.log_level)
    logger.info("Starting server on %s:%s", settings.address, settings.port)
    uvicorn.run(
        "api.main:app",
        host=settings.address,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
