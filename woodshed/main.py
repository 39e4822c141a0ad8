import logging

import uvicorn

from woodshed.api.main import create_app
from woodshed.config import load_config
from woodshed.logging_config.logging_config import setup_logging


# ruff: noqa: D103
def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting Woodshed API")

    config = load_config()
    app = create_app(config)

    uvicorn.run(app, host=config["HOST"], port=config["PORT"])


if __name__ == "__main__":
    main()
