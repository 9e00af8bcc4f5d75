import logging

import uvicorn

from todo_api.core.config import get_settings
from todo_api.core.logger import configure_logging

logger = logging.getLogger("todo_api")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server up on %s:%s", settings.host, settings.port)
    uvicorn.run("todo_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
