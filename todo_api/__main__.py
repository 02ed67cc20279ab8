import logging
import uvicorn
from todo_api.config import PORT, LOG_LEVEL

logger = logging.getLogger("todo_api")


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Listening on port %s", PORT)
    uvicorn.run("todo_api.main:create_app", factory=True, host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
