import uvicorn

from toptracks import config
from toptracks.logging_config import setup_logging


def main() -> None:
    setup_logging(config.LOG_LEVEL, config.LOG_FORMAT)
    uvicorn.run("toptracks.app:app", host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    main()
