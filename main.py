import logging

from aiohttp import web

from core import config
from core.proxy import create_app


logging.basicConfig(
    level=config.LOG_LEVEL if isinstance(logging.getLevelName(config.LOG_LEVEL), int) else logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
)
log = logging.getLogger("thumbfeed")


def main() -> None:
    config.validate_config()
    app = create_app()
    log.info(
        "Proxy RSS sur http://%s:%s%s (timeout %ss)",
        config.PROXY_HOST, config.PROXY_PORT, config.PROXY_ROUTE, config.FEED_FETCH_TIMEOUT,
    )
    web.run_app(app, host=config.PROXY_HOST, port=config.PROXY_PORT, print=None)


if __name__ == "__main__":
    main()
