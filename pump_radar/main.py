import asyncio
import logging

import uvicorn

from pump_radar.config import settings
from pump_radar.delivery.web.app import create_app
from pump_radar.utils.logging import setup_logging

logger = logging.getLogger(__name__)


async def main() -> None:
    setup_logging(settings.log_level)
    logger.info("Starting Pump Radar")

    app = create_app()
    config = uvicorn.Config(
        app,
        host=settings.web_host,
        port=settings.web_port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    logger.info("Web API on http://%s:%d", settings.web_host, settings.web_port)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
