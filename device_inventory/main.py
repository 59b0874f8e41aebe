from __future__ import annotations

import uvicorn
from prometheus_fastapi_instrumentator import Instrumentator

from device_inventory import create_app
from device_inventory.core.config import get_settings
from device_inventory.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
app = create_app(settings)
Instrumentator().instrument(app).expose(app, include_in_schema=False)


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
