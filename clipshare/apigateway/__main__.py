from __future__ import annotations
import logging

import uvicorn

from .app import create_app
from .settings import GatewaySettings

def main() -> None:
    settings = GatewaySettings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(create_app(settings=settings), host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    main()
