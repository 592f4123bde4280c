import logging
import sys

import uvicorn

from application.services import AuthService
from infrastructure.db.bootstrap import build_account_repository
from interfaces.http.app import create_app
from settings import load_settings

logger = logging.getLogger("api_main")


def main() -> None:
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )

    account_repo = build_account_repository(settings)
    auth_service = AuthService(account_repo)
    app = create_app(auth_service, settings.cors_origins)

    logger.info("LINCOLN API starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
