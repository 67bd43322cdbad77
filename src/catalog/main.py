"""Process entry point: load configuration once and serve the API."""

import uvicorn

from src.catalog.api.http.app import create_app
from src.catalog.runtime.config.config_template import load_config


def main() -> None:
    config = load_config()
    app = create_app(config)
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # request logs come from our middleware
        log_config=None,
    )


if __name__ == "__main__":
    main()
