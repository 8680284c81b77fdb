"""Entrypoint: run the knowledge-base assistant server."""

import uvicorn

from kb_assistant.api.app import create_app
from kb_assistant.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
