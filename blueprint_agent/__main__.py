"""Run the blueprint agent with uvicorn."""

import uvicorn

from blueprint_agent.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("blueprint_agent.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
