"""Run the Saffron API server.

Usage:
    python -m saffron_api

Reads HOST and PORT (default 8080) from the environment.
"""

import uvicorn

from .settings import settings


def main():
    uvicorn.run("saffron_api.main:app", host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    main()
