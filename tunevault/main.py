"""Entry: start the API server."""
import logging
import uvicorn

from tunevault.config import API_HOST, API_PORT, LOG_LEVEL

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s: %(message)s")
    uvicorn.run(
        "tunevault.api.app:app",
        host=API_HOST,
        port=API_PORT,
    )
