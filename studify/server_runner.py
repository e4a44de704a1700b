"""Helper to launch the API server"""

import logging

import uvicorn

from studify import config


def run_server(host: str = "0.0.0.0", port: int = config.PORT, log_level: str = "info") -> None:
    """Serve studify.main:app with uvicorn"""
    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    logging.getLogger(__name__).info(f"Studify backend running on port {port}")
    uvicorn.run("studify.main:app", host=host, port=port, log_level=log_level)


if __name__ == "__main__":
    run_server()
