"""Startup script for the caredesk admin API."""

import os

import uvicorn


def main() -> None:
    """Start the API server with graceful shutdown configuration."""
    host = os.getenv("CAREDESK_API_HOST", "0.0.0.0")
    port = int(os.getenv("CAREDESK_API_PORT", "8000"))
    reload = os.getenv("CAREDESK_API_RELOAD", "false").lower() == "true"
    shutdown_timeout = int(os.getenv("SHUTDOWN_TIMEOUT_SECONDS", "30"))

    config = uvicorn.Config(
        "caredesk_api.main:app",
        host=host,
        port=port,
        reload=reload,
        timeout_graceful_shutdown=shutdown_timeout,
        log_level=os.getenv("CAREDESK_LOG_LEVEL", "info").lower(),
    )

    server = uvicorn.Server(config)
    server.run()


if __name__ == "__main__":
    main()
