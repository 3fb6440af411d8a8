"""Run the Hyper desktop bridge.

The bridge's lifespan launches the bundled ``hyper`` backend in packaged mode
and stops it again when uvicorn shuts down. In development the backend is
expected to be running already (``make native``).
"""

from __future__ import annotations


def main() -> None:
    import uvicorn

    from desktop.core.config import get_settings
    from desktop.host.main import app

    settings = get_settings()
    # reload would fork a second supervisor, so it stays off in every mode.
    uvicorn.run(
        app,
        host=settings.desktop_host,
        port=settings.desktop_port,
        reload=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()
