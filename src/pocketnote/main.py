"""Application entry point for PocketNote backend server."""

from pocketnote.app import App
from pocketnote.config import Config
from pocketnote.logging import setup_logging
from pocketnote.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
