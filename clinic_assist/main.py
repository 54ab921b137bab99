"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the browser interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles API routes, NiceGUI handles the UI.
    """
    import uvicorn
    from nicegui import ui

    from clinic_assist.api.app import create_app
    from clinic_assist.ui.shell import index_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="APS Inteligente",
        favicon="🩺",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "clinic-assist-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point.

    Exits when the model API key is missing, since neither tool can work
    without it.
    """
    from clinic_assist.agent.config import get_generation_config
    from clinic_assist.errors import ConfigurationError

    try:
        config = get_generation_config()
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"Starting APS Inteligente with model {config.model_name}")
    run_integrated()


if __name__ == "__main__":
    main()
