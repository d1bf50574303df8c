"""
Main entry point for the Image Converter GUI application.
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from PySide6 import QtAsyncio
from PySide6.QtWidgets import QApplication

from core.config import APP_NAME, APP_ORGANIZATION, LOG_LEVELS
from core.config_manager import ConfigManager
from core.conversion_state import SessionState
from core.error_handler import init_logging, setup_error_handling
from core.errors import ConfigError
from core.orchestrator import ConversionOrchestrator
from core.remote_service import HttpRemoteService
from core.session import generate_session_token
from core.transfer_encoder import Base64Encoder
from gui.main_window import MainWindow


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="image-converter-gui", description="Convert images through a remote service.")
    parser.add_argument("--api-url", help="Base URL of the conversion service (saved for later runs)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Logging level")
    parser.add_argument("--reset-settings", action="store_true", help="Forget saved settings before applying the other options")
    return parser.parse_args(argv)


def build_orchestrator(config_manager: ConfigManager) -> ConversionOrchestrator:
    """Wire the orchestrator with a fresh session token and the HTTP service."""
    return ConversionOrchestrator(
        session_state=SessionState(),
        remote_service=HttpRemoteService(config_manager.get_api_base_url()),
        encoder=Base64Encoder(),
        session_token=generate_session_token(),
        error_handler=setup_error_handling(),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main application entry point."""
    args = parse_args(argv)

    app = QApplication(sys.argv[:1])
    app.setOrganizationName(APP_ORGANIZATION)
    app.setApplicationName(APP_NAME)

    config_manager = ConfigManager()
    if args.reset_settings:
        config_manager.reset_to_defaults()
    if args.log_level:
        config_manager.set("log_level", args.log_level)
    init_logging(config_manager.get("log_level"))
    logger = logging.getLogger(__name__)

    try:
        if args.api_url:
            config_manager.set_api_base_url(args.api_url)
        orchestrator = build_orchestrator(config_manager)
    except ConfigError as e:
        logger.error(f"{e.user_message}: {e.technical_message}")
        print(f"{e.user_message}: {e.technical_message}", file=sys.stderr)
        return 2

    logger.info(f"Using conversion service at {config_manager.get_api_base_url()}")

    window = MainWindow(orchestrator, config_manager=config_manager)
    window.show()

    # Qt event loop doubles as the asyncio loop for conversion tasks
    QtAsyncio.run(handle_sigint=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
