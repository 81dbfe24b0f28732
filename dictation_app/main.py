#!/usr/bin/env python3
"""
Main entry point for the dictation trainer.
"""
import sys
import logging
import argparse
from pathlib import Path

from PySide6.QtWidgets import QApplication
from dictation_app.config import DEFAULT_LANGUAGE
from dictation_app.ui.main_window import MainWindow


# Configure logging
def setup_logging(verbose=False):
    """Set up logging configuration."""
    log_level = logging.DEBUG if verbose else logging.INFO
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(Path.home() / '.dictation_app.log')
        ]
    )

    # Set more restrictive log level for noisy libraries
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('openai').setLevel(logging.WARNING)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Dictation practice from your own audio clips')
    parser.add_argument('audio', nargs='?', type=Path, help='Audio file to open on start')
    parser.add_argument('-l', '--language', default=DEFAULT_LANGUAGE,
                        help='Language of the audio (ISO code, or "auto")')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    return parser.parse_args(argv)


def main():
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)
    logger.info("Starting dictation trainer (language=%s)", args.language)

    app = QApplication(sys.argv)
    window = MainWindow(language=args.language)
    if args.audio:
        window.file_picker.pick(args.audio)
    window.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
