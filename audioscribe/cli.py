"""Command-Line Interface handler for AudioScribe."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config_loader import ConfigLoader, Settings
from .log_setup import setup_logging
from .runner import TranscriptionRunner
from .exceptions import AudioScribeError, ConfigurationError

logger = logging.getLogger(__name__) # Get logger for this module

class CLIHandler:
    """Parses arguments and orchestrates the AudioScribe process."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="AudioScribe: transcribe an audio file with Azure OpenAI and analyze the transcript.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "audio",
            help="Path to the input audio file. Results are written next to it."
        )
        parser.add_argument(
            "-c", "--config",
            default="config.yaml",
            help="Path to the configuration YAML file."
        )
        parser.add_argument(
            "--temp-dir",
            default=None, # Default taken from config file
            help="Override the directory that holds split segments. Must exist."
        )
        parser.add_argument(
            "--language",
            default=None, # Default taken from config file
            help="Override the transcription language hint (ISO-639-1, e.g. 'ja')."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        return self.parser.parse_args(argv)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Parses arguments, sets up logging, loads config, and runs the transcription."""
        args = self.parse_args(argv)

        log_level = getattr(logging, args.log_level.upper(), logging.INFO)
        # Console + init log until the config tells us where logs belong
        setup_logging(log_level=log_level, log_dir='logs', log_file='audioscribe_init.log')

        # --- Load Configuration ---
        try:
            config = ConfigLoader().load_config(args.config)
        except ConfigurationError as e:
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            sys.exit(1)
        except FileNotFoundError:
            logger.critical(f"Configuration file not found: {args.config}")
            sys.exit(1)

        setup_logging(
            log_level=log_level,
            log_dir=config.get('log_dir') or 'logs',
            log_file=config.get('log_file') or 'audioscribe.log',
        )

        # --- Apply CLI Overrides ---
        if args.temp_dir:
            logger.info(f"Overriding temp_dir from config with CLI argument: {args.temp_dir}")
            config['temp_dir'] = args.temp_dir
        if args.language:
            logger.info(f"Overriding transcription language with CLI argument: {args.language}")
            transcription = config.get('transcription') or {}
            transcription['language'] = args.language
            config['transcription'] = transcription

        try:
            settings = Settings.from_config(config)
        except ConfigurationError as e:
            logger.critical(f"Invalid configuration in {args.config}: {e}")
            sys.exit(1)

        if not os.path.isfile(args.audio):
            logger.critical(f"Input audio file not found or is not a file: {args.audio}")
            sys.exit(1)

        try:
            runner = TranscriptionRunner.from_settings(settings)
            outputs = runner.run(args.audio)
            logger.info(f"Transcript: {outputs.transcript_path}")
            logger.info(f"Analysis: {outputs.analysis_path}")
            sys.exit(0)
        except AudioScribeError as e:
            logger.error(f"An AudioScribe error occurred: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2)

def main() -> None:
    CLIHandler().run()
