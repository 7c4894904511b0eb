"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import ConfigurationError
from .segment_planner import (
    DEFAULT_MAX_SEGMENT_SECONDS,
    DEFAULT_MIN_SEGMENT_SECONDS,
    DEFAULT_TARGET_SEGMENT_BYTES,
)
from .dispatcher import DEFAULT_SIZE_THRESHOLD_BYTES
from .utils import MIB

logger = logging.getLogger(__name__)

DEFAULT_TRANSCRIPTION_API_VERSION = "2024-06-01"
DEFAULT_ANALYSIS_API_VERSION = "2024-02-15-preview"
DEFAULT_LANGUAGE = "ja"

class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
             logger.error(f"Configuration path is not a file: {config_path}")
             raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except OSError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if not isinstance(config, dict):
            # e.g. an empty file or a bare string at the root
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config

def _section(config: dict, *keys: str) -> dict:
    node: Any = config
    for key in keys:
        node = node.get(key) if isinstance(node, dict) else None
        if node is None:
            return {}
    if not isinstance(node, dict):
        raise ConfigurationError(f"Configuration section '{'.'.join(keys)}' must be a mapping.")
    return node

def _required(section: dict, key: str, dotted: str) -> str:
    value = section.get(key)
    if value is None or not str(value).strip():
        raise ConfigurationError(f"Missing required configuration value '{dotted}'.")
    return str(value)

def _number(section: dict, key: str, default, cast, dotted: str):
    value = section.get(key)
    if value is None:
        return default
    try:
        number = cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Configuration value '{dotted}' must be a number: {value!r}") from e
    if number <= 0:
        raise ConfigurationError(f"Configuration value '{dotted}' must be > 0.")
    return number

@dataclass(frozen=True)
class Settings:
    """Validated settings for one run."""
    endpoint: str
    api_key: str
    transcription_deployment: str
    analysis_deployment: str
    system_prompt: str
    user_prompt_template: str
    transcription_api_version: str = DEFAULT_TRANSCRIPTION_API_VERSION
    analysis_api_version: str = DEFAULT_ANALYSIS_API_VERSION
    request_timeout_seconds: Optional[float] = None
    language: str = DEFAULT_LANGUAGE
    size_threshold_bytes: int = DEFAULT_SIZE_THRESHOLD_BYTES
    target_segment_bytes: int = DEFAULT_TARGET_SEGMENT_BYTES
    min_segment_seconds: int = DEFAULT_MIN_SEGMENT_SECONDS
    max_segment_seconds: int = DEFAULT_MAX_SEGMENT_SECONDS
    ffmpeg_path: Optional[str] = None
    ffprobe_path: Optional[str] = None
    ffmpeg_timeout_seconds: Optional[float] = None
    temp_dir: Optional[str] = None

    @classmethod
    def from_config(cls, config: dict) -> "Settings":
        """
        Validates a loaded configuration dictionary.

        Raises:
            ConfigurationError: If a required value is missing or empty, or a
                                numeric value is invalid.
        """
        azure = _section(config, 'azure', 'openai')
        prompts = _section(config, 'ai', 'prompts')
        transcription = _section(config, 'transcription')
        ffmpeg_section = _section(config, 'ffmpeg')

        min_seconds = _number(transcription, 'min_segment_seconds', DEFAULT_MIN_SEGMENT_SECONDS, int,
                              'transcription.min_segment_seconds')
        max_seconds = _number(transcription, 'max_segment_seconds', DEFAULT_MAX_SEGMENT_SECONDS, int,
                              'transcription.max_segment_seconds')
        if max_seconds < min_seconds:
            raise ConfigurationError("transcription.max_segment_seconds must be >= min_segment_seconds.")

        max_file_size_mb = _number(transcription, 'max_file_size_mb', None, float,
                                   'transcription.max_file_size_mb')
        target_segment_mb = _number(transcription, 'target_segment_mb', None, float,
                                    'transcription.target_segment_mb')

        return cls(
            endpoint=_required(azure, 'endpoint', 'azure.openai.endpoint'),
            api_key=_required(azure, 'api_key', 'azure.openai.api_key'),
            transcription_deployment=_required(azure, 'transcription_deployment',
                                               'azure.openai.transcription_deployment'),
            analysis_deployment=_required(azure, 'analysis_deployment', 'azure.openai.analysis_deployment'),
            system_prompt=_required(prompts, 'system_prompt', 'ai.prompts.system_prompt'),
            user_prompt_template=_required(prompts, 'user_prompt_template', 'ai.prompts.user_prompt_template'),
            transcription_api_version=str(azure.get('transcription_api_version') or DEFAULT_TRANSCRIPTION_API_VERSION),
            analysis_api_version=str(azure.get('analysis_api_version') or DEFAULT_ANALYSIS_API_VERSION),
            request_timeout_seconds=_number(azure, 'timeout_seconds', None, float, 'azure.openai.timeout_seconds'),
            language=str(transcription.get('language') or DEFAULT_LANGUAGE),
            size_threshold_bytes=(int(max_file_size_mb * MIB) if max_file_size_mb is not None
                                  else DEFAULT_SIZE_THRESHOLD_BYTES),
            target_segment_bytes=(int(target_segment_mb * MIB) if target_segment_mb is not None
                                  else DEFAULT_TARGET_SEGMENT_BYTES),
            min_segment_seconds=min_seconds,
            max_segment_seconds=max_seconds,
            ffmpeg_path=ffmpeg_section.get('ffmpeg_path'),
            ffprobe_path=ffmpeg_section.get('ffprobe_path'),
            ffmpeg_timeout_seconds=_number(ffmpeg_section, 'timeout_seconds', None, float, 'ffmpeg.timeout_seconds'),
            temp_dir=config.get('temp_dir'),
        )
