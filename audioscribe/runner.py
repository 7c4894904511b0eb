"""Orchestrates transcription, analysis and result files for one audio file."""

import logging
import time
from dataclasses import dataclass

from .aggregator import TranscriptionAggregator
from .analyzer import Analyzer, AzureOpenAIAnalyzer
from .audio_splitter import AudioSplitter
from .azure_client import create_client
from .config_loader import Settings
from .dispatcher import TranscriptionDispatcher
from .duration_probe import MediaDurationProbe
from .exceptions import AudioScribeError, FileSystemError
from .models import AudioAsset
from .segment_extractor import SegmentExtractor
from .transcriber import AzureOpenAITranscriber
from .utils import output_paths_for

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class RunOutputs:
    transcript_path: str
    analysis_path: str

def _write_text(path: str, text: str) -> None:
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise FileSystemError(f"Could not write {path}: {e}") from e

class TranscriptionRunner:
    """
    Manages the end-to-end process for a single audio file.
    """

    def __init__(self, dispatcher: TranscriptionDispatcher, analyzer: Analyzer):
        """
        Initializes the TranscriptionRunner.

        Args:
            dispatcher: Produces the transcript for an asset.
            analyzer: Produces the analysis text for a transcript.
        """
        self.dispatcher = dispatcher
        self.analyzer = analyzer

    @classmethod
    def from_settings(cls, settings: Settings) -> "TranscriptionRunner":
        """Wires the Azure OpenAI and ffmpeg components described by ``settings``."""
        transcription_client = create_client(
            settings.endpoint,
            settings.api_key,
            settings.transcription_api_version,
            timeout_seconds=settings.request_timeout_seconds,
        )
        analysis_client = create_client(
            settings.endpoint,
            settings.api_key,
            settings.analysis_api_version,
            timeout_seconds=settings.request_timeout_seconds,
        )
        transcriber = AzureOpenAITranscriber(
            transcription_client,
            deployment=settings.transcription_deployment,
            language=settings.language,
        )
        splitter = AudioSplitter(
            probe=MediaDurationProbe(settings.ffprobe_path, timeout_seconds=settings.ffmpeg_timeout_seconds),
            extractor=SegmentExtractor(settings.ffmpeg_path, timeout_seconds=settings.ffmpeg_timeout_seconds),
            temp_root=settings.temp_dir,
            target_segment_bytes=settings.target_segment_bytes,
            min_segment_seconds=settings.min_segment_seconds,
            max_segment_seconds=settings.max_segment_seconds,
        )
        dispatcher = TranscriptionDispatcher(
            transcriber=transcriber,
            splitter=splitter,
            aggregator=TranscriptionAggregator(transcriber),
            size_threshold_bytes=settings.size_threshold_bytes,
        )
        analyzer = AzureOpenAIAnalyzer(
            analysis_client,
            deployment=settings.analysis_deployment,
            system_prompt=settings.system_prompt,
            user_prompt_template=settings.user_prompt_template,
        )
        return cls(dispatcher, analyzer)

    def run(self, audio_path: str) -> RunOutputs:
        """
        Transcribes ``audio_path``, then analyzes the transcript.

        The transcript is written before analysis starts, so it is kept even
        when the analysis step fails.

        Raises:
            FileSystemError: If the input is missing or an output cannot be written.
            AudioScribeError: For transcription or splitting failures.
        """
        start_time = time.time()
        logger.info(f"--- Starting transcription of: {audio_path} ---")
        try:
            asset = AudioAsset.from_path(audio_path)
        except FileNotFoundError as e:
            raise FileSystemError(str(e)) from e
        transcript_path, analysis_path = output_paths_for(audio_path)

        try:
            logger.info("Step 1: Transcribing audio...")
            transcript = self.dispatcher.transcribe(asset)
            _write_text(transcript_path, transcript)
            logger.info(f"Transcript saved to: {transcript_path}")

            logger.info("Step 2: Analyzing transcript...")
            analysis = self.analyzer.analyze(transcript)
            _write_text(analysis_path, analysis)
            logger.info(f"Analysis saved to: {analysis_path}")
        except AudioScribeError as e:
            logger.error(f"Run failed: {e}", exc_info=False)
            raise
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred during the run: {e}", exc_info=True)
            raise AudioScribeError(f"An unexpected critical error occurred: {e}") from e

        logger.info(f"--- Completed in {time.time() - start_time:.2f} seconds ---")
        return RunOutputs(transcript_path=transcript_path, analysis_path=analysis_path)
