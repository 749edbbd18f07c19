"""Pipeline run: prefilter -> per-line extraction -> dedup -> summary.

One run owns at most one model session. The session is opened before the
first line and closed after the last one on every exit path. Lines are
processed in order because the session is stateful and deduplication must
see earlier lines first.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from rupiya.llm.models import TransactionRecord, AnalysisSummary
from rupiya.llm.aggregator import Aggregator
from rupiya.llm.session import ModelAvailability, ModelSession, ModelSessionFactory
from rupiya.llm.model_extractor import ModelExtractor, build_system_prompt
from rupiya.sms.extractor import LineExtractor
from rupiya.sms.prefilter import filter_candidate_lines
from rupiya.sms.regex_extractor import RegexExtractor
from rupiya.utils.logger import get_logger, set_run_context
from rupiya.utils.exceptions import PipelineError
from .config import PipelineConfig
from .deduplicator import Deduplicator
from .line_parser import LineParser

logger = get_logger()


@dataclass
class PipelineResult:
    run_id: str
    records: List[TransactionRecord] = field(default_factory=list)
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)
    extractor: str = RegexExtractor.name
    candidate_lines: int = 0
    short_lines: int = 0
    dropped_invalid: int = 0
    duplicates: int = 0
    model_lines: int = 0
    fallback_lines: int = 0


class PipelineOrchestrator:
    """Orchestrates one extraction run over a block of message text."""

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        session_factory: Optional[ModelSessionFactory] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.config = config or PipelineConfig()
        self.session_factory = session_factory
        self.clock = clock
        self.aggregator = Aggregator()

    def run(self, raw_text: str) -> PipelineResult:
        """
        Run the pipeline over raw text.

        Args:
            raw_text: Multi-line message text from any source

        Returns:
            PipelineResult with the record batch and its summary

        Raises:
            PipelineError: The input is not text or the run failed as a whole
        """
        if not isinstance(raw_text, str):
            raise PipelineError(f"Expected message text, got {type(raw_text).__name__}")

        started = self.clock()
        run_stamp = int(started.timestamp() * 1000)
        run_id = f"run-{run_stamp}"
        set_run_context(run_id)

        try:
            return self._run(raw_text, started, run_stamp, run_id)
        except PipelineError:
            raise
        except Exception as e:
            logger.error(f"Pipeline run failed: {e}")
            raise PipelineError(f"Pipeline run failed: {e}") from e
        finally:
            set_run_context(None)

    def _run(self, raw_text: str, started: datetime, run_stamp: int, run_id: str) -> PipelineResult:
        lines = filter_candidate_lines(raw_text, self.config.keywords)
        result = PipelineResult(run_id=run_id, candidate_lines=len(lines))
        logger.info(f"Found {len(lines)} candidate lines")

        session = self._open_session()
        extractor: Optional[LineExtractor] = None

        try:
            extractor = self._select_extractor(session)
            parser = LineParser(extractor, self.config, run_stamp, started.date().isoformat())
            dedup = Deduplicator()

            for index, line in enumerate(lines):
                if not parser.is_parsable(line):
                    result.short_lines += 1
                    continue

                record = parser.parse(line, index)
                if record is None:
                    result.dropped_invalid += 1
                    continue

                if not dedup.add(record):
                    logger.debug(f"Skipping duplicate line {index}: {record.original_text[:60]}")
        finally:
            if extractor is not None:
                extractor.close()
            if session is not None:
                self._close_session(session)

        result.extractor = extractor.name
        if isinstance(extractor, ModelExtractor):
            result.model_lines = extractor.model_lines
            result.fallback_lines = extractor.fallback_lines

        result.records = list(dedup.records)
        result.duplicates = dedup.duplicates
        result.summary = self.aggregator.aggregate(result.records)

        logger.info(
            f"Run complete: {len(result.records)} records from {result.candidate_lines} candidate lines "
            f"({result.dropped_invalid} invalid, {result.duplicates} duplicates, {result.short_lines} too short)"
        )
        return result

    def _select_extractor(self, session: Optional[ModelSession]) -> LineExtractor:
        if session is None:
            return RegexExtractor()
        return ModelExtractor(session, RegexExtractor(), self.config.model_call_timeout)

    def _open_session(self) -> Optional[ModelSession]:
        """Create the run's model session, or None to use regex for every line."""
        if self.session_factory is None:
            return None

        try:
            availability = self.session_factory.availability()
        except Exception as e:
            logger.warning(f"Model availability check failed, using regex parser: {e}")
            return None

        if availability != ModelAvailability.READY:
            logger.info(f"Model {availability.value}, using regex parser")
            return None

        try:
            return self.session_factory.create_session(build_system_prompt(self.config.categories))
        except Exception as e:
            logger.warning(f"Model session unavailable, using regex parser: {e}")
            return None

    @staticmethod
    def _close_session(session: ModelSession) -> None:
        try:
            session.close()
        except Exception as e:
            logger.warning(f"Failed to close model session: {e}")


def run_pipeline(
    raw_text: str,
    session_factory: Optional[ModelSessionFactory] = None,
    config: Optional[PipelineConfig] = None
) -> Tuple[List[TransactionRecord], AnalysisSummary]:
    """Extract records from raw text and summarize them."""
    result = PipelineOrchestrator(config, session_factory).run(raw_text)
    return result.records, result.summary
