"""Line extractor interface shared by the regex and model paths."""
from abc import ABC, abstractmethod

from rupiya.llm.models import PartialRecord


class LineExtractor(ABC):
    """Turns one message line into a PartialRecord."""

    name = "extractor"

    @abstractmethod
    def extract(self, line: str) -> PartialRecord:
        """Extract fields from a single trimmed line."""

    def close(self) -> None:
        """Release run-scoped resources."""
