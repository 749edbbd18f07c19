"""Run-scoped pipeline configuration."""
from dataclasses import dataclass
from typing import Optional, Tuple

from rupiya.sms.prefilter import DEFAULT_KEYWORDS
from rupiya.llm.model_extractor import DEFAULT_CATEGORIES


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one pipeline run."""
    keywords: Tuple[str, ...] = DEFAULT_KEYWORDS
    min_line_length: int = 10
    default_bank_name: str = "Bank"
    default_payment_mode: str = "UPI"
    default_category: str = "Other"
    categories: Tuple[str, ...] = DEFAULT_CATEGORIES
    model_call_timeout: Optional[float] = 30.0

    @classmethod
    def from_settings(cls, settings) -> "PipelineConfig":
        """Build from AppSettings."""
        return cls(
            keywords=tuple(settings.keywords),
            min_line_length=settings.min_line_length,
            default_bank_name=settings.default_bank_name,
            default_payment_mode=settings.default_payment_mode,
            default_category=settings.default_category,
            categories=tuple(settings.llm_categories),
            model_call_timeout=settings.llm_call_timeout_seconds
        )
