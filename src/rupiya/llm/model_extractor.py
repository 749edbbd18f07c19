"""Model-assisted line extraction with regex fallback."""
import re
import json
import threading
import concurrent.futures
from decimal import Decimal
from typing import Dict, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from .models import PartialRecord
from .session import ModelSession
from rupiya.sms.extractor import LineExtractor
from rupiya.sms.regex_extractor import RegexExtractor
from rupiya.utils.logger import get_logger
from rupiya.utils.exceptions import LLMError

logger = get_logger()

DEFAULT_CATEGORIES = ("Food", "Travel", "Bills", "Shopping")

SMART_QUOTES = {"“": '"', "”": '"'}
TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")


class ModelTransactionSchema(BaseModel):
    """Pydantic schema for one model-parsed message."""
    amount: Optional[float] = Field(default=None, allow_inf_nan=False, description="Transaction amount")
    merchant: Optional[str] = Field(default=None, description="Merchant or counterparty")
    category: Optional[str] = Field(default=None, description="Spending category")
    status: Optional[str] = Field(default=None, description="success/failed/cancelled/pending")
    type: Optional[str] = Field(default=None, description="debit/credit")

    @field_validator("amount", mode="before")
    @classmethod
    def reject_boolean_amount(cls, value):
        # bool is an int subclass and would otherwise coerce to 0/1
        if isinstance(value, bool):
            raise ValueError("amount must be a number, not a boolean")
        return value


def build_system_prompt(categories: Sequence[str] = DEFAULT_CATEGORIES) -> str:
    """Build the session-wide instruction."""
    return (
        "You are a parser for Indian banking SMS. Extract JSON with keys: "
        "amount (number), merchant (string), "
        f"category ({'/'.join(categories)}), "
        "status (success/failed/cancelled/pending), type (credit/debit). "
        "Return a single JSON object and nothing else."
    )


def build_line_prompt(line: str) -> str:
    return f'Parse this SMS: "{line}". Return ONLY a JSON object.'


def find_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} substring of text.

    Braces inside JSON string literals are ignored. Models often wrap the
    object in commentary or markdown fences.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for pos in range(start, len(text)):
            char = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:pos + 1]
        start = text.find("{", start + 1)
    return None


def parse_model_response(response_text: str) -> Dict:
    """Recover and validate the JSON object in a model response."""
    cleaned = response_text or ""
    for smart, plain in SMART_QUOTES.items():
        cleaned = cleaned.replace(smart, plain)

    candidate = find_json_object(cleaned)
    if candidate is None:
        raise LLMError("No JSON object found in model response")

    # Remove common trailing commas before closing brackets/braces
    candidate = TRAILING_COMMA_RE.sub(r"\1", candidate)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"Response text: {response_text[:500]}")
        raise LLMError(f"Invalid JSON response from model: {e}")

    try:
        validated = ModelTransactionSchema.model_validate(data)
    except ValidationError as e:
        raise LLMError(f"Model response does not match expected schema: {e}")

    return validated.model_dump()


class ModelExtractor(LineExtractor):
    """Asks a model session for each line; falls back to regex per line."""

    name = "model"

    def __init__(
        self,
        session: ModelSession,
        fallback: Optional[RegexExtractor] = None,
        call_timeout: Optional[float] = None
    ):
        """
        Initialize the extractor for one run.

        Args:
            session: Open model session owned by the caller
            fallback: Extractor used whenever the model path fails
            call_timeout: Seconds to wait for one model reply; None waits forever
        """
        self.session = session
        self.fallback = fallback or RegexExtractor()
        self.call_timeout = call_timeout
        self.model_lines = 0
        self.fallback_lines = 0
        self.session_broken = False

    def extract(self, line: str) -> PartialRecord:
        if not self.session_broken:
            try:
                data = parse_model_response(self._prompt(build_line_prompt(line)))
                self.model_lines += 1
                return self._to_partial(data)
            except concurrent.futures.TimeoutError:
                # The pending call still holds the session
                self.session_broken = True
                logger.warning(
                    f"Model call timed out after {self.call_timeout}s; "
                    f"using regex for the rest of the run"
                )
            except Exception as e:
                logger.warning(f"Model extraction failed, using regex fallback: {e}")

        self.fallback_lines += 1
        return self.fallback.extract(line)

    def _prompt(self, prompt: str) -> str:
        if self.call_timeout is None:
            return self.session.prompt(prompt)

        # Daemon thread: an abandoned call must not keep the process alive at exit
        future: concurrent.futures.Future = concurrent.futures.Future()

        def call():
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self.session.prompt(prompt))
            except Exception as e:
                future.set_exception(e)

        threading.Thread(target=call, name="rupiya-model", daemon=True).start()
        return future.result(timeout=self.call_timeout)

    @staticmethod
    def _to_partial(data: Dict) -> PartialRecord:
        amount = data.get("amount")
        return PartialRecord(
            amount=Decimal(str(amount)) if amount is not None else None,
            merchant=_clean(data.get("merchant")),
            category=_clean(data.get("category")),
            type=_clean(data.get("type")),
            status=_clean(data.get("status"))
        )


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
