"""Optional machine-learned extraction with rule-based fallback.

Public API:
    - :class:`MachineExtractor` (protocol any first-pass extractor satisfies)
    - :class:`OpenAIExtractor` (OpenAI Responses API implementation)
    - :func:`analyze_expense` (try the extractor, fall back to
      :func:`expense_parser.parser.parse_expenses`)

No side effects occur at import time: no client creation and no environment
reads. The two paths are never merged; whichever produces records first is
returned as-is.
"""

from __future__ import annotations

import datetime as dt
import json
import os
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Protocol

from openai import OpenAI
from openai.types.responses import ResponseTextConfigParam
from pydantic import BaseModel, ConfigDict, field_validator

from . import prompting
from .config import DEFAULT_CONFIG, ParserConfig
from .dates import reference_date
from .logging_setup import get_logger
from .models import Category, TransactionRecord
from .normalizer import normalize_description
from .parser import parse_expenses

_MODEL_ENV = "EXPENSE_PARSER_OPENAI_MODEL"
_MODEL_DEFAULT = "gpt-5"

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}")

_logger = get_logger("expense_parser.extraction")


class MachineExtractor(Protocol):
    """Anything that can turn a phrase into records on a first pass."""

    def extract(
        self,
        text: str,
        *,
        categories: Sequence[Category],
        today: dt.date,
    ) -> list[TransactionRecord]: ...


# ---- Response decoding -------------------------------------------------------


def _extract_response_text(resp: Any) -> str:
    """Locate the text output of an OpenAI Responses SDK result.

    Prefer ``resp.output_text``; fall back to ``resp.output[0].content[0].text``.
    Raise ``ValueError`` if no text can be located.
    """

    text: str | None = getattr(resp, "output_text", None)
    if not text:
        try:
            first = resp.output[0] if getattr(resp, "output", None) else None
            content = getattr(first, "content", None)
            if content and len(content) > 0:
                txt_obj = getattr(content[0], "text", None)
                if isinstance(txt_obj, str):
                    text = txt_obj
                else:
                    maybe_val = getattr(txt_obj, "value", None)
                    if isinstance(maybe_val, str):
                        text = maybe_val
        except Exception:  # noqa: BLE001 - tolerate SDK shape differences
            text = None
    if not text or not isinstance(text, str):
        raise ValueError("Unexpected Responses API shape; unable to locate text output")
    return text


def decode_items(raw: str) -> list[Mapping[str, Any]]:
    """Decode model output into a list of item mappings.

    Accepts ``{"results": [...]}``, a bare JSON array, or a single item
    object. Markdown code fences around the JSON are ignored.
    """

    cleaned = _FENCE_RE.sub("", raw).strip()
    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError("Model output was not valid JSON") from e

    if isinstance(decoded, Mapping) and "results" in decoded:
        decoded = decoded["results"]
    if isinstance(decoded, Mapping):
        return [decoded]
    if isinstance(decoded, list) and all(isinstance(item, Mapping) for item in decoded):
        return decoded
    raise ValueError("Invalid response: expected an object or an array of objects")


class ExtractedItem(BaseModel):
    """Typed, validated view of one model-produced expense item."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    description: str
    amount: Decimal
    category: Category
    date: dt.date

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("description must be a non-empty string")
        return v

    @field_validator("amount")
    @classmethod
    def _amount_non_negative(cls, v: Decimal) -> Decimal:
        if not v.is_finite() or v < 0:
            raise ValueError("amount must be a finite number >= 0")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def _category_lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("date", mode="before")
    @classmethod
    def _date_from_iso(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        s = v.strip()
        if not _ISO_DATE_RE.match(s):
            raise ValueError(f"date must be YYYY-MM-DD: {s!r}")
        if len(s) == 10:
            return dt.date.fromisoformat(s)
        # Full ISO-8601 datetimes are reduced to their calendar date.
        return dt.datetime.fromisoformat(s).date()


def parse_items(items: Sequence[Mapping[str, Any]]) -> list[ExtractedItem]:
    return [ExtractedItem.model_validate(item) for item in items]


# ---- OpenAI implementation ---------------------------------------------------


class OpenAIExtractor:
    """First-pass extractor backed by the OpenAI Responses API.

    Parameters
    ----------
    client:
        An ``openai.OpenAI``-shaped client. Created lazily (reading
        ``OPENAI_API_KEY``) on first use when omitted.
    model:
        Model name; defaults to ``EXPENSE_PARSER_OPENAI_MODEL`` or ``gpt-5``.
    config:
        Used when cleaning descriptions returned by the model.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        model: str | None = None,
        config: ParserConfig = DEFAULT_CONFIG,
    ) -> None:
        self._client = client
        self._model = model or os.getenv(_MODEL_ENV) or _MODEL_DEFAULT
        self._config = config

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = OpenAI()
        return self._client

    def extract(
        self,
        text: str,
        *,
        categories: Sequence[Category],
        today: dt.date,
    ) -> list[TransactionRecord]:
        text_cfg = ResponseTextConfigParam(format=prompting.build_response_format(categories))
        _logger.info("analyze_expense:llm_request model=%s chars=%d", self._model, len(text))
        resp = self._get_client().responses.create(
            model=self._model,
            instructions=prompting.build_system_instructions(categories, today),
            input=prompting.build_user_content(text),
            text=text_cfg,
        )
        items = parse_items(decode_items(_extract_response_text(resp)))

        allowed = set(categories)
        out: list[TransactionRecord] = []
        for item in items:
            if item.category not in allowed:
                raise ValueError(f"category not in allow-list: {item.category.value!r}")
            out.append(
                TransactionRecord(
                    description=normalize_description(item.description, config=self._config),
                    amount=item.amount,
                    date=item.date,
                    category=item.category,
                )
            )
        return out


# ---- Fallback orchestration --------------------------------------------------


def analyze_expense(
    text: str,
    *,
    extractor: MachineExtractor | None = None,
    now: dt.datetime | dt.date | None = None,
    config: ParserConfig | None = None,
) -> list[TransactionRecord]:
    """Return records from ``extractor`` when it yields any, else from the rule-based parser.

    A missing extractor, an extractor that raises, and one that returns no
    records all lead to :func:`parse_expenses` with the same reference date.
    Extractor failures are logged at WARNING and not re-raised.
    """

    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    config = config or DEFAULT_CONFIG
    today = reference_date(now, config)

    if extractor is not None and text.strip():
        name = type(extractor).__name__
        try:
            records = list(extractor.extract(text, categories=tuple(Category), today=today))
        except Exception as e:  # noqa: BLE001
            _logger.warning(
                "analyze_expense:extractor_failed extractor=%s error=%s",
                name,
                e.__class__.__name__,
            )
            records = []
        if records:
            _logger.info("analyze_expense:extractor_used extractor=%s records=%d", name, len(records))
            return records
        _logger.info("analyze_expense:fallback extractor=%s", name)

    return parse_expenses(text, now=today, config=config)


__all__ = [
    "MachineExtractor",
    "OpenAIExtractor",
    "ExtractedItem",
    "decode_items",
    "parse_items",
    "analyze_expense",
]
