"""Prompt construction for the machine-learned extraction path.

This module builds:
- The system instructions naming the category vocabulary and the date anchor.
- The user content wrapping the raw phrase.
- The strict ``response_format`` (JSON Schema) object for the OpenAI
  Responses API.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from openai.types.responses.response_format_text_json_schema_config_param import (
    ResponseFormatTextJSONSchemaConfigParam,
)

from .models import Category

BEGIN = "BEGIN_EXPENSE_TEXT\n"
END = "\nEND_EXPENSE_TEXT"


def build_system_instructions(categories: Sequence[Category], today: date) -> str:
    """Return instructions for splitting a phrase into expense items.

    The model must multiply quantity by unit price itself, resolve relative
    dates against ``today`` and pick categories only from ``categories``.
    """

    names = ", ".join(c.value for c in categories)
    return (
        "You are a bookkeeping assistant. Split the user's phrase (English, Traditional "
        "Chinese or a mix of both) into one item per purchase. For every item return: "
        "description (the item name with amounts, quantities and currency removed); "
        "amount (the total for the item; when a quantity and a unit price are given, "
        "multiply them); "
        f"category (exactly one of: {names}); "
        f"date (YYYY-MM-DD; resolve relative dates against today, {today.isoformat()}). "
        "Output JSON only that conforms to the specified schema."
    )


def build_user_content(text: str) -> str:
    """Wrap the raw phrase between BEGIN_/END_ markers."""

    return f"Phrase to parse:\n{BEGIN}{text}{END}\n"


def build_response_format(
    categories: Sequence[Category],
) -> ResponseFormatTextJSONSchemaConfigParam:
    """Return the strict JSON Schema response_format object.

    Schema shape:
    {
      "type": "json_schema",
      "name": "expense_items",
      "schema": {
        "type": "object",
        "properties": {
          "results": {
            "type": "array",
            "items": {
              "type": "object",
              "properties": {
                "description": {"type": "string"},
                "amount": {"type": "number", "minimum": 0},
                "category": {"type": "string", "enum": [...]},
                "date": {"type": "string"}
              },
              "required": ["description", "amount", "category", "date"],
              "additionalProperties": false
            }
          }
        },
        "required": ["results"],
        "additionalProperties": false
      },
      "strict": true
    }
    """

    values: list[str] = list(dict.fromkeys(c.value for c in categories))
    if not values:
        raise ValueError("categories must contain at least one entry")

    result: ResponseFormatTextJSONSchemaConfigParam = {
        "type": "json_schema",
        "name": "expense_items",
        "schema": {
            "type": "object",
            "properties": {
                "results": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "description": {"type": "string"},
                            "amount": {"type": "number", "minimum": 0},
                            "category": {"type": "string", "enum": values},
                            "date": {"type": "string"},
                        },
                        "required": ["description", "amount", "category", "date"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["results"],
            "additionalProperties": False,
        },
        "strict": True,
    }
    return result


__all__ = [
    "BEGIN",
    "END",
    "build_system_instructions",
    "build_user_content",
    "build_response_format",
]
