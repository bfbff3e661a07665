# ruff: noqa: I001
"""CLI for the ``expense_parser`` package.

This module exposes a callable command handler (:func:`cmd_parse`) and a
Typer-based console interface. Environment variables (``EXPENSE_PARSER_*``
and, for ``--llm``, ``OPENAI_API_KEY``) are loaded from a local ``.env`` using
``python-dotenv`` before delegating to command logic. Parsing itself lives in
``expense_parser.parser`` and ``expense_parser.extraction``.
"""

from __future__ import annotations

import dataclasses
import json
import os
import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .config import ParserConfig
from .logging_setup import configure_logging
from .models import TransactionRecord


def _format_line(record: TransactionRecord, *, localized: bool) -> str:
    category = record.category.localized_name if localized else record.category.value
    return "\t".join(
        (record.date.isoformat(), format(record.amount, "f"), category, record.description)
    )


def _to_json(records: list[TransactionRecord], *, localized: bool) -> str:
    rows = []
    for r in records:
        row = r.to_dict()
        if localized:
            row["category_name"] = r.category.localized_name
        rows.append(row)
    return json.dumps(rows, ensure_ascii=False, indent=2)


def cmd_parse(
    text: str,
    *,
    today: str | None = None,
    tz: str | None = None,
    as_json: bool = False,
    llm: bool = False,
    localized: bool = False,
) -> int:
    """Parse ``text`` and print one line per record to stdout.

    Behavior
    --------
    - Builds a :class:`ParserConfig` from ``EXPENSE_PARSER_*`` variables, with
      ``tz`` overriding the timezone.
    - ``today`` (``YYYY-MM-DD``) replaces the clock as the reference date.
    - With ``llm``, the OpenAI extractor is tried first and the rule-based
      parser is used when it fails or returns nothing.
    - Default output is tab-separated ``date amount category description``;
      ``as_json`` prints a JSON array instead.

    Returns
    -------
    int
        ``0`` on success, ``1`` on invalid options or configuration.
    """

    from .extraction import OpenAIExtractor, analyze_expense
    from .parser import parse_expenses

    try:
        config = ParserConfig.from_env()
        if tz:
            config = dataclasses.replace(config, timezone=tz)
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    reference: date | None = None
    if today:
        try:
            reference = date.fromisoformat(today)
        except ValueError:
            print(f"Error: --today must be YYYY-MM-DD, got {today!r}", file=sys.stderr)
            return 1

    if llm:
        if not os.getenv("OPENAI_API_KEY"):
            print("Error: OPENAI_API_KEY is not set in the environment.", file=sys.stderr)
            return 1
        records = analyze_expense(
            text, extractor=OpenAIExtractor(config=config), now=reference, config=config
        )
    else:
        records = parse_expenses(text, now=reference, config=config)

    if as_json:
        print(_to_json(records, localized=localized))
    else:
        for r in records:
            print(_format_line(r, localized=localized))
    return 0


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Turn free-form expense phrases (English, Traditional Chinese or mixed) into "
        "dated, categorized records. Loads settings from a local .env before running."
    ),
)


@app.command("parse")
def parse_cmd(
    text: Annotated[str, typer.Argument(help="Expense phrase, e.g. 'coffee 55 and cake 120'.")],
    *,
    today: str | None = typer.Option(
        None, "--today", help="Reference date (YYYY-MM-DD) instead of the clock."
    ),
    tz: str | None = typer.Option(
        None, "--tz", help="IANA timezone (falls back to EXPENSE_PARSER_TZ, then UTC)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print records as a JSON array."),
    llm: bool = typer.Option(
        False, "--llm", help="Try the OpenAI extractor first; fall back to the rule parser."
    ),
    localized: bool = typer.Option(
        False, "--localized", help="Show Traditional Chinese category names."
    ),
) -> None:
    """Parse one phrase and print the resulting records."""

    code = cmd_parse(text, today=today, tz=tz, as_json=as_json, llm=llm, localized=localized)
    if code:
        raise typer.Exit(code)


@app.callback(invoke_without_command=True)
def _root(ctx: typer.Context) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging.
    """

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging()

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m expense_parser.cli`
    app()
