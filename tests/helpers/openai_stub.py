"""Test helpers to stub the OpenAI Responses client used by extraction.py.

The stub pulls the raw phrase out of the user-content payload and hands it to
a ``respond`` callable supplied by the test. Whatever ``respond`` returns is
sent back as ``output_text``: strings verbatim (so tests can exercise code
fences or broken JSON), anything else JSON-encoded.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

BEGIN = "BEGIN_EXPENSE_TEXT\n"
END = "\nEND_EXPENSE_TEXT"


def extract_text_from_user_content(user_content: str) -> str:
    b = user_content.find(BEGIN)
    e = user_content.rfind(END)
    if b == -1 or e == -1 or e <= b:
        raise AssertionError("extract: user content missing embedded phrase block")
    return user_content[b + len(BEGIN) : e]


class OpenAIStub:
    """Minimal stub matching ``openai.OpenAI`` shape for ``extraction.py``.

    Parameters
    ----------
    respond:
        A callable receiving the raw phrase and returning the model output,
        either a ``str`` or a JSON-serializable object.
    calls_out:
        A list that will be appended with each call's kwargs to allow tests to
        make lightweight assertions about the request.
    """

    def __init__(
        self,
        respond: Callable[[str], Any],
        calls_out: list[dict[str, Any]] | None = None,
    ) -> None:
        self._respond = respond
        self._calls = calls_out if calls_out is not None else []

        class _Responses:
            def __init__(self, outer: OpenAIStub) -> None:
                self._outer = outer

            def create(self, **kwargs):
                self._outer._calls.append(kwargs)
                payload = self._outer._respond(extract_text_from_user_content(kwargs["input"]))

                class _Resp:
                    output_text: str

                resp = _Resp()
                resp.output_text = (
                    payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
                )
                return resp

        self.responses = _Responses(self)

    # Expose the captured calls list for assertions
    @property
    def calls(self) -> list[dict[str, Any]]:
        return self._calls
