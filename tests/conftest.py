from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import pytest

from maik.core.session import ChatMessage
from maik.core.steps import TEMPLATE_FILES, ContractStep


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("OPENROUTER_API_KEY", "MAIK_API_KEY", "MAIK_MODEL", "MAIK_API_BASE", "MAIK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "prompts"
    directory.mkdir()
    for name in TEMPLATE_FILES:
        (directory / name).write_text(f"  system prompt for {name}\n\n", encoding="utf-8")
    return directory


class StubClient:
    """Replays canned completions in order; an exception in the list is raised instead."""

    def __init__(self, responses: Sequence[str | Exception]) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, object]] = []

    def generate_contract_step(
        self,
        system_prompt: str,
        user_message: str,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        self.calls.append({"system": system_prompt, "user": user_message, "history": list(history)})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeUI:
    def __init__(self, answers: Sequence[str] = ()) -> None:
        self._answers = list(answers)
        self.events: list[str] = []
        self.questions: list[tuple[str, str]] = []

    def step_started(self, step: ContractStep) -> None:
        self.events.append(f"start:{step.state.value}")

    @contextmanager
    def working(self, label: str) -> Iterator[None]:
        self.events.append(f"working:{label}")
        yield

    def step_completed(self, step: ContractStep, response: str) -> None:
        self.events.append(f"done:{step.state.value}")

    def ask_feedback(self, question: str, default: str) -> str:
        self.questions.append((question, default))
        if self._answers:
            return self._answers.pop(0)
        return default


@pytest.fixture
def e2e_responses() -> list[str]:
    return ["INTAKE_OK", "CONFIRM_OK", "DRAFT_TEXT", "VERIFY_OK", "EXPLAIN_OK", "FINAL_TEXT"]


@pytest.fixture
def make_client(e2e_responses: list[str]) -> Callable[..., StubClient]:
    def _make(responses: Sequence[str | Exception] | None = None) -> StubClient:
        return StubClient(e2e_responses if responses is None else responses)

    return _make


@pytest.fixture
def make_ui() -> Callable[..., FakeUI]:
    return FakeUI


@pytest.fixture
def stub_client(make_client) -> StubClient:
    return make_client()


@pytest.fixture
def fake_ui(make_ui) -> FakeUI:
    return make_ui()
