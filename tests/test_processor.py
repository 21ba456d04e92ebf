from pathlib import Path

import pytest

from maik.core.processor import ContractProcessor
from maik.core.prompts import PromptLibrary
from maik.core.steps import CONTRACT_STEPS, FINAL_USER_MESSAGE, ProcessState
from maik.errors import (
    ContractNotReadyError,
    MaikError,
    ProcessStateError,
    PromptDirectoryNotFoundError,
    PromptFileNotFoundError,
)

USER_PROMPT = "Berlin startup needs a 3-month freelance dev contract"


def _processor(prompts_dir: Path, client, ui) -> ContractProcessor:
    return ContractProcessor(client, PromptLibrary(prompts_dir), ui, USER_PROMPT)


@pytest.mark.parametrize("completed", range(1, len(CONTRACT_STEPS) + 1))
def test_history_grows_by_two_per_stage(prompts_dir: Path, stub_client, fake_ui, completed: int) -> None:
    processor = _processor(prompts_dir, stub_client, fake_ui)

    for step in CONTRACT_STEPS[:completed]:
        processor.run_step(step)

    history = processor.session.conversation_history
    assert len(history) == 2 * completed
    assert [entry["role"] for entry in history] == ["user", "assistant"] * completed


def test_process_runs_all_stages_and_synthesis(prompts_dir: Path, stub_client, fake_ui) -> None:
    processor = _processor(prompts_dir, stub_client, fake_ui)

    final = processor.process()

    assert final == "FINAL_TEXT"
    assert processor.state is ProcessState.DONE
    assert processor.session.final_contract == "FINAL_TEXT"
    assert processor.session.contract_draft == "DRAFT_TEXT"
    assert len(stub_client.calls) == 6
    assert len(processor.session.conversation_history) == 10
    assert [question for question, _ in fake_ui.questions][0].startswith("Please provide any additional details")


def test_stage_calls_use_trimmed_templates_and_prior_history(prompts_dir: Path, stub_client, fake_ui) -> None:
    processor = _processor(prompts_dir, stub_client, fake_ui)
    processor.process()

    intake, confirm, draft, verify, explain, final = stub_client.calls
    assert intake["system"] == "system prompt for intake.txt"
    assert intake["user"] == USER_PROMPT
    assert intake["history"] == []
    assert confirm["user"] == (
        f"User Request: {USER_PROMPT}\n\nIntake Information: INTAKE_OK\n\nAdditional Details: No additional details needed"
    )
    assert len(confirm["history"]) == 2
    assert "Confirmed Specifications: CONFIRM_OK" in draft["user"]
    assert "Contract Draft: DRAFT_TEXT" in verify["user"]
    assert "User Feedback: Draft looks good, proceed with verification" in verify["user"]
    assert "Final Contract: DRAFT_TEXT" in explain["user"]
    assert "Verification Notes: VERIFY_OK" in explain["user"]
    assert len(explain["history"]) == 8

    assert final["user"] == FINAL_USER_MESSAGE
    assert "DRAFT_TEXT" in final["system"]
    assert "VERIFY_OK" in final["system"]
    assert "Verification feedback looks good" in final["system"]
    assert "Explanation looks good" in final["system"]
    assert len(final["history"]) == 10


def test_user_feedback_is_passed_to_next_stage(prompts_dir: Path, stub_client, make_ui) -> None:
    processor = _processor(prompts_dir, stub_client, make_ui(["Client is a GmbH in Berlin"]))

    processor.run_step(CONTRACT_STEPS[0])
    processor.run_step(CONTRACT_STEPS[1])

    assert stub_client.calls[1]["user"].endswith("Additional Details: Client is a GmbH in Berlin")
    assert processor.session.feedback["intake"] == "Client is a GmbH in Berlin"


def test_missing_template_fails_before_any_call(prompts_dir: Path, stub_client, fake_ui) -> None:
    (prompts_dir / "verify.txt").unlink()
    processor = _processor(prompts_dir, stub_client, fake_ui)

    with pytest.raises(PromptFileNotFoundError) as exc_info:
        processor.process()

    assert str(prompts_dir / "verify.txt") in str(exc_info.value)
    assert stub_client.calls == []
    assert processor.session.conversation_history == []


def test_missing_directory_is_a_configuration_error(tmp_path: Path, stub_client, fake_ui) -> None:
    processor = _processor(tmp_path / "nope", stub_client, fake_ui)

    with pytest.raises(PromptDirectoryNotFoundError):
        processor.process()
    assert stub_client.calls == []


def test_client_failure_aborts_without_final_contract(prompts_dir: Path, make_client, fake_ui) -> None:
    client = make_client(["INTAKE_OK", "CONFIRM_OK", RuntimeError("boom")])
    processor = _processor(prompts_dir, client, fake_ui)

    with pytest.raises(RuntimeError, match="boom"):
        processor.process()
    assert processor.session.final_contract is None
    assert len(processor.session.conversation_history) == 4


def test_stages_cannot_be_skipped(prompts_dir: Path, stub_client, fake_ui) -> None:
    processor = _processor(prompts_dir, stub_client, fake_ui)

    with pytest.raises(ProcessStateError, match="Cannot run draft while in state intake"):
        processor.run_step(CONTRACT_STEPS[2])
    with pytest.raises(ProcessStateError) as exc_info:
        processor.synthesize()
    assert isinstance(exc_info.value, MaikError)
    assert stub_client.calls == []


def test_save_before_generation_fails_and_writes_nothing(prompts_dir: Path, tmp_path: Path, stub_client, fake_ui) -> None:
    processor = _processor(prompts_dir, stub_client, fake_ui)
    target = tmp_path / "contract.txt"

    with pytest.raises(ContractNotReadyError):
        processor.save_contract(target)
    assert not target.exists()
    assert list(tmp_path.glob("german_freelance_contract_*.txt")) == []


def test_empty_final_contract_is_not_saved(prompts_dir: Path, tmp_path: Path, make_client, fake_ui) -> None:
    processor = _processor(prompts_dir, make_client(["a", "b", "c", "d", "e", ""]), fake_ui)
    target = tmp_path / "contract.txt"

    assert processor.process() == ""
    with pytest.raises(ContractNotReadyError):
        processor.save_contract(target)
    assert not target.exists()


def test_save_writes_final_contract(prompts_dir: Path, tmp_path: Path, stub_client, fake_ui) -> None:
    processor = _processor(prompts_dir, stub_client, fake_ui)
    processor.process()
    target = tmp_path / "contract.txt"
    target.write_text("old", encoding="utf-8")

    assert processor.save_contract(target) == target
    assert target.read_text(encoding="utf-8") == "FINAL_TEXT"
