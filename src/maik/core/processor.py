"""Step sequencer driving the contract workflow."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol

from loguru import logger

from maik.errors import ProcessStateError

from .prompts import PromptLibrary
from .session import ChatMessage, ContractSession
from .steps import (
    CONTRACT_STEPS,
    FINAL_USER_MESSAGE,
    TEMPLATE_FILES,
    ContractStep,
    ProcessState,
    build_final_prompt,
)
from .storage import write_contract


class CompletionClient(Protocol):
    def generate_contract_step(
        self,
        system_prompt: str,
        user_message: str,
        history: Sequence[ChatMessage] = (),
    ) -> str: ...


class ProcessUI(Protocol):
    """Console hooks the processor reports to and reads feedback from."""

    def step_started(self, step: ContractStep) -> None: ...

    def working(self, label: str) -> AbstractContextManager[None]: ...

    def step_completed(self, step: ContractStep, response: str) -> None: ...

    def ask_feedback(self, question: str, default: str) -> str: ...


_NEXT_STATE: dict[ProcessState, ProcessState] = {
    ProcessState.INTAKE: ProcessState.CONFIRM,
    ProcessState.CONFIRM: ProcessState.DRAFT,
    ProcessState.DRAFT: ProcessState.VERIFY,
    ProcessState.VERIFY: ProcessState.EXPLAIN,
    ProcessState.EXPLAIN: ProcessState.SYNTHESIZE,
    ProcessState.SYNTHESIZE: ProcessState.DONE,
}


class ContractProcessor:
    """Run intake, confirm, draft, verify and explain, then synthesize the final contract."""

    def __init__(
        self,
        client: CompletionClient,
        prompts: PromptLibrary,
        ui: ProcessUI,
        user_prompt: str,
        *,
        steps: Sequence[ContractStep] = CONTRACT_STEPS,
    ) -> None:
        self._client = client
        self._prompts = prompts
        self._ui = ui
        self._steps = tuple(steps)
        self.session = ContractSession(user_prompt=user_prompt)
        self.state = ProcessState.INTAKE

    def process(self) -> str:
        """Run the full workflow and return the final contract text."""
        self._prompts.validate(TEMPLATE_FILES)
        for step in self._steps:
            self.run_step(step)
        return self.synthesize()

    def run_step(self, step: ContractStep) -> str:
        """Execute one stage: template, completion, history, then the feedback pause."""
        self._expect(step.state)
        self._ui.step_started(step)
        system_prompt = self._prompts.load(step.template)
        user_message = step.compose(self.session)

        logger.info("contract.step.start step={} template={}", step.state.value, step.template)
        with self._ui.working(step.name):
            response = self._client.generate_contract_step(
                system_prompt,
                user_message,
                list(self.session.conversation_history),
            )
        self.session.record_turn(user_message, response)
        self.session.responses[step.state.value] = response
        if step.state is ProcessState.DRAFT:
            self.session.contract_draft = response
        logger.info(
            "contract.step.finish step={} chars={} history={}",
            step.state.value,
            len(response),
            len(self.session.conversation_history),
        )

        self._ui.step_completed(step, response)
        self.session.feedback[step.state.value] = self._ui.ask_feedback(step.feedback_question, step.feedback_default)
        self.state = _NEXT_STATE[step.state]
        return response

    def synthesize(self) -> str:
        """Blend draft, verification and feedback into the final contract."""
        self._expect(ProcessState.SYNTHESIZE)
        session = self.session
        system_prompt = build_final_prompt(
            session.contract_draft or "",
            session.responses[ProcessState.VERIFY.value],
            session.feedback[ProcessState.VERIFY.value],
            session.feedback[ProcessState.EXPLAIN.value],
        )

        logger.info("contract.synthesize.start history={}", len(session.conversation_history))
        with self._ui.working("Final contract"):
            final_contract = self._client.generate_contract_step(
                system_prompt,
                FINAL_USER_MESSAGE,
                list(session.conversation_history),
            )
        session.final_contract = final_contract
        self.state = _NEXT_STATE[ProcessState.SYNTHESIZE]
        logger.info("contract.synthesize.finish chars={}", len(final_contract))
        return final_contract

    def save_contract(self, output_path: Path | None = None) -> Path:
        return write_contract(self.session.final_contract, output_path)

    def _expect(self, state: ProcessState) -> None:
        if self.state is not state:
            raise ProcessStateError(f"Cannot run {state.value} while in state {self.state.value}")
