"""Contract workflow steps and the user messages sent at each of them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .session import ContractSession


class ProcessState(str, Enum):
    INTAKE = "intake"
    CONFIRM = "confirm"
    DRAFT = "draft"
    VERIFY = "verify"
    EXPLAIN = "explain"
    SYNTHESIZE = "synthesize"
    DONE = "done"


def _sections(*pairs: tuple[str, str]) -> str:
    return "\n\n".join(f"{label}: {value}" for label, value in pairs)


def build_intake_message(user_prompt: str) -> str:
    return user_prompt


def build_confirm_message(user_prompt: str, intake_response: str, feedback: str) -> str:
    return _sections(
        ("User Request", user_prompt),
        ("Intake Information", intake_response),
        ("Additional Details", feedback),
    )


def build_draft_message(user_prompt: str, confirm_response: str, feedback: str) -> str:
    return _sections(
        ("User Request", user_prompt),
        ("Confirmed Specifications", confirm_response),
        ("User Confirmation", feedback),
    )


def build_verify_message(user_prompt: str, draft: str, feedback: str) -> str:
    return _sections(
        ("User Request", user_prompt),
        ("Contract Draft", draft),
        ("User Feedback", feedback),
    )


def build_explain_message(user_prompt: str, draft: str, verify_response: str, feedback: str) -> str:
    return _sections(
        ("User Request", user_prompt),
        ("Final Contract", draft),
        ("Verification Notes", verify_response),
        ("Final Adjustments", feedback),
    )


FINAL_USER_MESSAGE = "Generate the final German freelance contract"


def build_final_prompt(draft: str, verification: str, adjustments: str, explanation_notes: str) -> str:
    """System prompt for the template-free synthesis call."""
    return f"""You are a legal expert specializing in German freelance contracts. Using the contract draft, the verification feedback and the user's input below, produce the final improved contract.

Contract Draft:
{draft}

Verification Feedback:
{verification}

User Adjustments:
{adjustments}

User Explanation Notes:
{explanation_notes}

Write the final German freelance contract, applying every necessary improvement from the verification feedback and the user's input. The contract must be well structured, legally sound under German law and ready to use."""


@dataclass(frozen=True)
class ContractStep:
    """One template-driven stage of the contract workflow."""

    state: ProcessState
    name: str
    template: str
    heading: str
    feedback_question: str
    feedback_default: str
    compose: Callable[[ContractSession], str]


def _note(session: ContractSession, state: ProcessState) -> str:
    return session.feedback[state.value]


def _response(session: ContractSession, state: ProcessState) -> str:
    return session.responses[state.value]


CONTRACT_STEPS: tuple[ContractStep, ...] = (
    ContractStep(
        state=ProcessState.INTAKE,
        name="Intake",
        template="intake.txt",
        heading="📋 Step 1: Contract Intake",
        feedback_question="Please provide any additional details or clarifications for the intake:",
        feedback_default="No additional details needed",
        compose=lambda s: build_intake_message(s.user_prompt),
    ),
    ContractStep(
        state=ProcessState.CONFIRM,
        name="Confirmation",
        template="confirm_specs.txt",
        heading="✅ Step 2: Confirm Specifications",
        feedback_question="Please confirm these specifications or provide any corrections:",
        feedback_default="Specifications look good",
        compose=lambda s: build_confirm_message(
            s.user_prompt,
            _response(s, ProcessState.INTAKE),
            _note(s, ProcessState.INTAKE),
        ),
    ),
    ContractStep(
        state=ProcessState.DRAFT,
        name="Drafting",
        template="draft.txt",
        heading="📄 Step 3: Drafting Contract",
        feedback_question="Please review the draft and provide any feedback or specific requirements:",
        feedback_default="Draft looks good, proceed with verification",
        compose=lambda s: build_draft_message(
            s.user_prompt,
            _response(s, ProcessState.CONFIRM),
            _note(s, ProcessState.CONFIRM),
        ),
    ),
    ContractStep(
        state=ProcessState.VERIFY,
        name="Verification",
        template="verify.txt",
        heading="🔍 Step 4: Verifying Contract",
        feedback_question="Please review the verification feedback and provide any final adjustments:",
        feedback_default="Verification feedback looks good",
        compose=lambda s: build_verify_message(
            s.user_prompt,
            _response(s, ProcessState.DRAFT),
            _note(s, ProcessState.DRAFT),
        ),
    ),
    ContractStep(
        state=ProcessState.EXPLAIN,
        name="Explanation",
        template="explain.txt",
        heading="📖 Step 5: Explaining Contract",
        feedback_question="Please provide any final notes for the contract explanation:",
        feedback_default="Explanation looks good",
        compose=lambda s: build_explain_message(
            s.user_prompt,
            _response(s, ProcessState.DRAFT),
            _response(s, ProcessState.VERIFY),
            _note(s, ProcessState.VERIFY),
        ),
    ),
)

TEMPLATE_FILES: tuple[str, ...] = tuple(step.template for step in CONTRACT_STEPS)

# Steps whose responses are long enough that the console shows only a preview.
PREVIEW_STATES = frozenset({ProcessState.DRAFT, ProcessState.EXPLAIN})
