"""In-memory state of one contract generation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypedDict

Role = Literal["system", "user", "assistant"]


class ChatMessage(TypedDict):
    role: Role
    content: str


@dataclass
class ContractSession:
    """Prompt, conversation history and produced texts of a single run."""

    user_prompt: str
    conversation_history: list[ChatMessage] = field(default_factory=list)
    contract_draft: str | None = None
    final_contract: str | None = None
    responses: dict[str, str] = field(default_factory=dict)
    feedback: dict[str, str] = field(default_factory=dict)

    def record_turn(self, user_message: str, response: str) -> None:
        self.conversation_history.append({"role": "user", "content": user_message})
        self.conversation_history.append({"role": "assistant", "content": response})
