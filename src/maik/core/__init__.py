"""Contract workflow core."""

from .processor import ContractProcessor, ProcessUI
from .prompts import PromptLibrary
from .session import ChatMessage, ContractSession
from .steps import CONTRACT_STEPS, ContractStep, ProcessState

__all__ = [
    "CONTRACT_STEPS",
    "ChatMessage",
    "ContractProcessor",
    "ContractSession",
    "ContractStep",
    "ProcessState",
    "ProcessUI",
    "PromptLibrary",
]
