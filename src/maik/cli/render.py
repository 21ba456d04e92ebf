"""Console renderer for MAIK."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.rule import Rule

from maik.core.steps import PREVIEW_STATES, ContractStep, ProcessState

MIN_DESCRIPTION_CHARS = 10
STEP_PREVIEW_CHARS = 200
CONTRACT_PREVIEW_CHARS = 500
PREVIEW_TITLES = {ProcessState.DRAFT: "Contract Draft Generated", ProcessState.EXPLAIN: "Explanation Generated"}


def truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


class VerbatimPrompt(Prompt):
    """Prompt that returns the typed text without stripping it."""

    def process_response(self, value: str) -> str:
        return value


class Renderer:
    """Terminal output and prompts using Rich."""

    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self.error_console: Console = error_console or Console(stderr=True)

    def welcome(self) -> None:
        self.console.print("[bold blue]🤖 Welcome to MAIK - German Freelance Contract Generator[/bold blue]\n")
        self.console.print(
            "[dim]This interactive mode will pause between each step to allow you to provide input and feedback.[/dim]\n"
        )

    def api_key_source(self, source: str) -> None:
        if source == "env":
            self.console.print("[green]✅ Using OpenRouter API key from environment[/green]")
        else:
            self.console.print("[yellow]⚠️  No OpenRouter API key found in environment[/yellow]")
            self.console.print("[dim]   You can set OPENROUTER_API_KEY in your .env file[/dim]")

    def run_started(self, user_prompt: str, directory: Path) -> None:
        self.console.print("\n[bold blue]🚀 Starting German freelance contract generation...[/bold blue]\n")
        self.console.print(f"[dim]Project Description:[/dim] {escape(user_prompt)}", highlight=False)
        self.console.print(f"[dim]Prompts Directory:[/dim] {directory}")
        self.console.print()

    def step_started(self, step: ContractStep) -> None:
        self.console.print(f"[bold yellow]{step.heading}[/bold yellow]")

    @contextmanager
    def working(self, label: str) -> Iterator[None]:
        try:
            with self.console.status(f"Executing {label}..."):
                yield
        except Exception:
            self.console.print(f"[red]✗ {label} failed[/red]")
            raise
        self.console.print(f"[green]✓ {label} completed[/green]")

    def step_completed(self, step: ContractStep, response: str) -> None:
        if step.state in PREVIEW_STATES:
            self.console.print(f"\n[dim]{PREVIEW_TITLES.get(step.state, step.name)}[/dim]")
            self.console.print("[dim]Preview:[/dim]", escape(truncate(response, STEP_PREVIEW_CHARS)))
        else:
            self.console.print(f"\n[dim]{step.name} Response:[/dim]", escape(response))

    def ask_feedback(self, question: str, default: str) -> str:
        """Ask for a note; empty input takes the default, whitespace-only input is asked again."""
        self.console.print("\n[blue]⏸️  Pausing for your input...[/blue]")
        while True:
            answer = VerbatimPrompt.ask(question.rstrip(":"), default=default, console=self.console)
            if answer.strip():
                self.console.print()
                return answer
            self.console.print("[red]Please provide some input[/red]")

    def ask_project_description(self) -> str:
        while True:
            answer = Prompt.ask(
                "Describe your German freelance project (client, services, duration, etc.)",
                console=self.console,
            )
            if len(answer.strip()) >= MIN_DESCRIPTION_CHARS:
                return answer
            self.console.print(
                f"[red]Please provide a more detailed description (at least {MIN_DESCRIPTION_CHARS} characters)[/red]"
            )

    def ask_api_key(self) -> str:
        return Prompt.ask("Enter your OpenRouter API key", password=True, console=self.console)

    def ask_output_file(self) -> str:
        return Prompt.ask(
            "Output file name (optional, press Enter for auto-generated name)",
            default="",
            show_default=False,
            console=self.console,
        )

    def contract_ready(self, contract: str) -> None:
        self.console.print("\n[bold green]🎉 German freelance contract generated successfully![/bold green]\n")
        self.console.print("[yellow]Generated Contract Preview:[/yellow]")
        self.console.print(Rule(style="dim"))
        self.console.print(truncate(contract, CONTRACT_PREVIEW_CHARS), markup=False, highlight=False)
        self.console.print(Rule(style="dim"))

    def contract_saved(self, path: Path) -> None:
        self.console.print(f"[green]✅ German freelance contract saved to: {path}[/green]")
        self.console.print("\n[green]✅ German freelance contract has been saved successfully![/green]")

    def generation_failed(self) -> None:
        self.error_console.print("\n[red]❌ German freelance contract generation failed:[/red]")

    def error(self, message: str) -> None:
        self.error_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)
