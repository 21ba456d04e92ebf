"""CLI main module for MAIK."""

from collections.abc import Callable
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from maik import __version__
from maik.cli.render import Renderer
from maik.config import DEFAULT_PROMPTS_DIR, RunConfig, Settings, load_settings, resolve_api_key
from maik.core import ContractProcessor, PromptLibrary
from maik.integrations import build_chat_client

EPILOG = """Examples:

  $ maik generate -p "I need a German freelance web development contract for a 3-month project with a Berlin startup"

  $ maik generate --prompt "German freelance graphic design contract for a Munich company" --output my_contract.txt

  $ maik interactive
"""

app = typer.Typer(
    name="maik",
    help="AI-powered German freelance contract generator",
    epilog=EPILOG,
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

PromptOption = typer.Option(None, "--prompt", "-p", help="Description of the German freelance project")
DirectoryOption = typer.Option(DEFAULT_PROMPTS_DIR, "--directory", "-d", help="Directory containing prompt files")
OutputOption = typer.Option(None, "--output", "-o", help="Output file path for the contract")
ApiKeyOption = typer.Option(None, "--api-key", "-k", help="OpenRouter API key")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"maik {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """AI-powered German freelance contract generator."""


def _resolve_key(api_key: Optional[str], settings: Settings, renderer: Renderer) -> str:
    return resolve_api_key(api_key, settings, renderer.ask_api_key, on_source=renderer.api_key_source)


def _generate_contract(config: RunConfig, settings: Settings, renderer: Renderer) -> Path:
    renderer.run_started(config.user_prompt, config.directory)
    client = build_chat_client(settings, config.api_key)
    processor = ContractProcessor(client, PromptLibrary(config.directory), renderer, config.user_prompt)
    try:
        contract = processor.process()
        renderer.contract_ready(contract)
        path = processor.save_contract(config.output_file)
    except Exception:
        renderer.generation_failed()
        raise
    renderer.contract_saved(path)
    return path


def _run(build_config: Callable[[Settings], RunConfig], renderer: Renderer) -> None:
    try:
        settings = load_settings()
        config = build_config(settings)
        _generate_contract(config, settings, renderer)
    except Exception as e:
        logger.opt(exception=e).debug("maik.run.failed")
        renderer.error(str(e))
        raise typer.Exit(1) from e


@app.command()
def generate(
    prompt: Optional[str] = PromptOption,
    directory: Path = DirectoryOption,
    output: Optional[Path] = OutputOption,
    api_key: Optional[str] = ApiKeyOption,
) -> None:
    """Generate a German freelance contract."""
    renderer = Renderer()

    def build_config(settings: Settings) -> RunConfig:
        key = _resolve_key(api_key, settings, renderer)
        user_prompt = prompt or renderer.ask_project_description()
        return RunConfig(api_key=key, directory=directory, user_prompt=user_prompt, output_file=output)

    _run(build_config, renderer)


@app.command()
def interactive(
    directory: Path = DirectoryOption,
    output: Optional[Path] = OutputOption,
    api_key: Optional[str] = ApiKeyOption,
) -> None:
    """Interactive German freelance contract generation with step-by-step user input."""
    renderer = Renderer()

    def build_config(settings: Settings) -> RunConfig:
        renderer.welcome()
        key = _resolve_key(api_key, settings, renderer)
        user_prompt = renderer.ask_project_description()
        answer = renderer.ask_output_file().strip()
        output_file = Path(answer) if answer else output
        return RunConfig(api_key=key, directory=directory, user_prompt=user_prompt, output_file=output_file)

    _run(build_config, renderer)


if __name__ == "__main__":
    app()
