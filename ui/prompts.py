"""
Interactive prompts for the `langtypes init` command.

The user picks the generation mode, the interface format and the organization
of exported values; the answers are applied to the default configuration,
which `init` then writes to disk.

Dependencies:
    - inquirer: Interactive terminal prompts
    - rich: Terminal formatting and colors
    - typer: CLI framework integration
"""

from dataclasses import replace

import inquirer  # type: ignore
from inquirer.themes import GreenPassion  # type: ignore
from rich import print as pr
import typer

from core.config import TranslationConfig
from models import GenerationMode, OrganizeBy, StructureFormat


def prompt_config(defaults: TranslationConfig) -> TranslationConfig:
    """
    Ask for the main configuration options, prefilled with `defaults`.

    Returns:
        TranslationConfig: `defaults` with the chosen options applied.

    Raises:
        typer.Exit: If the user cancels the prompt.
    """
    pr("\n[bold green]Configure langtypes for this project.[/bold green]\n")

    questions = [
        inquirer.List(
            "mode",
            message="How should generated types be split into files?",
            choices=list(GenerationMode),
            default=defaults.mode,
        ),
        inquirer.List(
            "format",
            message="Interface format",
            choices=list(StructureFormat),
            default=defaults.format,
        ),
        inquirer.List(
            "organize_by",
            message="How should exported translation values be organized?",
            choices=list(OrganizeBy),
            default=defaults.organize_by,
        ),
        inquirer.Text(
            "base_language",
            message="Base language (leave empty to use every locale)",
            default=defaults.base_language or "",
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())
    if not answers:
        raise typer.Exit(code=1)

    base_language = (answers.get("base_language") or "").strip() or None
    return replace(
        defaults,
        mode=GenerationMode(answers["mode"]),
        format=StructureFormat(answers["format"]),
        base_language=base_language,
        translation_export=replace(
            defaults.translation_export,
            organize_by=OrganizeBy(answers["organize_by"]),
        ),
    )


def confirm_overwrite(path: str) -> bool:
    """Ask before replacing an existing configuration file."""
    answers = inquirer.prompt(
        [
            inquirer.Confirm(
                "overwrite",
                message=f"{path} already exists. Overwrite it?",
                default=False,
            )
        ],
        theme=GreenPassion(),
    )
    if not answers:
        raise typer.Exit(code=1)
    return bool(answers["overwrite"])
