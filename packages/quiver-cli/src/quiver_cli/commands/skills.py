"""Skill commands: list, paths, explore, validate, run."""
from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from quiver_core import (
    QuiverConfig,
    SkillNotFoundError,
    SkillParseError,
    Storage,
    discover_extensions,
)
from quiver_skills import (
    SKILL_FILENAME,
    SkillCommandRegistry,
    SkillLoader,
    SkillValidator,
    SourceKind,
    list_installed_skills,
)
from quiver_skills.parser import parse_skill_text
from quiver_skills.synthesizer import COMMAND_PREFIX
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

SKILLS_DOCS_URL = "https://agentskills.io"

skills_app = typer.Typer(
    invoke_without_command=True,
)

_GROUP_TITLES = {
    SourceKind.GLOBAL: "User Skills (global)",
    SourceKind.PROJECT: "Project Skills (local)",
    SourceKind.EXTENSION: "Extension Skills",
}


def _build_loader(project_root: Path | None = None) -> SkillLoader:
    """Build a SkillLoader from the layered config and installed extensions."""
    root = (project_root or Path.cwd()).resolve()
    config = QuiverConfig.load(root)
    ext_dir = (
        Path(config.extensions.dir).expanduser()
        if config.extensions.dir
        else Storage.user_extensions_dir()
    )
    extensions = discover_extensions(ext_dir, config.extensions.disabled)
    return SkillLoader(config=config, project_root=root, extensions=extensions)


@skills_app.callback(invoke_without_command=True)
def _default(ctx: typer.Context) -> None:
    """Manage Agent Skills (agentskills.io). Lists skills by default."""
    if ctx.invoked_subcommand is None:
        skills_list()


@skills_app.command("list")
def skills_list() -> None:
    """List installed Agent Skills."""
    loader = _build_loader()
    sources = loader.sources()
    summaries = list_installed_skills(sources)

    if not summaries:
        console.print(
            "[yellow]No skills installed.[/yellow]\n\n"
            "To install skills:\n"
            f"- User skills: {sources[0].path}\n"
            f"- Project skills: {sources[1].path}\n\n"
            "Run [bold]quiver skills explore[/bold] to learn more about Agent Skills."
        )
        raise typer.Exit(0)

    table = Table(
        title="Installed Skills",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Command", style="bold")
    table.add_column("Description")
    table.add_column("Origin")

    for kind, title in _GROUP_TITLES.items():
        for summary in (s for s in summaries if s.kind is kind):
            origin = title
            if summary.extension_name:
                origin = f"{title} [{summary.extension_name}]"
            table.add_row(
                escape(f"/{COMMAND_PREFIX}{summary.name}"),
                escape(summary.description),
                escape(origin),
            )

    console.print(table)
    console.print(f"\n[dim]{len(summaries)} skill(s) found.[/dim]")


@skills_app.command("paths")
def skills_paths() -> None:
    """Show skills directory paths and setup instructions."""
    sources = _build_loader().sources()
    lines = [
        "[bold]Skills Directories:[/bold]",
        "",
        f"User Skills (global):    {sources[0].path}",
        f"Project Skills (local):  {sources[1].path}",
    ]
    lines.extend(
        escape(f"Extension [{s.extension_name}]: {s.path}")
        for s in sources[2:]
    )
    lines += [
        "",
        "To add a skill:",
        "1. Create a directory with your skill name",
        f"2. Add a {SKILL_FILENAME} file with a frontmatter header:",
        "   ---",
        "   name: my-skill",
        "   description: What this skill does",
        "   ---",
        "   " + escape("[Your skill instructions here]"),
        "",
        f"Skills are invoked as /{COMMAND_PREFIX}<name>",
    ]
    console.print("\n".join(lines))


@skills_app.command("explore")
def skills_explore() -> None:
    """Open Agent Skills documentation in your browser."""
    console.print(f"Opening Agent Skills documentation: {SKILLS_DOCS_URL}")
    if typer.launch(SKILLS_DOCS_URL) != 0:
        console.print(
            f"[red]Failed to open browser.[/red] "
            f"Learn about Agent Skills at {SKILLS_DOCS_URL}"
        )


@skills_app.command("validate")
def skills_validate(
    path: Path = typer.Argument(
        ..., help=f"Path to a skill directory or {SKILL_FILENAME} file."
    ),
) -> None:
    """Validate a single skill package and report every field error."""
    resolved = path.expanduser().resolve()
    skill_file = resolved / SKILL_FILENAME if resolved.is_dir() else resolved

    try:
        text = skill_file.read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Cannot read {escape(str(skill_file))}:[/red] {exc}")
        raise typer.Exit(1) from None

    try:
        parsed = parse_skill_text(text, skill_file)
    except SkillParseError as exc:
        console.print(f"[red]Parse error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    errors = SkillValidator().validate(parsed.fields)
    label = parsed.fields.get("name") or skill_file.parent.name
    if errors:
        console.print(f"[red]FAIL[/red] [bold]{escape(label)}[/bold]")
        for error in errors:
            console.print(f"  [red]-[/red] {escape(str(error))}")
        raise typer.Exit(1)

    console.print(f"[green]PASS[/green] [bold]{escape(label)}[/bold]")


@skills_app.command("run")
def skills_run(
    name: str = typer.Argument(..., help="Skill name, with or without the 'skill:' prefix"),
    args: list[str] | None = typer.Argument(None, help="Request passed to the skill"),
) -> None:
    """Print the prompt a skill would submit for the given request."""
    loader = _build_loader()
    registry = SkillCommandRegistry()
    registry.register_all(asyncio.run(loader.load()))

    command = name if name.startswith(COMMAND_PREFIX) else f"{COMMAND_PREFIX}{name}"
    try:
        action = registry.get(command)
    except SkillNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        available = sorted(a.name for a in registry)
        if available:
            console.print(f"[dim]Available skills: {escape(', '.join(available))}[/dim]")
        raise typer.Exit(1) from None

    submission = action.invoke(" ".join(args or []))
    console.print(submission.text, markup=False, highlight=False)
