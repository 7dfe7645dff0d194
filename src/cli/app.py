"""SkillSphere maintenance CLI using Typer.

Offline data maintenance that must never run on the request path.
"""

import asyncio
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table

from api.v1.dependencies import get_profile_service
from core.logging import setup_logging
from infrastructure.database.session import engine

app = typer.Typer(
    name="skillsphere",
    help="SkillSphere - maintenance CLI",
    no_args_is_help=True,
)
console = Console()


profiles_app = typer.Typer(
    name="profiles",
    help="Skill profile maintenance",
    no_args_is_help=True,
)
app.add_typer(profiles_app)


async def _collapse_duplicates() -> list[UUID]:
    try:
        return await get_profile_service().collapse_duplicate_profiles()
    finally:
        await engine.dispose()


@profiles_app.command("collapse-duplicates")
def collapse_duplicates(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Keep only the newest profile of every owner.

    Older duplicates are deleted together with their portfolio files.
    Running it again when no duplicates remain changes nothing.
    """
    setup_logging()
    console.print("\n[bold green]SkillSphere duplicate profile cleanup[/bold green]")

    if not yes and not typer.confirm(
        "Delete every profile except each owner's newest one?", default=False
    ):
        console.print("[yellow]Aborted.[/yellow]")
        raise typer.Exit(code=1)

    deleted = asyncio.run(_collapse_duplicates())

    if not deleted:
        console.print("[dim]No duplicate profiles found.[/dim]\n")
        return

    table = Table(title="Deleted profiles")
    table.add_column("Profile ID", style="cyan")
    for profile_id in deleted:
        table.add_row(str(profile_id))
    console.print(table)
    console.print(f"\n[bold]Deleted {len(deleted)} duplicate profile(s).[/bold]\n")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
