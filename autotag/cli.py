"""CLI entry point for autotag."""

from __future__ import annotations

from pathlib import Path

import click

from autotag.pipeline import run

TEMPLATES_DIR = Path(__file__).parent / "templates"


@click.group()
@click.version_option(package_name="autotag")
def cli() -> None:
    """Semantic version tagging from conventional commits."""


@cli.command()
@click.option(
    "--workflow-dir",
    type=click.Path(),
    default=".github/workflows",
    show_default=True,
    help="Directory to write the workflow file.",
)
def init(workflow_dir: str) -> None:
    """Scaffold the GitHub Actions workflow into your repo."""
    root = Path.cwd()

    if not (root / ".git").exists():
        raise click.ClickException("Not a git repository. Run from the repo root.")

    dest_dir = root / workflow_dir
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest = dest_dir / "tag.yml"
    if dest.exists():
        raise click.ClickException(f"{dest.relative_to(root)} already exists.")

    dest.write_text((TEMPLATES_DIR / "tag.yml").read_text())

    click.echo(f"✓ Wrote workflow to {dest.relative_to(root)}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Adjust release_branches and tag_prefix in the workflow")
    click.echo("  2. Commit and push the workflow file")


@cli.command(name="run")
@click.option(
    "--dry-run", is_flag=True, help="Compute the next tag without pushing it."
)
def run_command(dry_run: bool) -> None:
    """Compute the next version and tag it (usually called from CI)."""
    run(dry_run=dry_run)
