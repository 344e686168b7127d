from autotag.cli import cli

cli()
