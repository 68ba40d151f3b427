"""CLI command modules registered on the shared Typer app."""
