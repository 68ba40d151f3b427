"""Rule catalog CLI command."""

from __future__ import annotations

from rich.table import Table

from gdprscan.modules.rules import default_catalog

from .shared import SEVERITY_STYLES, app, console


@app.command()
def rules() -> None:
    """List the compliance rules in evaluation order."""
    catalog = default_catalog()
    table = Table(title=f"Compliance rules ({len(catalog)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Rule")
    table.add_column("Severity")
    table.add_column("Description")
    for index, rule in enumerate(catalog, 1):
        severity = rule.severity.value
        color = SEVERITY_STYLES.get(severity, "white")
        table.add_row(
            str(index),
            rule.id,
            f"[{color}]{severity}[/{color}] (-{rule.severity.weight})",
            rule.description,
        )
    console.print(table)
