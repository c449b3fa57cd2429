from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def format_weight(payload: Optional[Dict[str, Any]]) -> str:
    if not payload:
        return "-"
    return f"{payload.get('number')} {payload.get('unit')}"


def render_conditions(plugins: List[Dict[str, Any]]) -> None:
    echo_heading("Conditions")
    if not plugins:
        typer.echo("No conditions registered.")
        return
    for plugin in plugins:
        typer.echo()
        echo_key_values(
            [
                ("plugin_id", plugin.get("plugin_id")),
                ("label", plugin.get("label")),
                ("category", plugin.get("category")),
                ("entity_type", plugin.get("entity_type")),
            ]
        )
        operators = plugin.get("operators") or {}
        if operators:
            typer.echo("operators:")
            for tag, label in operators.items():
                typer.echo(f"  - {tag}: {label}")


def render_configuration(payload: Dict[str, Any]) -> None:
    echo_heading("Configuration")
    echo_key_values(
        [
            ("operator", payload.get("operator")),
            ("weight", format_weight(payload.get("weight"))),
            ("max_weight", format_weight(payload.get("max_weight"))),
        ]
    )


def render_evaluation(result: bool) -> None:
    typer.echo()
    echo_heading("Evaluation")
    if result:
        typer.secho("result: satisfied", fg=typer.colors.GREEN)
    else:
        typer.secho("result: not satisfied", fg=typer.colors.YELLOW)
