from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_conditions, render_configuration, render_evaluation
from models.measurement import Weight, parse_weight


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for configuring and evaluating shipment conditions.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


def _parse_weight_option(value: Optional[str], name: str) -> Optional[Weight]:
    if value is None:
        return None
    try:
        return parse_weight(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=name) from exc


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Conditions API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each API request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("conditions")
def conditions_command(ctx: typer.Context) -> None:
    """List registered conditions and their operators."""
    state = _get_state(ctx)
    render_conditions(state.client.list_conditions())


@app.command("configure")
def configure_command(
    ctx: typer.Context,
    operator: str = typer.Argument(..., help="Comparison operator, e.g. '>' or '>= <='."),
    weight: str = typer.Argument(..., help="Condition weight, e.g. '5 kg'."),
    max_weight: Optional[str] = typer.Option(
        None,
        "--max-weight",
        help="Upper bound for the between operators.",
    ),
) -> None:
    """Validate a shipment weight condition and print its normalised form."""
    state = _get_state(ctx)
    payload = state.client.configure(
        operator,
        _parse_weight_option(weight, "WEIGHT"),
        _parse_weight_option(max_weight, "--max-weight"),
    )
    render_configuration(payload)


@app.command("evaluate")
def evaluate_command(
    ctx: typer.Context,
    operator: str = typer.Argument(..., help="Comparison operator, e.g. '>' or '>= <='."),
    weight: str = typer.Argument(..., help="Condition weight, e.g. '5 kg'."),
    max_weight: Optional[str] = typer.Option(
        None,
        "--max-weight",
        help="Upper bound for the between operators.",
    ),
    subject: Optional[str] = typer.Option(
        None,
        "--subject",
        "-s",
        help="Shipment weight; omit when the weight is not known yet.",
    ),
) -> None:
    """Check whether a shipment weight satisfies a condition."""
    state = _get_state(ctx)
    configuration = state.client.configure(
        operator,
        _parse_weight_option(weight, "WEIGHT"),
        _parse_weight_option(max_weight, "--max-weight"),
    )
    render_configuration(configuration)
    result = state.client.evaluate(configuration, _parse_weight_option(subject, "--subject"))
    render_evaluation(result)
