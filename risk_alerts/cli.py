"""
Command line entrypoint.

    risk-alerts run                 # fetch, score and log for review
    risk-alerts run --submit        # also post the alert lists
"""

import logging
from typing import Optional

import typer

from risk_alerts.config import settings
from risk_alerts.etl.pipeline import build_risk_alert_pipeline
from risk_alerts.services.patient_api import PatientApiClient

cli = typer.Typer(
    name="risk-alerts",
    help="Score patient vitals and build high-risk, fever and data quality alert lists.",
    add_completion=False,
)


@cli.callback()
def main() -> None:
    """Patient risk alerts."""


@cli.command()
def run(
    submit: bool = typer.Option(False, "--submit", help="Post the alert lists to the assessment API"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Patients per page"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Fetch all patients, score them and log the alert lists."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.LOG_LEVEL.upper(),
        format="%(levelname)s | %(name)s | %(message)s",
    )
    if not settings.PATIENT_API_KEY:
        typer.echo("PATIENT_API_KEY is not set", err=True)
        raise typer.Exit(code=1)

    pipeline = build_risk_alert_pipeline(PatientApiClient(page_limit=limit))
    result = pipeline.run({"submit": submit})
    if result["status"] != "completed":
        for name, info in result["tasks"].items():
            if info.get("error"):
                typer.echo(f"{name} failed: {info['error']}", err=True)
        raise typer.Exit(code=1)

    response = pipeline.context.get("submission_response")
    if response is not None:
        typer.echo(f"Submission response: {response}")


if __name__ == "__main__":
    cli()
