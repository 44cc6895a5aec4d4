"""
wachannel CLI main module.

Runs the standalone adapter server and helps with local webhook testing.
"""

import subprocess
import sys
from pathlib import Path

import typer

from wachannel.core.config.settings import settings
from wachannel.webhooks.whatsapp.validators import SIGNATURE_PREFIX, compute_signature

APP_FACTORY = "wachannel.core.channel_app:create_app"

app = typer.Typer(help="WhatsApp Cloud API channel adapter CLI")


def _uvicorn_command(host: str, port: int, *extra: str) -> list[str]:
    return [
        sys.executable,
        "-m",
        "uvicorn",
        APP_FACTORY,
        "--factory",
        "--host",
        host,
        "--port",
        str(port),
        *extra,
    ]


def _serve(cmd: list[str], label: str) -> None:
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        typer.echo(f"❌ {label} server failed to start (exit code: {e.returncode})", err=True)
        typer.echo("", err=True)
        typer.echo("Common issues:", err=True)
        typer.echo("• Port already in use (try --port with different number)", err=True)
        typer.echo("• Invalid LOG_LEVEL or API_VERSION in .env", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo(f"👋 {label} server stopped")


@app.command()
def dev(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
):
    """
    Run development server with auto-reload.

    Examples:
        wachannel dev
        wachannel dev --port 8080
    """
    typer.echo("🚀 Starting WhatsApp channel development server...")
    typer.echo(f"🌐 Server: http://{host}:{port}")
    typer.echo(f"📱 Webhook: http://{host}:{port}{settings.webhook_path}")
    typer.echo(f"📝 Docs: http://{host}:{port}/docs")
    typer.echo("💡 Press CTRL+C to stop")
    typer.echo()
    _serve(_uvicorn_command(host, port, "--reload"), "Development")


@app.command()
def run(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of worker processes"),
):
    """
    Run production server (no auto-reload).

    Each worker keeps its own in-memory attachments; use one worker unless the
    host provides shared attachment storage.
    """
    typer.echo("🚀 Starting WhatsApp channel production server...")
    typer.echo(f"🌐 Server: http://{host}:{port}")
    typer.echo(f"👥 Workers: {workers}")
    typer.echo()
    _serve(_uvicorn_command(host, port, "--workers", str(workers)), "Production")


@app.command()
def sign(
    body_file: Path = typer.Argument(..., help="File holding the exact request body"),
    app_secret: str = typer.Option(
        None, "--secret", "-s", help="App secret (defaults to WHATSAPP_APP_SECRET)"
    ),
):
    """
    Print the X-Hub-Signature header for a notification body.

    Examples:
        wachannel sign payload.json
        curl -X POST -H "X-Hub-Signature: $(wachannel sign payload.json)" ...
    """
    secret = app_secret or settings.whatsapp_app_secret
    if not secret:
        typer.echo("❌ No app secret: pass --secret or set WHATSAPP_APP_SECRET", err=True)
        raise typer.Exit(1)
    if not body_file.exists():
        typer.echo(f"❌ File not found: {body_file}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{SIGNATURE_PREFIX}{compute_signature(secret, body_file.read_bytes())}")


@app.command()
def info():
    """Show the adapter configuration (secrets are never printed)."""
    typer.echo(f"wachannel v{settings.version} ({settings.environment})")
    typer.echo(f"Graph API: {settings.base_url}/{settings.api_version}")
    typer.echo(f"Webhook: {settings.public_url}{settings.webhook_path}")
    for label, value in (
        ("App secret", settings.whatsapp_app_secret),
        ("Access token", settings.whatsapp_access_token),
        ("Verify token", settings.whatsapp_verify_token),
    ):
        typer.echo(f"{label}: {'set' if value else 'missing'}")


def main():
    app()


if __name__ == "__main__":
    main()
