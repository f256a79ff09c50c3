"""
taskrecap CLI Interface
Command line interface implemented using Typer
"""

import asyncio
import json
from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer

from taskrecap.config.loader import get_config
from taskrecap.core.logger import configure_logging, get_logger

logger = get_logger(__name__)


def serve(
    host: Optional[str] = typer.Option(None, help="Server host address"),
    port: Optional[int] = typer.Option(None, help="Server port"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
    debug: bool = typer.Option(False, help="Enable debug mode"),
):
    """Start the taskrecap API server"""
    import uvicorn

    try:
        config = get_config(config_file)
        host = host or config.get("server.host", "127.0.0.1")
        port = port or int(config.get("server.port", 8000))
        debug = debug or bool(config.get("server.debug", False))
        configure_logging(config, debug)

        logger.info("Starting taskrecap API server...")
        logger.info(f"Host: {host}, Port: {port}")
        logger.info(f"Debug mode: {debug}")

        uvicorn.run(
            "taskrecap.app:app",
            host=host,
            port=port,
            reload=debug,
            log_level="debug" if debug else "info",
        )

    except Exception as e:
        logger.error(f"Failed to start service: {e}")
        raise typer.Exit(1)


def recap(
    days: Optional[int] = typer.Option(None, help="Number of days before today to include"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
    input_file: Optional[Path] = typer.Option(
        None, "--input", help="JSON export with 'items' and 'projects' instead of the live API"
    ),
    output: Optional[Path] = typer.Option(None, help="Write full statistics JSON to this file"),
):
    """Print the completion recap, optionally saving full statistics as JSON"""
    from taskrecap.core.dashboard.manager import AnalyticsSettings, DashboardManager
    from taskrecap.processing.clock import local_today
    from taskrecap.todoist.export import JsonExportSource

    try:
        config = get_config(config_file)
        configure_logging(config)
        settings = AnalyticsSettings.from_config(config)
        source = JsonExportSource(str(input_file)) if input_file else None
        manager = DashboardManager(source=source, settings=settings)

        start = None
        if days is not None:
            start = local_today(settings.timezone) - timedelta(days=days)

        stats = asyncio.run(manager.load_dashboard(start=start))

        summary = stats.recap
        typer.echo(f"Range:          {stats.range.start} .. {stats.range.end}")
        typer.echo(f"Total done:     {summary.total_done}")
        typer.echo(f"Current streak: {summary.current_streak} day(s)")
        typer.echo(f"Best day:       {summary.best_day.date} ({summary.best_day.count})")
        typer.echo(f"Top project:    {summary.top_project.name} ({summary.top_project.count})")

        if output:
            with open(output, "w", encoding="utf-8") as f:
                json.dump(stats.model_dump(mode="json"), f, indent=2)
            typer.echo(f"Statistics saved to: {output}")

    except Exception as e:
        logger.error(f"Recap failed: {e}")
        raise typer.Exit(1)


def create_app() -> typer.Typer:
    app = typer.Typer(help="Todoist completion analytics")

    app.command()(serve)
    app.command()(recap)

    return app


def main():
    """Main function"""
    create_app()()


if __name__ == "__main__":
    main()
