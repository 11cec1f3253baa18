"""Run the HTTP API."""

import click


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=3001, show_default=True, type=int)
def serve(host: str, port: int):
    """Serve the QuietMind API with uvicorn."""
    import uvicorn

    # log_config=None keeps the structlog handler installed by the cli group
    uvicorn.run("web.app:app", host=host, port=port, log_config=None)
