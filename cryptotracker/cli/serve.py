"""Serve command for Crypto Tracker CLI."""

from typing import Optional

import click

from cryptotracker.cli.common import console, get_config_or_exit


@click.command()
@click.option("--host", default=None, help="Bind address (default from config).")
@click.option("--port", default=None, type=int, help="Port (default from config).")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the web dashboard and API.
    
    \b
    Examples:
      cryptotracker serve
      cryptotracker serve --port 9000
    """
    import uvicorn
    
    server = get_config_or_exit().get("server", {})
    host = host or server.get("host", "127.0.0.1")
    port = port or int(server.get("port", 8000))
    verbose = bool((ctx.obj or {}).get("verbose"))
    
    console.print(f"[green]🚀 Crypto Tracker running at[/green] [cyan]http://{host}:{port}/[/cyan]")
    uvicorn.run(
        "cryptotracker.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="debug" if verbose else "info",
    )
