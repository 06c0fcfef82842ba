import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console

from ajisai.config import ConfigRepository
from ajisai.config.models import Config
from ajisai.engine import Engine
from ajisai.errors import AjisaiError
from ajisai.tui.renderers import AjisaiConsoleUI


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _load_config(obj: Dict[str, Any]) -> Config:
    config_path: Optional[Path] = obj.get("config_path")
    root = config_path.parent if config_path is not None else Path.cwd()
    if config_path is not None and not config_path.is_file():
        raise click.ClickException(f"Config file not found: {config_path}")
    try:
        return ConfigRepository(root=root, config_path=config_path).load_config()
    except AjisaiError as exc:
        raise click.ClickException(str(exc))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to ajisai.yml (defaults to the current directory).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Sync canonical rules and prompts into AI coding agents."""
    _configure_logging(verbose)
    ctx.obj = {"config_path": config_path, "verbose": verbose}


@cli.command(help="Fetch imports and export presets to enabled integrations.")
@click.pass_obj
def apply(obj: Dict[str, Any]) -> None:
    ui = AjisaiConsoleUI(Console())
    config = _load_config(obj)

    try:
        result = Engine(config, root=Path.cwd()).apply()
    except AjisaiError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_apply_result(result)
    if result.failed:
        raise click.exceptions.Exit(1)


@cli.command(help="Remove cached packages that are no longer imported.")
@click.option("--force", is_flag=True, help="Remove the whole cache directory.")
@click.pass_obj
def clean(obj: Dict[str, Any], force: bool) -> None:
    ui = AjisaiConsoleUI(Console())
    config = _load_config(obj)

    try:
        removed = Engine(config, root=Path.cwd()).clean_cache(force=force)
    except (AjisaiError, OSError) as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_cache_cleaned(removed)


@cli.command(help="Validate the config and show imports and integrations.")
@click.pass_obj
def doctor(obj: Dict[str, Any]) -> None:
    ui = AjisaiConsoleUI(Console())
    config = _load_config(obj)
    ui.render_doctor(config)


def main() -> int:
    # Outside standalone mode click returns the code of a raised Exit instead of re-raising it.
    try:
        rv = cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
