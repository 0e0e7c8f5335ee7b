from __future__ import annotations

import itertools
from typing import Optional

import click

from spaten.config.config import ReaderConfig
from spaten.core.exceptions import SpatenError
from spaten.core.models import Feature
from spaten.core.reader import SpatenReader
from spaten.utils.logging import configure_from_config, get_logger, log_context


def _format_feature(feature: Feature, with_wkt: bool) -> str:
    tags = ", ".join(f"{key}={value!r}" for key, value in feature.tags.items())
    if not with_wkt:
        return f"{{{tags}}}"
    return f"{feature.geometry.wkt}\t{{{tags}}}"


def _reader_config(ctx: click.Context, max_block_size: Optional[int]) -> ReaderConfig:
    config: ReaderConfig = ctx.obj["config"]
    if max_block_size is None:
        return config
    return config.model_copy(update={"max_block_size": max_block_size})


@click.group()
@click.option("--log-level", default=None, help="Override SPATEN_LOG_LEVEL.")
@click.option(
    "--json-logs/--console-logs",
    default=None,
    help="Render logs as JSON (default from SPATEN_JSON_LOGS).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], json_logs: Optional[bool]) -> None:
    """Inspect SPATEN geospatial container files."""
    config = ReaderConfig.from_env()
    overrides: dict = {}
    if log_level is not None:
        overrides["log_level"] = log_level
    if json_logs is not None:
        overrides["json_logs"] = json_logs
    config = config.model_copy(update=overrides)

    try:
        configure_from_config(config)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level") from exc
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--limit", type=click.IntRange(min=0), default=None, help="Stop after N features."
)
@click.option("--wkt/--no-wkt", default=True, help="Print geometry as WKT.")
@click.option(
    "--max-block-size",
    type=click.IntRange(min=1),
    default=None,
    help="Reject larger blocks.",
)
@click.pass_context
def dump(
    ctx: click.Context,
    path: str,
    limit: Optional[int],
    wkt: bool,
    max_block_size: Optional[int],
) -> None:
    """Print one line per feature."""
    logger = get_logger(__name__)
    config = _reader_config(ctx, max_block_size)

    with log_context(path=path):
        try:
            with SpatenReader(path, config=config) as reader:
                for feature in itertools.islice(reader, limit):
                    click.echo(_format_feature(feature, wkt))
                logger.info("dump_finished", stats=repr(reader.stats))
        except SpatenError as exc:
            raise click.ClickException(str(exc)) from exc


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--max-block-size",
    type=click.IntRange(min=1),
    default=None,
    help="Reject larger blocks.",
)
@click.pass_context
def stats(ctx: click.Context, path: str, max_block_size: Optional[int]) -> None:
    """Print block, feature and byte totals."""
    config = _reader_config(ctx, max_block_size)

    with log_context(path=path):
        try:
            with SpatenReader(path, config=config) as reader:
                for _feature in reader:
                    pass
                totals = reader.stats
        except SpatenError as exc:
            raise click.ClickException(str(exc)) from exc

    click.echo(f"blocks: {totals.blocks}")
    click.echo(f"features: {totals.features}")
    click.echo(f"body_bytes: {totals.body_bytes}")


def main() -> None:
    """Entry point for the spaten CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
