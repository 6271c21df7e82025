"""
Main CLI entry point for hash-joiner.

Provides the command-line interface using Click. Each command loads one or
two YAML/JSON documents, applies a tree operation in memory and writes the
result to stdout.
"""

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import pydantic as _pydantic

import hash_joiner
import hash_joiner.config as config
import hash_joiner.documents as documents
import hash_joiner.errors as errors

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_DOCUMENT = _click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path)


def _configure_logging(level: str) -> None:
    """Send log records at level and above to stderr."""
    _logging.basicConfig(
        level=getattr(_logging, level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(path: _pathlib.Path) -> _typing.Any:
    """Load a document, converting errors for Click."""
    try:
        return documents.load_file(path)
    except errors.DocumentError as e:
        raise _click.ClickException(str(e)) from e


def _load_root(path: _pathlib.Path) -> _typing.Any:
    """Load a document whose top level must be a mapping."""
    data = _load(path)
    if not isinstance(data, dict):
        raise _click.ClickException(
            f"{path}: top level must be a mapping, got {type(data).__name__}"
        )
    return data


def _echo(ctx: _click.Context, data: _typing.Any) -> None:
    """Write a tree to stdout in the configured format."""
    try:
        text = documents.dump(data, fmt=ctx.obj["format"])
    except TypeError as e:
        raise _click.ClickException(f"cannot write {ctx.obj['format']}: {e}") from e
    _click.echo(text.rstrip("\n"))


def _run(operation: _typing.Callable[..., None], *args: _typing.Any) -> None:
    """Run a tree operation, converting library errors for Click."""
    try:
        operation(*args)
    except errors.HashJoinerError as e:
        raise _click.ClickException(str(e)) from e


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(hash_joiner.__version__, "-v", "--version", prog_name="hash-joiner")
@_click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format (default: from config, normally YAML)",
)
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging on stderr",
)
@_click.pass_context
def cli(ctx: _click.Context, json_output: bool, verbose: bool) -> None:
    """hash-joiner - prune, promote and join YAML/JSON data.

    Typical use is publishing a data file that mixes public fields with
    private ones nested under "private" keys.

    Examples:
        hash-joiner prune team.yml            # Strip all private data
        hash-joiner promote team.yml          # Inline all private data
        hash-joiner join team public.yml private.yml --key-field name
    """
    try:
        settings = config.Settings()
    except config.ConfigFileError as e:
        raise _click.ClickException(str(e)) from e
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid configuration: {e}") from e

    _configure_logging("debug" if verbose else settings.logging.level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["format"] = "json" if json_output else settings.output.format


@cli.command()
@_click.argument("file", type=_DOCUMENT)
@_click.option("--key", type=str, default=None, help="Key to strip (default: private_key setting)")
@_click.pass_context
def prune(ctx: _click.Context, file: _pathlib.Path, key: str | None) -> None:
    """Remove every field named KEY from FILE and print the result."""
    settings: config.Settings = ctx.obj["settings"]
    data = _load(file)
    _run(hash_joiner.remove_data, data, key or settings.private_key)
    _echo(ctx, data)


@cli.command()
@_click.argument("file", type=_DOCUMENT)
@_click.option("--key", type=str, default=None, help="Key to promote (default: private_key setting)")
@_click.pass_context
def promote(ctx: _click.Context, file: _pathlib.Path, key: str | None) -> None:
    """Promote every field named KEY in FILE into its parent and print the result."""
    settings: config.Settings = ctx.obj["settings"]
    data = _load(file)
    _run(hash_joiner.promote_data, data, key or settings.private_key)
    _echo(ctx, data)


@cli.command()
@_click.argument("lhs", type=_DOCUMENT)
@_click.argument("rhs", type=_DOCUMENT)
@_click.pass_context
def merge(ctx: _click.Context, lhs: _pathlib.Path, rhs: _pathlib.Path) -> None:
    """Deep-merge RHS into LHS and print the result."""
    lhs_data = _load(lhs)
    _run(hash_joiner.deep_merge, lhs_data, _load(rhs))
    _echo(ctx, lhs_data)


@cli.command()
@_click.argument("category", type=str)
@_click.argument("lhs", type=_DOCUMENT)
@_click.argument("rhs", type=_DOCUMENT)
@_click.option(
    "--key-field",
    type=str,
    default=None,
    help="Primary key for sequences of records (default: join.key_field setting)",
)
@_click.pass_context
def join(
    ctx: _click.Context,
    category: str,
    lhs: _pathlib.Path,
    rhs: _pathlib.Path,
    key_field: str | None,
) -> None:
    """Join CATEGORY of RHS into CATEGORY of LHS and print the joined LHS."""
    settings: config.Settings = ctx.obj["settings"]
    lhs_data = _load_root(lhs)
    rhs_data = _load_root(rhs)
    _run(
        hash_joiner.join_data,
        category,
        key_field or settings.join.key_field,
        lhs_data,
        rhs_data,
    )
    _echo(ctx, lhs_data)


@cli.group(name="config", invoke_without_command=True)
@_click.pass_context
def config_cmd(ctx: _click.Context) -> None:
    """Show configuration."""
    if ctx.invoked_subcommand is None:
        _click.echo(ctx.get_help())


@config_cmd.command(name="show")
@_click.option("--section", type=str, default=None, help="Show specific section only")
@_click.pass_context
def config_show(ctx: _click.Context, section: str | None) -> None:
    """Show effective configuration from all sources.

    Displays the merged configuration from built-in defaults, user config,
    project config and HASH_JOINER_* environment variables.
    """
    settings: config.Settings = ctx.obj["settings"]
    full_config = settings.model_dump(mode="json")

    if section:
        if section not in full_config:
            raise _click.ClickException(f"Unknown section: {section}")
        full_config = {section: full_config[section]}

    _echo(ctx, full_config)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
