import logging

import click
from click.core import ParameterSource

from .engine import LOG_SEPARATOR
from .errors import HashlyError


def _given(ctx, name):
    return ctx.get_parameter_source(name) not in (None, ParameterSource.DEFAULT)


def _echo_error(message):
    click.echo(message, err=True)


def _configure_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source_dir", type=click.Path(file_okay=False))
@click.argument("target_dir", required=False, type=click.Path(file_okay=False))
@click.option(
    "-a",
    "--amend",
    is_flag=True,
    help="Reuse the existing manifest; only files whose hash changed are copied.",
)
@click.option(
    "--ignore-errors",
    "continue_on_error",
    is_flag=True,
    help="Record per-file errors and keep going instead of aborting.",
)
@click.option(
    "-q",
    "--quick-hash",
    is_flag=True,
    help="Use a fast non-cryptographic hash (xxhash) instead of md5.",
)
@click.option(
    "--skip-css",
    is_flag=True,
    help="Do not rewrite url() references inside .css files.",
)
@click.option(
    "-m",
    "--manifest-format",
    help="Manifest format: 'json' (default) or 'yaml'.",
)
@click.option(
    "--manifest-path",
    type=click.Path(dir_okay=False),
    help="Explicit manifest location. Defaults to TARGET_DIR/manifest.<ext>.",
)
@click.option(
    "-i",
    "--include",
    multiple=True,
    help="Only process files matching this gitwildmatch pattern (repeatable).",
)
@click.option(
    "-e",
    "--exclude",
    multiple=True,
    help="Skip files matching this gitwildmatch pattern (repeatable).",
)
@click.option(
    "-p",
    "--plugin",
    "plugins",
    multiple=True,
    help="Plugin adding manifest fields: 'image-size' or 'module:attribute' (repeatable).",
)
@click.option(
    "-c",
    "--clean",
    is_flag=True,
    help="Delete the manifest and all hashed files from the target directory.",
)
@click.option(
    "--clean-old",
    "clean_old_days",
    type=int,
    is_flag=False,
    flag_value=0,
    default=None,
    help=(
        "Delete hashed files not referenced by the manifest. With a value, only "
        "files older than that many days. Place after the directories when used "
        "without a value."
    ),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML config file. Defaults to $XDG_CONFIG_HOME/hashly/config.yaml.",
)
@click.option("--quiet", is_flag=True, help="Only print errors.")
@click.option("-v", "--verbose", is_flag=True, help="Log skipped files and debug output.")
@click.pass_context
def cli(
    ctx,
    source_dir,
    target_dir,
    amend,
    continue_on_error,
    quick_hash,
    skip_css,
    manifest_format,
    manifest_path,
    include,
    exclude,
    plugins,
    clean,
    clean_old_days,
    config_path,
    quiet,
    verbose,
):
    """
    Copy every file in SOURCE_DIR to TARGET_DIR under a content-hashed name
    and write a manifest mapping original paths to hashed paths.
    TARGET_DIR defaults to SOURCE_DIR.
    """
    from .cleanup import clean as clean_directory
    from .cleanup import clean_old
    from .config import build_options, read_config
    from .engine import process_directory

    _configure_logging(verbose)
    logger = None if quiet else click.echo

    overrides = {}
    for name, value in (
        ("amend", amend),
        ("continue_on_error", continue_on_error),
        ("quick_hash", quick_hash),
        ("manifest_format", manifest_format),
        ("manifest_path", manifest_path),
        ("include", list(include)),
        ("exclude", list(exclude)),
        ("plugins", list(plugins)),
    ):
        if _given(ctx, name):
            overrides[name] = value
    if skip_css:
        overrides["process_css"] = False
    if clean_old_days is not None:
        overrides["clean_old_days"] = clean_old_days

    try:
        options = build_options(
            read_config(config_path), logger=logger, log_error=_echo_error, **overrides
        )
    except HashlyError as exc:
        raise click.ClickException(str(exc)) from exc

    directory = target_dir or source_dir
    try:
        if clean:
            clean_directory(directory, options)
            return
        if clean_old_days is not None:
            clean_old(directory, options)
            return
        result = process_directory(source_dir, target_dir, options)
    except (HashlyError, OSError) as exc:
        options.log(LOG_SEPARATOR)
        options.log(
            "Aborted due to errors. To ignore errors, pass the '--ignore-errors' flag."
        )
        raise click.ClickException(str(exc)) from exc

    if not result.ok:
        ctx.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
