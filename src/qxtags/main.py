"""Main CLI entry point for qxtags."""

import logging
import os

import click

from .backends.parsers import SourceParseError
from .config import Config
from .generator.tag_generator import TagGenerator
from .scanner.indexer import DirectoryIndexer
from .scanner.registry import DuplicateClassError, SourceRegistry

logger = logging.getLogger(__name__)


@click.command()
@click.argument("paths", nargs=-1, type=click.Path())
def cli(paths: tuple[str, ...]):
    """Print a tag file for the qooxdoo classes defined in PATHS.

    Files are indexed directly; directories are scanned recursively for
    source files.

    Examples:
        qxtags source/class/app/Application.js > tags

        python -m qxtags.main source/class
    """
    config = Config.from_env()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    registry = SourceRegistry(config)
    indexer = DirectoryIndexer(registry, config)

    try:
        for raw_path in paths:
            path = os.path.abspath(raw_path)
            if os.path.isdir(path):
                indexer.scan(path)
            elif not registry.check_file(path):
                logger.warning("File not found: %s", raw_path)
    except (SourceParseError, DuplicateClassError, OSError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(TagGenerator(config).generate(registry), nl=False)


if __name__ == "__main__":
    cli()
