"""CLI for cognate data operations.

Commands:
- import-tsv: Load a tab-separated cognate file
- import-languages: Load a JSON language metadata file
- clear: Remove all imported data
- chains: Print the cognate chains of a concept
- suggest: Print word suggestions for a prefix
"""

import asyncio
from pathlib import Path

import click

from cognet.config import get_settings
from cognet.errors import CognetError
from cognet.services import CognateSearchService
from cognet.storage import DataImporter, RedisCognateStore, create_redis


def _run(coro_factory):
    """Run a coroutine taking a Redis client, closing the client afterwards."""
    settings = get_settings()

    async def runner():
        redis = create_redis(settings.redis_url, settings.redis_socket_timeout)
        try:
            return await coro_factory(redis, settings)
        finally:
            await redis.aclose()

    try:
        return asyncio.run(runner())
    except CognetError as e:
        raise click.ClickException(e.message) from e


@click.group()
def cli():
    """Cognet cognate chain CLI"""
    pass


@cli.command("import-tsv")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_tsv(path: Path):
    """Import cognate pairs from a TSV file."""

    async def run(redis, settings):
        importer = DataImporter(redis, batch_size=settings.import_batch_size)
        with path.open("r", encoding="utf-8") as f:
            return await importer.import_tsv(f)

    click.echo(f"Importing {path}...")
    stats = _run(run)
    click.echo(f"  total_records: {stats.total_records}")
    click.echo(f"  skipped_records: {stats.skipped_records}")
    click.echo(f"  batches: {stats.batches}")


@cli.command("import-languages")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_languages(path: Path):
    """Import language metadata from a JSON file."""

    async def run(redis, settings):
        importer = DataImporter(redis, batch_size=settings.import_batch_size)
        return await importer.import_languages(path.read_bytes())

    count = _run(run)
    click.echo(f"Imported {count} languages")


@cli.command()
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
def clear(yes: bool):
    """Remove all imported data."""
    if not yes:
        click.confirm("This deletes every imported record. Continue?", abort=True)

    async def run(redis, settings):
        await DataImporter(redis).clear()

    _run(run)
    click.echo("Database cleared")


@cli.command()
@click.argument("concept_id")
@click.option("--word", default=None, help="Only the chain containing this word")
@click.option("--language", default=None, help="Language code of --word")
def chains(concept_id: str, word, language):
    """Print the cognate chains of a concept."""

    async def run(redis, settings):
        service = CognateSearchService(RedisCognateStore(redis))
        return await service.find_cognate_chains(concept_id, word=word, language=language)

    result = _run(run)
    if not result.chains:
        click.echo(f"No chains for concept {concept_id}")
        return

    for index, chain in enumerate(result.chains, start=1):
        click.echo(f"Chain {index} ({len(chain)} words)")
        for member in chain:
            translit = f" [{member.transliteration}]" if member.transliteration else ""
            coords = ", ".join(f"{c:.2f}" for c in member.language.coordinates)
            click.echo(f"  {member.language.code}: {member.word}{translit} ({coords})")


@cli.command()
@click.argument("prefix")
def suggest(prefix: str):
    """Print word suggestions for a prefix."""

    async def run(redis, settings):
        service = CognateSearchService(
            RedisCognateStore(redis),
            suggestion_limit=settings.suggestion_limit,
            min_prefix_length=settings.min_prefix_length
        )
        return await service.suggest_words(prefix)

    for suggestion in _run(run):
        name = suggestion.language_info.name if suggestion.language_info else suggestion.language
        click.echo(f"{suggestion.word}\t{name}\t{suggestion.concept_id}")


if __name__ == '__main__':
    cli()
