"""Entrypoint for the command line interface."""

import logging
from pathlib import Path
from typing import Any, Optional

import orjson
import typer

from docsearch.configs import settings
from docsearch.configs.config_logging import configure_logging
from docsearch.exceptions import ConfigurationError, QueryError
from docsearch.search.config import ConnectionConfig
from docsearch.search.models import Document, IndexCoordinates
from docsearch.search.results import (
    BulkFailure,
    BulkSuccess,
    IndexFailure,
    IndexSuccess,
    MappingFailure,
    MappingSuccess,
)
from docsearch.search.service import SearchClientService

logger = logging.getLogger(__name__)

cli = typer.Typer(
    name="docsearch",
    help="Administer, load and query a search engine index",
    no_args_is_help=True,
    add_completion=False,
)

# Shared options
host_option = typer.Option(None, "--host", help="Search engine host [default: settings]")
port_option = typer.Option(None, "--port", help="Search engine port [default: settings]")
scheme_option = typer.Option(None, "--scheme", help="http or https [default: settings]")
username_option = typer.Option(None, "--username", help="Basic auth user [default: settings]")
password_option = typer.Option(
    None, "--password", envvar="DOCSEARCH_PASSWORD", help="Basic auth password"
)
query_option = typer.Option(None, "--query", help="Query DSL as a JSON object")


@cli.callback()
def main() -> None:
    """Configure logging before running a command."""
    configure_logging()


def _service(
    host: Optional[str],
    port: Optional[int],
    scheme: Optional[str],
    username: Optional[str],
    password: Optional[str],
) -> SearchClientService:
    config = ConnectionConfig.from_settings(
        host=host, port=port, scheme=scheme, username=username, password=password
    )
    return SearchClientService.from_config(config)


def _parse_query(query: Optional[str]) -> dict[str, Any] | None:
    if query is None:
        return None
    try:
        parsed = orjson.loads(query)
    except orjson.JSONDecodeError as e:
        raise typer.BadParameter(f"not valid JSON: {e}", param_hint="--query") from e
    if not isinstance(parsed, dict):
        raise typer.BadParameter("must be a JSON object", param_hint="--query")
    return parsed


def _read_ndjson(path: Path, id_field: Optional[str]) -> list[Document[dict[str, Any]]]:
    documents = []
    with path.open("rb") as f:
        for number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                doc = orjson.loads(line)
            except orjson.JSONDecodeError as e:
                raise typer.BadParameter(
                    f"line {number} is not valid JSON: {e}", param_hint="FILE"
                ) from e
            if not isinstance(doc, dict):
                raise typer.BadParameter(
                    f"line {number} must be a JSON object", param_hint="FILE"
                )
            doc_id = doc.get(id_field) if id_field else None
            documents.append(Document(document=doc, id=None if doc_id is None else str(doc_id)))
    return documents


def _echo_json(value: Any) -> None:
    typer.echo(orjson.dumps(value, option=orjson.OPT_INDENT_2).decode("utf-8"))


@cli.command("create-index")
def create_index(
    index: str = typer.Argument(..., help="Name of the index to create"),
    mapping: str = typer.Argument(..., help="Mapping resource (path, or name inside --package)"),
    alias: Optional[str] = typer.Option(None, "--alias", help="Alias pointing at the index"),
    package: Optional[str] = typer.Option(None, "--package", help="Package holding the mapping"),
    host: Optional[str] = host_option,
    port: Optional[int] = port_option,
    scheme: Optional[str] = scheme_option,
    username: Optional[str] = username_option,
    password: Optional[str] = password_option,
) -> None:
    """Create an index with an alias and a mapping"""
    service = _service(host, port, scheme, username, password)
    try:
        result = service.create_index(IndexCoordinates(index=index, alias=alias), mapping, package)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)

    match result:
        case IndexSuccess():
            _echo_json(result.model_dump(exclude={"status"}))
        case IndexFailure():
            typer.echo(f"Failed to create index ({result.kind}): {result.message}", err=True)
            raise typer.Exit(code=1)


@cli.command("get-mapping")
def get_mapping(
    index: str = typer.Argument(..., help="Index name or pattern"),
    host: Optional[str] = host_option,
    port: Optional[int] = port_option,
    scheme: Optional[str] = scheme_option,
    username: Optional[str] = username_option,
    password: Optional[str] = password_option,
) -> None:
    """Print the mapping of every matching index"""
    result = _service(host, port, scheme, username, password).get_mapping(index)
    match result:
        case MappingSuccess(mappings=mappings):
            for mapping in mappings:
                typer.echo(mapping)
        case MappingFailure():
            typer.echo(f"Failed to fetch mapping ({result.kind}): {result.message}", err=True)
            raise typer.Exit(code=1)


@cli.command("bulk-load")
def bulk_load(
    index: str = typer.Argument(..., help="Target index"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="NDJSON file of documents"),
    id_field: Optional[str] = typer.Option(None, "--id-field", help="Field used as document id"),
    refresh: bool = typer.Option(False, "--refresh", help="Refresh the index after loading"),
    host: Optional[str] = host_option,
    port: Optional[int] = port_option,
    scheme: Optional[str] = scheme_option,
    username: Optional[str] = username_option,
    password: Optional[str] = password_option,
) -> None:
    """Upsert every document of an NDJSON file with one bulk request"""
    documents = _read_ndjson(file, id_field)
    service = _service(host, port, scheme, username, password)
    result = service.bulk_upsert(documents, index, refresh=True if refresh else None)

    match result:
        case BulkSuccess():
            failed = result.failed_items
            typer.echo(
                f"Submitted {result.document_count} documents,"
                f" {result.document_count - len(failed)} accepted, {len(failed)} rejected"
            )
            for position, item in failed:
                typer.echo(f"line {position + 1}: {item.error_reason}", err=True)
            if failed:
                raise typer.Exit(code=1)
        case BulkFailure():
            typer.echo(f"Bulk request failed ({result.kind}): {result.message}", err=True)
            for warning in result.warnings:
                typer.echo(f"warning: {warning}", err=True)
            raise typer.Exit(code=1)


@cli.command()
def count(
    index: str = typer.Argument(..., help="Index, alias or pattern"),
    query: Optional[str] = query_option,
    host: Optional[str] = host_option,
    port: Optional[int] = port_option,
    scheme: Optional[str] = scheme_option,
    username: Optional[str] = username_option,
    password: Optional[str] = password_option,
) -> None:
    """Count documents matching a query"""
    service = _service(host, port, scheme, username, password)
    try:
        typer.echo(service.count(index, _parse_query(query)))
    except QueryError as e:
        typer.echo(f"Count failed: {e}", err=True)
        raise typer.Exit(code=1)


@cli.command()
def search(
    index: str = typer.Argument(..., help="Index, alias or pattern"),
    query: Optional[str] = query_option,
    size: int = typer.Option(settings.search.default_size, "--size", min=0),
    from_: int = typer.Option(0, "--from", min=0),
    host: Optional[str] = host_option,
    port: Optional[int] = port_option,
    scheme: Optional[str] = scheme_option,
    username: Optional[str] = username_option,
    password: Optional[str] = password_option,
) -> None:
    """Print one page of matching documents as JSON"""
    service = _service(host, port, scheme, username, password)
    try:
        result = service.search(
            index, dict[str, Any], size=size, from_=from_, query=_parse_query(query)
        )
    except QueryError as e:
        typer.echo(f"Search failed: {e}", err=True)
        raise typer.Exit(code=1)
    _echo_json(result.model_dump())
