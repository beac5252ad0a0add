"""CLI entry point for openapi-design."""

import logging
from pathlib import Path

import click

from openapi_design.design.assembler import transform
from openapi_design.design.models import Design
from openapi_design.errors import DesignError
from openapi_design.parser.loader import load_document


def _build_design(doc_path: Path, strict: bool) -> Design:
    """Load an OpenAPI document and flatten it into a Design."""
    try:
        document = load_document(doc_path)
        return transform(document, strict=strict)
    except DesignError as e:
        raise click.ClickException(str(e)) from e


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
def main():
    """openapi-design: flatten OpenAPI documents into parameter tables."""
    pass


@main.command("transform")
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path for the design JSON.")
@click.option("--strict", is_flag=True, help="Fail on schema nodes with a missing or unknown type.")
@click.option("--indent", default=2, type=click.IntRange(min=0), help="JSON indentation.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def transform_cmd(doc_path: Path, output: Path, strict: bool, indent: int, verbose: bool):
    """Write the flattened design of DOC_PATH as JSON."""
    _configure_logging(verbose)
    click.echo(f"Parsing {doc_path}...")
    design = _build_design(doc_path, strict)
    click.echo(f"Found {len(design.resources)} resources.")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(design.to_json(indent=indent or None), encoding="utf-8")
    click.echo(f"Design saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Fail on schema nodes with a missing or unknown type.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def resources(doc_path: Path, strict: bool, verbose: bool):
    """List the resources of DOC_PATH with their record counts."""
    _configure_logging(verbose)
    design = _build_design(doc_path, strict)

    for resource in design.resources:
        content = resource.resource_content
        body_records = sum(len(records) for records in content.request_body.values())
        click.echo(
            f"{resource.request_verb.upper():<7} {resource.endpoint}  {resource.resource_definition}"
            f"  [header={len(content.request_header)} path={len(content.request_path)}"
            f" query={len(content.request_query)} body={body_records}]"
        )
    click.echo(f"{len(design.resources)} resources")
