"""Command line entry-point for co-occurrence training, classification and scope detection."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Optional, TextIO

import click

from .classification import CooccurrenceClassifier, CooccurrenceTable, LabeledInstance
from .errors import GeoscopeError
from .location import LocationCandidate, Mention, create_pipeline, make_training_instances
from .location.features import LocationFeatureExtractor
from .registry import DISAMBIGUATION, SCOPE, list_strategies
from .utils import ConfigManager, setup_logging

logger = logging.getLogger("geoscope.cli")


def _read_json_lines(stream: TextIO) -> Iterator[dict[str, Any]]:
    for line_number, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            yield json.loads(line)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid JSON on line {line_number}: {e}") from e


def _load_table(path: Path) -> CooccurrenceTable:
    with open(path, "r") as f:
        return CooccurrenceTable.from_dict(json.load(f))


def _parse_mentions(document: dict[str, Any]) -> list[Mention]:
    return [Mention.from_dict(m) for m in document.get("mentions", [])]


@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="YAML configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Category scoring and geographic scope detection."""
    try:
        config = ConfigManager(config_path).resolve()
    except GeoscopeError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(level=config.log_level if config_path else None, verbose=verbose)
    ctx.obj = config


@main.command()
@click.option("--input", "-i", type=click.File("r"), default="-", help="Labeled instances as JSON lines")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Table destination (defaults to stdout)")
def train(input: TextIO, output: TextIO) -> None:
    """Train a co-occurrence table from labeled instances."""
    instances = [
        LabeledInstance(target=record.get("target"), feature_values=[str(v) for v in record.get("features", [])])
        for record in _read_json_lines(input)
    ]
    if not instances:
        raise click.ClickException("No training instances supplied")

    table = CooccurrenceClassifier().train(instances)
    if table.skipped_instances:
        click.echo(f"Skipped {table.skipped_instances} instances without target", err=True)

    json.dump(table.to_dict(), output, indent=2)
    output.write("\n")


@main.command()
@click.option("--model", "-m", "model_path", type=click.Path(exists=True, path_type=Path), required=True,
              help="Trained co-occurrence table")
@click.option("--input", "-i", type=click.File("r"), default="-", help="Instances as JSON lines")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Output destination (defaults to stdout)")
def classify(model_path: Path, input: TextIO, output: TextIO) -> None:
    """Score instances against a trained co-occurrence table."""
    table = _load_table(model_path)
    classifier = CooccurrenceClassifier()

    for record in _read_json_lines(input):
        scores = classifier.classify([str(v) for v in record.get("features", [])], table)
        best = scores.most_likely()
        json.dump({
            "scores": scores.to_dict(),
            "most_likely": best.name if best else None,
        }, output)
        output.write("\n")


@main.command("make-training")
@click.option("--input", "-i", type=click.File("r"), default="-", help="Annotated documents as JSON lines")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Labeled instances destination")
@click.pass_obj
def make_training(config, input: TextIO, output: TextIO) -> None:
    """Label candidate feature instances of annotated documents against their gold locations."""
    extractor = LocationFeatureExtractor(config.distance_radii_km)
    for document in _read_json_lines(input):
        try:
            gold = [LocationCandidate.from_dict(g) for g in document.get("gold", [])]
            labeled = make_training_instances(document.get("text", ""), _parse_mentions(document), gold, extractor)
        except (GeoscopeError, KeyError, ValueError, TypeError) as e:
            raise click.ClickException(f"Invalid document: {e}") from e
        for instance in labeled:
            json.dump({"target": instance.target, "features": instance.feature_values}, output)
            output.write("\n")


@main.command()
@click.option("--model", "-m", "model_path", type=click.Path(exists=True, path_type=Path), default=None,
              help="Trained co-occurrence table (required for the feature strategy)")
@click.option("--input", "-i", type=click.File("r"), default="-", help="Document JSON with mentions")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Output destination (defaults to stdout)")
@click.option("--disambiguation", "disambiguation_strategy", type=click.Choice(list_strategies(DISAMBIGUATION)),
              default=None, help="Disambiguation strategy")
@click.option("--strategy", "scope_strategy", type=click.Choice(list_strategies(SCOPE)), default=None,
              help="Scope detection strategy")
@click.pass_obj
def scope(
    config,
    model_path: Optional[Path],
    input: TextIO,
    output: TextIO,
    disambiguation_strategy: Optional[str],
    scope_strategy: Optional[str],
) -> None:
    """Resolve the location mentions of a document and detect its scope."""
    try:
        document = json.load(input)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid document JSON: {e}") from e

    disambiguation_strategy = disambiguation_strategy or config.disambiguation_strategy
    model = _load_table(model_path) if model_path else None

    try:
        pipeline = create_pipeline(
            disambiguation_strategy=disambiguation_strategy,
            scope_strategy=scope_strategy or config.scope_strategy,
            model=model,
            distance_radii_km=config.distance_radii_km,
        )
        result = pipeline.run(document.get("text", ""), _parse_mentions(document), source=document.get("id"))
    except (GeoscopeError, KeyError, ValueError, TypeError) as e:
        raise click.ClickException(str(e)) from e

    json.dump(result.model_dump(), output, indent=2)
    output.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
