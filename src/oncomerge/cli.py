"""Command-line interface for oncomerge.

ARCHITECTURE:
    CLI Commands → AnnotationPipeline → JSON Output

Two workflows: merge (group called + uncalled mutations) and classify
(driver / VUS / germline partitions)

Key Design:
- Typer framework for auto-help and type validation
- Batch JSON files hold records exactly as the portal REST API returns them
- Annotation switches come from options, falling back to ONCOMERGE_* env vars
- Flexible I/O: summary on stdout, full result in a JSON file
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from oncomerge.config import AnnotationSettings
from oncomerge.identity import DEFAULT_IDENTITY_STRATEGY, IdentityStrategy
from oncomerge.models.batch import ClassifyInput, MergeInput
from oncomerge.pipeline import AnnotationPipeline
from oncomerge.utils.logging_config import get_logger

load_dotenv()

app = typer.Typer(
    name="oncomerge",
    help="Merge and classify cancer mutation calls by driver status",
    add_completion=False,
)


def _load_input(input_file: Path, model: type[BaseModel]) -> Any:
    """Read and validate a batch JSON file, exiting with code 1 on bad input."""
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}")
        raise typer.Exit(1)

    try:
        with open(input_file, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {input_file}: {e}")
        raise typer.Exit(1)

    # A bare list is read as called mutations
    if isinstance(data, list):
        data = {"mutations": data}

    try:
        return model.model_validate(data)
    except ValidationError as e:
        print(f"Error: Invalid records in {input_file}:\n{e}")
        raise typer.Exit(1)


def _load_settings() -> AnnotationSettings:
    """Read annotation settings from the environment, exiting with code 1 on bad values."""
    try:
        return AnnotationSettings.from_env()
    except ValidationError as e:
        print(f"Error: Invalid ONCOMERGE_* settings:\n{e}")
        raise typer.Exit(1)


def _write_output(output: Path, payload: Any) -> None:
    with open(output, "w") as f:
        json.dump(payload, f, indent=2)
    print(f"Results saved to {output}")


@app.command()
def merge(
    input_file: Path = typer.Argument(..., help="JSON file with mutations and uncalled_mutations"),
    strategy: IdentityStrategy = typer.Option(
        DEFAULT_IDENTITY_STRATEGY, "--strategy", "-s", help="Identity used to group mutations"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    log: bool = typer.Option(False, "--log/--no-log", help="Write JSONL event log to ./logs"),
) -> None:
    """Group called and uncalled mutations by identity."""
    batch = _load_input(input_file, MergeInput)
    get_logger(enable_file_logging=log)

    pipeline = AnnotationPipeline(_load_settings())
    report = pipeline.merge(batch.mutations, batch.uncalled_mutations, strategy)

    print(f"\nMerged {report.primary_count} called and {report.secondary_count} uncalled mutations")
    print(f"Groups: {len(report.groups)}")
    if report.dropped:
        print(f"Uncalled mutations without a called event: {report.dropped}")

    if output:
        _write_output(output, [[m.model_dump(mode="json") for m in group] for group in report.groups])


@app.command()
def classify(
    input_file: Path = typer.Argument(..., help="JSON file with records and annotation sources"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    custom_drivers: Optional[bool] = typer.Option(
        None, "--custom-drivers/--no-custom-drivers", help="Count curated Putative_Driver labels"
    ),
    hotspots: Optional[bool] = typer.Option(None, "--hotspots/--no-hotspots", help="Count hotspots as drivers"),
    tiers: Optional[list[str]] = typer.Option(None, "--tier", "-t", help="Custom driver tier counted as driver"),
    merge_uncalled: bool = typer.Option(
        False, "--merge-uncalled/--no-merge-uncalled", help="Merge uncalled mutations before classifying"
    ),
    log: bool = typer.Option(False, "--log/--no-log", help="Write JSONL event log to ./logs"),
) -> None:
    """Classify mutations (and copy-number data) into driver and VUS partitions."""
    batch = _load_input(input_file, ClassifyInput)
    get_logger(enable_file_logging=log)

    settings = _load_settings()
    overrides: dict[str, Any] = {}
    if custom_drivers is not None:
        overrides["custom_driver_annotations_active"] = custom_drivers
    if hotspots is not None:
        overrides["hotspot_annotations_active"] = hotspots
    if tiers:
        overrides["custom_driver_tier_selection"] = {tier: True for tier in tiers}
    if overrides:
        settings = settings.model_copy(update=overrides)

    pipeline = AnnotationPipeline(
        settings,
        oncokb=batch.oncokb_result(),
        cna_oncokb=batch.cna_oncokb_result(),
        hotspots=batch.hotspot_result(),
        unique_sample_key_to_tumor_type=batch.tumor_types,
    )
    gene_lookup = batch.gene_lookup()

    if merge_uncalled:
        _, partition = pipeline.merge_and_classify(batch.mutations, batch.uncalled_mutations, gene_lookup)
    else:
        partition = pipeline.classify_mutations(batch.mutations, gene_lookup)

    print(f"\nClassified {partition.total()} mutations")
    for name, count in partition.counts().items():
        print(f"  {name}: {count}")

    result: dict[str, Any] = {"mutations": partition.model_dump(mode="json")}

    if batch.molecular_data:
        cna_partition = pipeline.classify_molecular_data(batch.molecular_data, gene_lookup)
        print(f"\nClassified {cna_partition.total()} copy-number records")
        for name, count in cna_partition.counts().items():
            print(f"  {name}: {count}")
        result["molecular_data"] = cna_partition.model_dump(mode="json")

    if pipeline.failed_sources:
        print(f"\nWarning: failed annotation sources: {', '.join(pipeline.failed_sources)}")
        result["failed_sources"] = pipeline.failed_sources

    if output:
        _write_output(output, result)


@app.command()
def version() -> None:
    """Show version information."""
    from oncomerge import __version__
    print(f"oncomerge version {__version__}")


if __name__ == "__main__":
    app()
