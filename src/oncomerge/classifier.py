"""Driver / VUS / germline classification.

ARCHITECTURE:
    record → driver_info_fn → PutativeDriverInfo ─┐
    record → mutation_status → germline?  ────────┼→ one of four partitions
    record → gene table → display symbol ─────────┘

Truth table for mutations:

    germline | driver | partition
    ---------+--------+-----------------
    no       | yes    | data
    no       | no     | vus
    yes      | yes    | germline
    yes      | no     | vus_and_germline

Copy-number data has no germline concept and is split into data / vus only.

Key Design:
- Driver evidence is a plain OR over OncoKB, hotspot and custom annotations
- Every input record lands in exactly one partition, in input order
- Functions are pure; lookups are injected by the caller
"""

import re
from typing import Any, Callable, Mapping, Sequence

from oncomerge.constants import GERMLINE_STATUS, ONCOKB_ONCOGENIC_LOWERCASE, PUTATIVE_DRIVER
from oncomerge.models.annotations import (
    AnnotatedMutation,
    AnnotatedNumericGeneMolecularData,
    DriverInfoWithHotspots,
    HotspotInfo,
    MolecularDataPartition,
    MutationPartition,
    PutativeDriverInfo,
)
from oncomerge.models.mutation import Gene, Mutation, NumericGeneMolecularData
from oncomerge.models.oncokb import IndicatorQueryResp

GERMLINE_PATTERN = re.compile(GERMLINE_STATUS, re.IGNORECASE)

GeneLookup = Mapping[int, Gene]


def get_oncokb_oncogenic(response: IndicatorQueryResp) -> str:
    """Oncogenic label of an indicator if it counts as driver evidence, else ''."""
    oncogenic = response.oncogenic or ""
    if oncogenic.lower() in ONCOKB_ONCOGENIC_LOWERCASE:
        return oncogenic
    return ""


def evaluate_putative_driver_info(
    event: Any,
    oncokb_datum: IndicatorQueryResp | None | bool,
    custom_driver_annotations_active: bool,
    custom_driver_tier_selection: Mapping[str, bool] | None,
) -> PutativeDriverInfo:
    """Gather driver evidence for one record.

    Args:
        event: Record carrying ``driver_filter`` and ``driver_tiers_filter``
        oncokb_datum: OncoKB indicator for the record, or None/False if absent
        custom_driver_annotations_active: Whether curated driver labels are used
        custom_driver_tier_selection: Tier label -> selected in settings

    Returns:
        PutativeDriverInfo
    """
    oncokb = get_oncokb_oncogenic(oncokb_datum) if isinstance(oncokb_datum, IndicatorQueryResp) else ""

    # Curated driver label only counts when custom annotations are switched on
    custom_driver_binary = bool(
        custom_driver_annotations_active
        and getattr(event, "driver_filter", None) == PUTATIVE_DRIVER
    )

    # A selected tier marks the record regardless of the binary switch
    tier = getattr(event, "driver_tiers_filter", None)
    custom_driver_tier = (
        tier
        if tier and custom_driver_tier_selection and custom_driver_tier_selection.get(tier)
        else None
    )

    return PutativeDriverInfo(
        oncokb=oncokb,
        custom_driver_binary=custom_driver_binary,
        custom_driver_tier=custom_driver_tier,
    )


def evaluate_putative_driver_info_with_hotspots(
    event: Any,
    oncokb_datum: IndicatorQueryResp | None | bool,
    custom_driver_annotations_active: bool,
    custom_driver_tier_selection: Mapping[str, bool] | None,
    hotspot_info: HotspotInfo,
) -> DriverInfoWithHotspots:
    """Driver evidence including hotspots; both hotspot flags must hold."""
    info = evaluate_putative_driver_info(
        event,
        oncokb_datum,
        custom_driver_annotations_active,
        custom_driver_tier_selection,
    )
    hotspots = hotspot_info.hotspot_annotations_active and hotspot_info.hotspot_driver
    return DriverInfoWithHotspots(**info.model_dump(), hotspots=hotspots)


def is_germline(mutation: Mutation) -> bool:
    """Whether a mutation is of germline origin; missing status means somatic."""
    return bool(mutation.mutation_status and GERMLINE_PATTERN.search(mutation.mutation_status))


def resolve_hugo_gene_symbol(
    entrez_gene_id: int,
    gene: Gene | None,
    gene_lookup: GeneLookup | None,
) -> str:
    """Display symbol from the gene table, falling back to the record's own gene."""
    if gene_lookup and entrez_gene_id in gene_lookup:
        return gene_lookup[entrez_gene_id].hugo_gene_symbol
    return gene.hugo_gene_symbol if gene else ""


def annotate_mutation_putative_driver(
    mutation: Mutation,
    driver_info: PutativeDriverInfo,
    hugo_gene_symbol: str | None = None,
) -> AnnotatedMutation:
    """Attach driver classification to a mutation."""
    hotspots = driver_info.hotspots if isinstance(driver_info, DriverInfoWithHotspots) else False
    return AnnotatedMutation.model_validate({
        **mutation.model_dump(),
        "putative_driver": driver_info.is_driver(),
        "oncokb_oncogenic": driver_info.oncokb,
        "is_hotspot": hotspots,
        "hugo_gene_symbol": hugo_gene_symbol or mutation.gene.hugo_gene_symbol,
    })


def annotate_molecular_datum(
    datum: NumericGeneMolecularData,
    driver_info: PutativeDriverInfo,
    hugo_gene_symbol: str | None = None,
) -> AnnotatedNumericGeneMolecularData:
    """Attach driver classification to a copy-number datum."""
    # Hotspots do not apply to copy-number data
    return AnnotatedNumericGeneMolecularData.model_validate({
        **datum.model_dump(),
        "putative_driver": PutativeDriverInfo.is_driver(driver_info),
        "oncokb_oncogenic": driver_info.oncokb,
        "hugo_gene_symbol": hugo_gene_symbol or (datum.gene.hugo_gene_symbol if datum.gene else ""),
    })


def partition_mutations(
    mutations: Sequence[Mutation],
    driver_info_fn: Callable[[Mutation], PutativeDriverInfo],
    gene_lookup: GeneLookup | None = None,
) -> MutationPartition:
    """Classify mutations into driver, VUS, germline and germline VUS.

    Args:
        mutations: Mutations to classify
        driver_info_fn: Driver evidence for one mutation
        gene_lookup: Entrez gene id -> Gene, authoritative for display symbols

    Returns:
        MutationPartition; each input appears exactly once, in input order
    """
    partition = MutationPartition()

    for mutation in mutations:
        symbol = resolve_hugo_gene_symbol(mutation.entrez_gene_id, mutation.gene, gene_lookup)
        annotated = annotate_mutation_putative_driver(mutation, driver_info_fn(mutation), symbol)
        germline = is_germline(mutation)
        vus = not annotated.putative_driver

        if germline and vus:
            partition.vus_and_germline.append(annotated)
        elif germline:
            partition.germline.append(annotated)
        elif vus:
            partition.vus.append(annotated)
        else:
            partition.data.append(annotated)

    return partition


def partition_molecular_data(
    molecular_data: Sequence[NumericGeneMolecularData],
    driver_info_fn: Callable[[NumericGeneMolecularData], PutativeDriverInfo],
    gene_lookup: GeneLookup | None = None,
) -> MolecularDataPartition:
    """Classify copy-number data into driver and VUS."""
    partition = MolecularDataPartition()

    for datum in molecular_data:
        symbol = resolve_hugo_gene_symbol(datum.entrez_gene_id, datum.gene, gene_lookup)
        annotated = annotate_molecular_datum(datum, driver_info_fn(datum), symbol)
        if annotated.putative_driver:
            partition.data.append(annotated)
        else:
            partition.vus.append(annotated)

    return partition
