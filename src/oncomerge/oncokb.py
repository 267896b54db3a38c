"""OncoKB query construction and indicator lookup.

ARCHITECTURE:
    called + uncalled mutations → OncoKbAnnotationQuery (deduplicated by id)
        → [OncoKB service, external] → SourceResult[OncoKbData]
        → per-record indicator lookup → classifier

Nothing in this module performs network I/O. The REST client that sends the
queries and returns indicator responses lives outside this package.

Key Design:
- Query ids are built the same way on both sides, so a record can find its
  indicator without re-querying
- Tumor type is left as None when unknown so the annotation service infers it
- Failed sources stay failed; callers decide what neutral value to substitute
"""

import logging
import math
import re
from typing import Callable, Iterable, Mapping, Sequence

from oncomerge.constants import CNA_ALTERATION_NAMES, FUSION_MUTATION_TYPE
from oncomerge.identity import DEFAULT_IDENTITY_STRATEGY, IdentityStrategy, compute_identity
from oncomerge.merge import concat_sources
from oncomerge.models.mutation import Mutation, NumericGeneMolecularData
from oncomerge.models.oncokb import (
    CopyNumberAnnotationQuery,
    IndicatorQueryResp,
    OncoKbAnnotationQuery,
    OncoKbData,
)
from oncomerge.models.result import SourceResult

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s")

HotspotLookup = Callable[[Mutation], bool]


def resolve_tumor_type_for_query(
    unique_sample_key: str,
    unique_sample_key_to_tumor_type: Mapping[str, str] | None,
) -> str | None:
    """Tumor type to send with an annotation query.

    Returns None rather than an empty string when the sample has no known tumor
    type, which tells the annotation service to infer it.
    """
    if not unique_sample_key_to_tumor_type:
        return None
    return unique_sample_key_to_tumor_type.get(unique_sample_key) or None


def generate_query_variant_id(
    entrez_gene_id: int,
    tumor_type: str | None,
    alteration: str | None = None,
    mutation_type: str | None = None,
) -> str:
    """Query id shared by annotation requests and their responses.

    e.g. (673, "Melanoma", "V600E", "Missense_Mutation")
        -> "673_Melanoma_V600E_Missense_Mutation"
    """
    query_id = f"{entrez_gene_id}_{tumor_type}" if tumor_type else f"{entrez_gene_id}"
    if alteration:
        query_id = f"{query_id}_{alteration}"
    if mutation_type:
        query_id = f"{query_id}_{mutation_type}"
    return WHITESPACE_PATTERN.sub("_", query_id.strip())


def get_alteration_string(copy_number_alteration: float | int) -> str | None:
    """OncoKB name of a discrete copy-number level, None for neutral/unknown.

    Only the exact levels -2, -1, 1 and 2 are named; fractional, NaN and
    infinite values are unknown.
    """
    value = float(copy_number_alteration)
    if not math.isfinite(value) or not value.is_integer():
        return None
    return CNA_ALTERATION_NAMES.get(int(value))


def build_mutation_annotation_queries(
    mutations: Sequence[Mutation] | None,
    uncalled_mutations: Sequence[Mutation] | None,
    annotated_genes: SourceResult[Mapping[int, bool]],
    unique_sample_key_to_tumor_type: Mapping[str, str] | None = None,
) -> SourceResult[list[OncoKbAnnotationQuery]]:
    """Build protein change queries for called and uncalled mutations.

    Only mutations in genes OncoKB annotates are queried. Fusions are queried
    through the structural variant endpoint and are left out here.

    Args:
        mutations: Called mutations
        uncalled_mutations: Uncalled mutations
        annotated_genes: Entrez gene id -> annotated by OncoKB
        unique_sample_key_to_tumor_type: Sample key -> tumor type

    Returns:
        SourceResult with queries deduplicated by id, failed if the gene list failed
    """
    if annotated_genes.is_failed:
        return SourceResult.failed(annotated_genes.reason, source="oncokb_queries")

    genes = annotated_genes.data or {}
    queries: dict[str, OncoKbAnnotationQuery] = {}

    for mutation in concat_sources(mutations, uncalled_mutations):
        if mutation.mutation_type == FUSION_MUTATION_TYPE or not genes.get(mutation.entrez_gene_id):
            continue
        tumor_type = resolve_tumor_type_for_query(mutation.unique_sample_key, unique_sample_key_to_tumor_type)
        query_id = generate_query_variant_id(
            mutation.entrez_gene_id,
            tumor_type,
            mutation.protein_change,
            mutation.mutation_type,
        )
        if query_id in queries:
            continue
        queries[query_id] = OncoKbAnnotationQuery(
            id=query_id,
            entrez_gene_id=mutation.entrez_gene_id,
            alteration=mutation.protein_change,
            mutation_type=mutation.mutation_type,
            protein_pos_start=mutation.protein_pos_start,
            protein_pos_end=mutation.protein_pos_end,
            tumor_type=tumor_type,
        )

    logger.debug(f"Built {len(queries)} OncoKB mutation queries")
    return SourceResult.ok(list(queries.values()), source="oncokb_queries")


def build_copy_number_annotation_queries(
    molecular_data: Iterable[NumericGeneMolecularData] | None,
    annotated_genes: Mapping[int, bool] | None = None,
    unique_sample_key_to_tumor_type: Mapping[str, str] | None = None,
) -> list[CopyNumberAnnotationQuery]:
    """Build copy-number queries, skipping neutral levels and unannotated genes.

    When ``annotated_genes`` is None every gene is queried.
    """
    queries: dict[str, CopyNumberAnnotationQuery] = {}

    for datum in molecular_data or ():
        if annotated_genes is not None and not annotated_genes.get(datum.entrez_gene_id):
            continue
        alteration = get_alteration_string(datum.value)
        if alteration is None:
            continue
        tumor_type = resolve_tumor_type_for_query(datum.unique_sample_key, unique_sample_key_to_tumor_type)
        query_id = generate_query_variant_id(datum.entrez_gene_id, tumor_type, alteration)
        queries.setdefault(
            query_id,
            CopyNumberAnnotationQuery(
                id=query_id,
                entrez_gene_id=datum.entrez_gene_id,
                copy_name_alteration_type=alteration.upper(),
                tumor_type=tumor_type,
            ),
        )

    return list(queries.values())


def make_mutation_indicator_lookup(
    oncokb_data: SourceResult[OncoKbData],
    unique_sample_key_to_tumor_type: Mapping[str, str] | None = None,
) -> SourceResult[Callable[[Mutation], IndicatorQueryResp | None]]:
    """Per-mutation indicator lookup over an OncoKB result.

    Returns a failed result when the OncoKB source failed.
    """
    if oncokb_data.is_failed:
        return SourceResult.failed(oncokb_data.reason, source="oncokb")

    indicator_map = (oncokb_data.data or OncoKbData()).indicator_map

    def lookup(mutation: Mutation) -> IndicatorQueryResp | None:
        query_id = generate_query_variant_id(
            mutation.entrez_gene_id,
            resolve_tumor_type_for_query(mutation.unique_sample_key, unique_sample_key_to_tumor_type),
            mutation.protein_change,
            mutation.mutation_type,
        )
        return indicator_map.get(query_id)

    return SourceResult.ok(lookup, source="oncokb")


def make_cna_indicator_lookup(
    oncokb_data: SourceResult[OncoKbData],
    unique_sample_key_to_tumor_type: Mapping[str, str] | None = None,
) -> SourceResult[Callable[[NumericGeneMolecularData], IndicatorQueryResp | None]]:
    """Per-datum indicator lookup for copy-number data."""
    if oncokb_data.is_failed:
        return SourceResult.failed(oncokb_data.reason, source="oncokb_cna")

    indicator_map = (oncokb_data.data or OncoKbData()).indicator_map

    def lookup(datum: NumericGeneMolecularData) -> IndicatorQueryResp | None:
        alteration = get_alteration_string(datum.value)
        if alteration is None:
            return None
        query_id = generate_query_variant_id(
            datum.entrez_gene_id,
            resolve_tumor_type_for_query(datum.unique_sample_key, unique_sample_key_to_tumor_type),
            alteration,
        )
        return indicator_map.get(query_id)

    return SourceResult.ok(lookup, source="oncokb_cna")


def make_hotspot_lookup(
    hotspot_keys: SourceResult[Iterable[str]],
    strategy: IdentityStrategy = DEFAULT_IDENTITY_STRATEGY,
) -> SourceResult[HotspotLookup]:
    """Per-mutation hotspot lookup over a set of hotspot identity keys.

    A complete source with no index marks nothing as a hotspot.
    """
    if hotspot_keys.is_failed:
        return SourceResult.failed(hotspot_keys.reason, source="hotspots")

    if hotspot_keys.data is None:
        return SourceResult.ok(lambda mutation: False, source="hotspots")

    index = frozenset(hotspot_keys.data)
    return SourceResult.ok(lambda mutation: compute_identity(mutation, strategy) in index, source="hotspots")
