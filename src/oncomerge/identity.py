"""Mutation identity keys.

ARCHITECTURE:
    Mutation → IdentityStrategy → key string → grouping in oncomerge.merge

Two records with the same key are treated as the same biological event,
whichever source reported them.

Key Design:
- Closed set of strategies, least to most specific
- Fields joined with "_" in a fixed order
- Missing coordinates are stringified as-is ("None"), so records lacking the
  same coordinate still group together
- Structural variant ids are the one order-independent key (site1/site2 are
  reported in either order)
"""

from enum import Enum
from typing import Any, Callable

from oncomerge.models.mutation import Mutation, StructuralVariant

MutationIdGenerator = Callable[[Mutation], str]


def _join(fields: list[Any]) -> str:
    return "_".join(str(field) for field in fields)


def mutation_event_fields(mutation: Mutation) -> list[Any]:
    """Genomic event fields in key order: chr, start, end, ref, alt."""
    return [
        mutation.chr,
        mutation.start_position,
        mutation.end_position,
        mutation.reference_allele,
        mutation.variant_allele,
    ]


def generate_mutation_id_by_event(mutation: Mutation) -> str:
    return _join(mutation_event_fields(mutation))


def generate_mutation_id_by_gene_and_protein_change(mutation: Mutation) -> str:
    return f"{mutation.gene.hugo_gene_symbol}_{mutation.protein_change}"


def generate_mutation_id_by_gene_and_protein_change_and_event(mutation: Mutation) -> str:
    return _join([
        mutation.gene.hugo_gene_symbol,
        mutation.protein_change,
        *mutation_event_fields(mutation),
    ])


def generate_mutation_id_by_gene_and_protein_change_sample_id_and_event(mutation: Mutation) -> str:
    return _join([
        mutation.gene.hugo_gene_symbol,
        mutation.protein_change,
        mutation.sample_id,
        *mutation_event_fields(mutation),
    ])


class IdentityStrategy(str, Enum):
    """Which fields make two mutation records the same event.

    GENE_AND_PROTEIN_CHANGE: gene symbol + protein change
    EVENT: genomic coordinates and alleles
    GENE_PROTEIN_CHANGE_AND_EVENT: both of the above (default)
    GENE_PROTEIN_CHANGE_SAMPLE_AND_EVENT: as above, per sample
    """

    GENE_AND_PROTEIN_CHANGE = "gene_protein_change"
    EVENT = "event"
    GENE_PROTEIN_CHANGE_AND_EVENT = "gene_protein_change_event"
    GENE_PROTEIN_CHANGE_SAMPLE_AND_EVENT = "gene_protein_change_sample_event"

    @property
    def generator(self) -> MutationIdGenerator:
        return _GENERATORS[self]


_GENERATORS: dict[IdentityStrategy, MutationIdGenerator] = {
    IdentityStrategy.GENE_AND_PROTEIN_CHANGE: generate_mutation_id_by_gene_and_protein_change,
    IdentityStrategy.EVENT: generate_mutation_id_by_event,
    IdentityStrategy.GENE_PROTEIN_CHANGE_AND_EVENT: generate_mutation_id_by_gene_and_protein_change_and_event,
    IdentityStrategy.GENE_PROTEIN_CHANGE_SAMPLE_AND_EVENT: generate_mutation_id_by_gene_and_protein_change_sample_id_and_event,
}

DEFAULT_IDENTITY_STRATEGY = IdentityStrategy.GENE_PROTEIN_CHANGE_AND_EVENT


def resolve_id_generator(strategy: IdentityStrategy | MutationIdGenerator) -> MutationIdGenerator:
    """Accept either a named strategy or an injected key function."""
    if isinstance(strategy, IdentityStrategy):
        return strategy.generator
    if callable(strategy):
        return strategy
    raise TypeError(f"Expected an IdentityStrategy or a callable, got {type(strategy).__name__}")


def compute_identity(
    mutation: Mutation,
    strategy: IdentityStrategy | MutationIdGenerator = DEFAULT_IDENTITY_STRATEGY,
) -> str:
    """Compute the grouping key of a mutation.

    Args:
        mutation: Mutation record
        strategy: Named strategy or key function

    Returns:
        Identity key, e.g. "TP53_R175H_17_7571720_7571720_C_T" for the default
    """
    return resolve_id_generator(strategy)(mutation)


def build_structural_variant_identity(sv: StructuralVariant) -> str:
    """Identity of a structural variant, independent of site order.

    Sources report site1 and site2 in either order, so the descriptive fields
    are sorted as strings before joining.
    """
    fields = [
        sv.site1_hugo_symbol,
        sv.site2_hugo_symbol,
        sv.site1_position,
        sv.site2_position,
        sv.site1_chromosome,
        sv.site2_chromosome,
        sv.variant_class,
    ]
    return "_".join(sorted(str(field) for field in fields))


def build_structural_variant_protein_change(sv: StructuralVariant) -> str:
    """Display alteration of a structural variant.

    Two distinct partner genes give "A-B Fusion"; otherwise "A intragenic".
    """
    genes: list[str] = []

    if sv.site1_hugo_symbol:
        genes.append(sv.site1_hugo_symbol)

    if sv.site2_hugo_symbol and sv.site1_hugo_symbol != sv.site2_hugo_symbol:
        genes.append(sv.site2_hugo_symbol)

    if len(genes) == 2:
        return f"{genes[0]}-{genes[1]} Fusion"
    if not genes:
        return "intragenic"
    return f"{genes[0]} intragenic"
