"""Genomic record models.

Records arrive from the portal REST API in camelCase; every model here accepts
either that spelling or the snake_case field name. Records are frozen once
constructed.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base for immutable records fetched from upstream data sources."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Gene(RecordModel):
    """A gene as identified by the portal."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"entrezGeneId": 7157, "hugoGeneSymbol": "TP53"}
        }
    )

    entrez_gene_id: int = Field(..., description="NCBI Entrez gene id")
    hugo_gene_symbol: str = Field(..., description="HGNC gene symbol (e.g., TP53)")


def _copy_gene_id(data: Any) -> Any:
    """Fill a missing top-level entrez gene id from the nested gene."""
    if not isinstance(data, dict):
        return data
    if data.get("entrezGeneId") is not None or data.get("entrez_gene_id") is not None:
        return data
    gene = data.get("gene")
    if isinstance(gene, Gene):
        return {**data, "entrez_gene_id": gene.entrez_gene_id}
    if isinstance(gene, dict):
        gene_id = gene.get("entrezGeneId", gene.get("entrez_gene_id"))
        if gene_id is not None:
            return {**data, "entrez_gene_id": gene_id}
    return data


class Mutation(RecordModel):
    """One reported mutation call for one sample."""

    gene: Gene
    entrez_gene_id: int
    protein_change: str | None = Field(None, description="Protein change (e.g., R175H)")

    # Genomic event; any of these may be missing for poorly annotated calls
    chr: str | None = None
    start_position: int | None = None
    end_position: int | None = None
    reference_allele: str | None = None
    variant_allele: str | None = None

    mutation_type: str | None = Field(None, description="Variant classification (e.g., Missense_Mutation)")
    mutation_status: str | None = Field(None, description="Somatic or Germline origin")
    protein_pos_start: int | None = None
    protein_pos_end: int | None = None

    unique_sample_key: str = ""
    unique_patient_key: str | None = None
    sample_id: str = ""
    patient_id: str | None = None
    study_id: str | None = None
    molecular_profile_id: str | None = None

    # Curator-supplied driver annotations
    driver_filter: str | None = None
    driver_filter_annotation: str | None = None
    driver_tiers_filter: str | None = None
    driver_tiers_filter_annotation: str | None = None

    allele_specific_copy_number: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def fill_entrez_gene_id(cls, data: Any) -> Any:
        return _copy_gene_id(data)


class StructuralVariant(RecordModel):
    """A structural variant (fusion, rearrangement) between two breakpoints."""

    site1_entrez_gene_id: int | None = None
    site1_hugo_symbol: str | None = None
    site1_chromosome: str | None = None
    site1_position: int | None = None
    site2_entrez_gene_id: int | None = None
    site2_hugo_symbol: str | None = None
    site2_chromosome: str | None = None
    site2_position: int | None = None
    variant_class: str | None = None
    event_info: str | None = None

    unique_sample_key: str = ""
    sample_id: str = ""
    study_id: str | None = None
    molecular_profile_id: str | None = None

    driver_filter: str | None = None
    driver_tiers_filter: str | None = None


class NumericGeneMolecularData(RecordModel):
    """A per-sample copy-number value for one gene."""

    entrez_gene_id: int
    gene: Gene | None = None
    value: float = Field(..., description="Discrete copy-number level (-2..2)")

    unique_sample_key: str = ""
    sample_id: str = ""
    patient_id: str | None = None
    study_id: str | None = None
    molecular_profile_id: str | None = None

    driver_filter: str | None = None
    driver_tiers_filter: str | None = None

    @model_validator(mode="before")
    @classmethod
    def fill_entrez_gene_id(cls, data: Any) -> Any:
        return _copy_gene_id(data)


class DiscreteCopyNumberData(RecordModel):
    """A discrete copy-number alteration call."""

    entrez_gene_id: int
    gene: Gene | None = None
    alteration: int = Field(..., description="Discrete copy-number level (-2..2)")

    unique_sample_key: str = ""
    sample_id: str = ""
    molecular_profile_id: str | None = None

    @model_validator(mode="before")
    @classmethod
    def fill_entrez_gene_id(cls, data: Any) -> Any:
        return _copy_gene_id(data)
