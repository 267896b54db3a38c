"""OncoKB annotation models.

Only the parts of the OncoKB indicator response used for driver classification
are modelled; everything else is carried through untouched.
"""

from pydantic import BaseModel, ConfigDict, Field

from oncomerge.models.mutation import RecordModel


class IndicatorQuery(RecordModel):
    """The query echoed back in an OncoKB indicator response."""

    model_config = ConfigDict(extra="allow")

    id: str
    entrez_gene_id: int | None = None
    alteration: str | None = None
    tumor_type: str | None = None


class IndicatorQueryResp(RecordModel):
    """An OncoKB indicator response for one query."""

    model_config = ConfigDict(extra="allow")

    query: IndicatorQuery
    oncogenic: str | None = Field(None, description="Oncogenic classification (e.g., Likely Oncogenic)")
    gene_exist: bool | None = None
    variant_exist: bool | None = None
    highest_sensitive_level: str | None = None
    highest_resistance_level: str | None = None


class OncoKbData(BaseModel):
    """Indicator responses indexed by query id."""

    indicator_map: dict[str, IndicatorQueryResp] = Field(default_factory=dict)

    @classmethod
    def from_responses(cls, responses: list[IndicatorQueryResp]) -> "OncoKbData":
        """Index indicator responses by their query id."""
        return cls(indicator_map={resp.query.id: resp for resp in responses})


class OncoKbAnnotationQuery(BaseModel):
    """A protein change annotation query for one mutation."""

    id: str
    entrez_gene_id: int
    alteration: str | None = None
    mutation_type: str | None = None
    protein_pos_start: int | None = None
    protein_pos_end: int | None = None
    tumor_type: str | None = None


class CopyNumberAnnotationQuery(BaseModel):
    """A copy-number alteration annotation query for one gene and level."""

    id: str
    entrez_gene_id: int
    copy_name_alteration_type: str
    tumor_type: str | None = None
