"""Batch input models for the command-line interface."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from oncomerge.models.mutation import Gene, Mutation, NumericGeneMolecularData
from oncomerge.models.oncokb import IndicatorQueryResp, OncoKbData
from oncomerge.models.result import SourceResult


class SourcePayload(BaseModel):
    """An annotation source as written to a batch file: data or an error."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    indicators: list[IndicatorQueryResp] | None = None
    hotspots: list[str] | None = None
    error: str | None = Field(None, description="Set when the upstream fetch failed")


class MergeInput(BaseModel):
    """Called and uncalled mutations to merge."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "mutations": [
                    {
                        "gene": {"entrezGeneId": 7157, "hugoGeneSymbol": "TP53"},
                        "proteinChange": "R175H",
                        "chr": "17",
                        "startPosition": 7578406,
                        "endPosition": 7578406,
                        "referenceAllele": "C",
                        "variantAllele": "T",
                        "sampleId": "S1",
                    }
                ],
                "uncalledMutations": [],
            }
        },
    )

    mutations: list[Mutation] = Field(default_factory=list)
    uncalled_mutations: list[Mutation] | None = None


class ClassifyInput(MergeInput):
    """Records plus resolved annotation sources to classify."""

    molecular_data: list[NumericGeneMolecularData] = Field(default_factory=list)
    genes: list[Gene] = Field(default_factory=list)
    tumor_types: dict[str, str] = Field(default_factory=dict, description="Unique sample key -> tumor type")
    oncokb: SourcePayload | None = None
    cna_oncokb: SourcePayload | None = None
    hotspots: SourcePayload | None = None

    def gene_lookup(self) -> dict[int, Gene]:
        return {gene.entrez_gene_id: gene for gene in self.genes}

    @staticmethod
    def _oncokb_result(payload: SourcePayload | None, source: str) -> SourceResult[OncoKbData]:
        if payload is None:
            return SourceResult.ok(None, source=source)
        if payload.error is not None:
            return SourceResult.failed(payload.error, source=source)
        return SourceResult.ok(OncoKbData.from_responses(payload.indicators or []), source=source)

    def oncokb_result(self) -> SourceResult[OncoKbData]:
        return self._oncokb_result(self.oncokb, "oncokb")

    def cna_oncokb_result(self) -> SourceResult[OncoKbData]:
        return self._oncokb_result(self.cna_oncokb, "oncokb_cna")

    def hotspot_result(self) -> SourceResult[list[str]]:
        if self.hotspots is None:
            return SourceResult.ok(None, source="hotspots")
        if self.hotspots.error is not None:
            return SourceResult.failed(self.hotspots.error, source="hotspots")
        return SourceResult.ok(self.hotspots.hotspots or [], source="hotspots")
