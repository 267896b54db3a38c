"""Driver annotation and classification result models."""

from pydantic import BaseModel, Field

from oncomerge.models.mutation import Mutation, NumericGeneMolecularData


class PutativeDriverInfo(BaseModel):
    """Driver evidence for one record, gathered from independent sources."""

    oncokb: str = Field("", description="Recognized OncoKB oncogenic label, empty if none")
    custom_driver_binary: bool = False
    custom_driver_tier: str | None = None

    def is_driver(self) -> bool:
        """A record is a driver if any enabled evidence source calls it one."""
        return bool(self.oncokb or self.custom_driver_binary or self.custom_driver_tier is not None)


class DriverInfoWithHotspots(PutativeDriverInfo):
    """Driver evidence including the hotspot flag."""

    hotspots: bool = False

    def is_driver(self) -> bool:
        return self.hotspots or super().is_driver()


class HotspotInfo(BaseModel):
    """Hotspot evidence for one record."""

    hotspot_annotations_active: bool = False
    hotspot_driver: bool = False


class AnnotatedMutation(Mutation):
    """A mutation with its driver classification attached."""

    putative_driver: bool = False
    oncokb_oncogenic: str = ""
    is_hotspot: bool = False
    hugo_gene_symbol: str = ""


class AnnotatedNumericGeneMolecularData(NumericGeneMolecularData):
    """A copy-number datum with its driver classification attached."""

    putative_driver: bool = False
    oncokb_oncogenic: str = ""
    hugo_gene_symbol: str = ""


class MutationPartition(BaseModel):
    """Four disjoint, order-preserving classes covering a mutation collection."""

    data: list[AnnotatedMutation] = Field(default_factory=list, description="Somatic drivers")
    vus: list[AnnotatedMutation] = Field(default_factory=list, description="Somatic VUS")
    germline: list[AnnotatedMutation] = Field(default_factory=list, description="Germline drivers")
    vus_and_germline: list[AnnotatedMutation] = Field(default_factory=list, description="Germline VUS")

    def total(self) -> int:
        """Number of records across all partitions."""
        return len(self.data) + len(self.vus) + len(self.germline) + len(self.vus_and_germline)

    def counts(self) -> dict[str, int]:
        """Size of each partition."""
        return {
            "data": len(self.data),
            "vus": len(self.vus),
            "germline": len(self.germline),
            "vus_and_germline": len(self.vus_and_germline),
        }


class MolecularDataPartition(BaseModel):
    """Driver and VUS classes covering a copy-number collection."""

    data: list[AnnotatedNumericGeneMolecularData] = Field(default_factory=list)
    vus: list[AnnotatedNumericGeneMolecularData] = Field(default_factory=list)

    def total(self) -> int:
        """Number of records across all partitions."""
        return len(self.data) + len(self.vus)

    def counts(self) -> dict[str, int]:
        """Size of each partition."""
        return {"data": len(self.data), "vus": len(self.vus)}
