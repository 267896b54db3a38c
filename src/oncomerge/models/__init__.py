"""Data models for oncomerge."""

from oncomerge.models.annotations import (
    AnnotatedMutation,
    AnnotatedNumericGeneMolecularData,
    DriverInfoWithHotspots,
    HotspotInfo,
    MolecularDataPartition,
    MutationPartition,
    PutativeDriverInfo,
)
from oncomerge.models.batch import ClassifyInput, MergeInput, SourcePayload
from oncomerge.models.clinical import CancerStudy, ClinicalData, Sample, SampleCancerTypeMap
from oncomerge.models.mutation import (
    DiscreteCopyNumberData,
    Gene,
    Mutation,
    NumericGeneMolecularData,
    StructuralVariant,
)
from oncomerge.models.oncokb import (
    CopyNumberAnnotationQuery,
    IndicatorQuery,
    IndicatorQueryResp,
    OncoKbAnnotationQuery,
    OncoKbData,
)
from oncomerge.models.result import SourceResult, SourceStatus

__all__ = [
    "Gene",
    "Mutation",
    "StructuralVariant",
    "NumericGeneMolecularData",
    "DiscreteCopyNumberData",
    "ClinicalData",
    "Sample",
    "CancerStudy",
    "SampleCancerTypeMap",
    "IndicatorQuery",
    "IndicatorQueryResp",
    "OncoKbData",
    "OncoKbAnnotationQuery",
    "CopyNumberAnnotationQuery",
    "PutativeDriverInfo",
    "DriverInfoWithHotspots",
    "HotspotInfo",
    "AnnotatedMutation",
    "AnnotatedNumericGeneMolecularData",
    "MutationPartition",
    "MolecularDataPartition",
    "SourceResult",
    "SourceStatus",
    "MergeInput",
    "ClassifyInput",
    "SourcePayload",
]
