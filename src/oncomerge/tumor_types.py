"""Tumor type resolution for annotation queries.

A sample's tumor type comes from its clinical data when available
(CANCER_TYPE_DETAILED by default, CANCER_TYPE on request) and falls back to the
study-level cancer type as a last resort.
"""

from typing import Iterable, Mapping

from oncomerge.constants import CANCER_TYPE_ATTRIBUTE, CANCER_TYPE_DETAILED_ATTRIBUTE
from oncomerge.models.clinical import CancerStudy, ClinicalData, Sample, SampleCancerTypeMap


def make_study_to_cancer_type_map(studies: Iterable[CancerStudy]) -> dict[str, str | None]:
    """Study id -> study cancer type name."""
    return {study.study_id: study.cancer_type_name for study in studies}


def generate_unique_sample_key_to_tumor_type_map(
    clinical_data_for_samples: Iterable[ClinicalData] | None,
    studies: Iterable[CancerStudy] | None = None,
    samples: Iterable[Sample] | None = None,
    use_cancer_type_attribute: bool = False,
) -> dict[str, str]:
    """Map each unique sample key to the tumor type used for annotation.

    Args:
        clinical_data_for_samples: Clinical attribute values for the samples
        studies: Studies, used for the study cancer type fallback
        samples: Samples needing the fallback
        use_cancer_type_attribute: Use CANCER_TYPE instead of CANCER_TYPE_DETAILED

    Returns:
        Unique sample key -> tumor type
    """
    attribute = CANCER_TYPE_ATTRIBUTE if use_cancer_type_attribute else CANCER_TYPE_DETAILED_ATTRIBUTE
    tumor_types: dict[str, str] = {}

    for clinical_data in clinical_data_for_samples or ():
        if clinical_data.clinical_attribute_id == attribute:
            tumor_types[clinical_data.unique_sample_key] = clinical_data.value

    # last resort: fall back to the study cancer type
    if studies is not None and samples is not None:
        study_to_cancer_type = make_study_to_cancer_type_map(studies)
        for sample in samples:
            if sample.unique_sample_key in tumor_types:
                continue
            cancer_type = study_to_cancer_type.get(sample.study_id)
            if cancer_type:
                tumor_types[sample.unique_sample_key] = cancer_type

    return tumor_types


def get_sample_tumor_type_map(
    sample_clinical_data: Iterable[ClinicalData],
    study_cancer_type: str | None,
) -> SampleCancerTypeMap:
    """Collect the cancer type candidates of a single sample."""
    cancer_type = None
    cancer_type_detailed = None
    for attr in sample_clinical_data:
        if attr.clinical_attribute_id == CANCER_TYPE_ATTRIBUTE and cancer_type is None:
            cancer_type = attr.value
        elif attr.clinical_attribute_id == CANCER_TYPE_DETAILED_ATTRIBUTE and cancer_type_detailed is None:
            cancer_type_detailed = attr.value

    return SampleCancerTypeMap(
        cancer_type=cancer_type,
        cancer_type_detailed=cancer_type_detailed,
        study_cancer_type=study_cancer_type,
    )


def tumor_type_resolver(cancer_type_map: SampleCancerTypeMap | None) -> str | None:
    """Most specific known cancer type: detailed, then cancer type, then study."""
    if cancer_type_map is None:
        return None
    return (
        cancer_type_map.cancer_type_detailed
        or cancer_type_map.cancer_type
        or cancer_type_map.study_cancer_type
    )


def resolve_sample_tumor_types(
    sample_clinical_data: Mapping[str, Iterable[ClinicalData]],
    study_cancer_type: str | None = None,
) -> dict[str, str]:
    """Resolve tumor types for many samples keyed by unique sample key."""
    resolved: dict[str, str] = {}
    for sample_key, clinical_data in sample_clinical_data.items():
        tumor_type = tumor_type_resolver(get_sample_tumor_type_map(clinical_data, study_cancer_type))
        if tumor_type:
            resolved[sample_key] = tumor_type
    return resolved
