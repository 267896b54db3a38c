"""Clinical data, sample and study models used for tumor type resolution."""

from pydantic import BaseModel, Field

from oncomerge.models.mutation import RecordModel


class ClinicalData(RecordModel):
    """A single clinical attribute value for a sample."""

    unique_sample_key: str = ""
    sample_id: str = ""
    patient_id: str | None = None
    study_id: str | None = None
    clinical_attribute_id: str
    value: str


class Sample(RecordModel):
    """A sample belonging to a study."""

    unique_sample_key: str
    sample_id: str
    patient_id: str | None = None
    study_id: str


class CancerStudy(RecordModel):
    """A study and its cancer type."""

    study_id: str
    name: str | None = None
    cancer_type_name: str | None = Field(None, description="Study-level cancer type (e.g., Melanoma)")


class SampleCancerTypeMap(BaseModel):
    """Cancer type candidates for one sample, most to least specific."""

    cancer_type: str | None = None
    cancer_type_detailed: str | None = None
    study_cancer_type: str | None = None
