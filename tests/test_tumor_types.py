"""Tests for tumor type resolution."""

from oncomerge.models.clinical import CancerStudy, ClinicalData, Sample, SampleCancerTypeMap
from oncomerge.tumor_types import (
    generate_unique_sample_key_to_tumor_type_map,
    get_sample_tumor_type_map,
    make_study_to_cancer_type_map,
    resolve_sample_tumor_types,
    tumor_type_resolver,
)


def _clinical(key: str, attribute: str, value: str) -> ClinicalData:
    return ClinicalData(unique_sample_key=key, clinical_attribute_id=attribute, value=value)


class TestSampleKeyToTumorType:
    """Tests for generate_unique_sample_key_to_tumor_type_map."""

    def test_detailed_cancer_type_by_default(self):
        """Test that CANCER_TYPE_DETAILED is used unless asked otherwise."""
        clinical = [
            _clinical("A", "CANCER_TYPE", "Breast Cancer"),
            _clinical("A", "CANCER_TYPE_DETAILED", "Breast Invasive Ductal Carcinoma"),
        ]

        assert generate_unique_sample_key_to_tumor_type_map(clinical) == {"A": "Breast Invasive Ductal Carcinoma"}
        assert generate_unique_sample_key_to_tumor_type_map(clinical, use_cancer_type_attribute=True) == {
            "A": "Breast Cancer"
        }

    def test_study_fallback(self):
        """Test fallback to the study cancer type for samples without clinical data."""
        clinical = [_clinical("A", "CANCER_TYPE_DETAILED", "Melanoma")]
        studies = [CancerStudy(study_id="skcm", cancer_type_name="Skin Cancer"), CancerStudy(study_id="empty")]
        samples = [
            Sample(unique_sample_key="A", sample_id="A", study_id="skcm"),
            Sample(unique_sample_key="B", sample_id="B", study_id="skcm"),
            Sample(unique_sample_key="C", sample_id="C", study_id="empty"),
        ]

        tumor_types = generate_unique_sample_key_to_tumor_type_map(clinical, studies, samples)

        assert tumor_types == {"A": "Melanoma", "B": "Skin Cancer"}

    def test_no_data(self):
        """Test that absent clinical data gives an empty map."""
        assert generate_unique_sample_key_to_tumor_type_map(None) == {}

    def test_study_map(self):
        """Test the study id to cancer type map."""
        studies = [CancerStudy(study_id="brca", cancer_type_name="Breast Cancer")]
        assert make_study_to_cancer_type_map(studies) == {"brca": "Breast Cancer"}


class TestTumorTypeResolver:
    """Tests for per-sample tumor type resolution."""

    def test_most_specific_wins(self):
        """Test detailed type over cancer type over study type."""
        full = SampleCancerTypeMap(cancer_type="B", cancer_type_detailed="D", study_cancer_type="S")
        assert tumor_type_resolver(full) == "D"
        assert tumor_type_resolver(SampleCancerTypeMap(cancer_type="B", study_cancer_type="S")) == "B"
        assert tumor_type_resolver(SampleCancerTypeMap(study_cancer_type="S")) == "S"
        assert tumor_type_resolver(SampleCancerTypeMap()) is None
        assert tumor_type_resolver(None) is None

    def test_sample_map_from_clinical_data(self):
        """Test collecting candidates from one sample's clinical data."""
        clinical = [
            _clinical("A", "CANCER_TYPE", "Lung Cancer"),
            _clinical("A", "AGE", "61"),
            _clinical("A", "CANCER_TYPE_DETAILED", "Lung Adenocarcinoma"),
        ]
        cancer_type_map = get_sample_tumor_type_map(clinical, "Lung Cancer Study")

        assert cancer_type_map.cancer_type == "Lung Cancer"
        assert cancer_type_map.cancer_type_detailed == "Lung Adenocarcinoma"
        assert cancer_type_map.study_cancer_type == "Lung Cancer Study"

    def test_resolve_many_samples(self):
        """Test resolution for several samples at once."""
        resolved = resolve_sample_tumor_types(
            {
                "A": [_clinical("A", "CANCER_TYPE", "Glioma")],
                "B": [],
            },
            study_cancer_type=None,
        )
        assert resolved == {"A": "Glioma"}
