"""Tests for mutation and structural variant identity keys."""

import pytest

from oncomerge.identity import (
    DEFAULT_IDENTITY_STRATEGY,
    IdentityStrategy,
    build_structural_variant_identity,
    build_structural_variant_protein_change,
    compute_identity,
    generate_mutation_id_by_event,
    resolve_id_generator,
)
from oncomerge.models.mutation import StructuralVariant


class TestComputeIdentity:
    """Tests for compute_identity."""

    def test_default_strategy_joins_gene_protein_change_and_event(self, make_mutation):
        """Test the default key for a fully annotated record."""
        mutation = make_mutation(
            chr="17",
            start_position=7571720,
            end_position=7571720,
            reference_allele="C",
            variant_allele="T",
        )
        assert compute_identity(mutation) == "TP53_R175H_17_7571720_7571720_C_T"

    def test_default_is_gene_protein_change_and_event(self):
        """Test which strategy is the default."""
        assert DEFAULT_IDENTITY_STRATEGY is IdentityStrategy.GENE_PROTEIN_CHANGE_AND_EVENT

    def test_identity_is_deterministic(self, sample_mutation):
        """Test that the same record always yields the same key."""
        for strategy in IdentityStrategy:
            assert compute_identity(sample_mutation, strategy) == compute_identity(sample_mutation, strategy)

    def test_gene_and_protein_change(self, sample_mutation):
        """Test the least specific key."""
        assert compute_identity(sample_mutation, IdentityStrategy.GENE_AND_PROTEIN_CHANGE) == "TP53_R175H"

    def test_event(self, sample_mutation):
        """Test the coordinate-only key."""
        assert compute_identity(sample_mutation, IdentityStrategy.EVENT) == "17_7578406_7578406_C_T"
        assert generate_mutation_id_by_event(sample_mutation) == "17_7578406_7578406_C_T"

    def test_sample_inserted_after_protein_change(self, sample_mutation):
        """Test the per-sample key."""
        key = compute_identity(sample_mutation, IdentityStrategy.GENE_PROTEIN_CHANGE_SAMPLE_AND_EVENT)
        assert key == "TP53_R175H_S1_17_7578406_7578406_C_T"

    def test_same_event_in_different_samples(self, make_mutation):
        """Test that only the per-sample key separates samples."""
        a = make_mutation(sample_id="S1")
        b = make_mutation(sample_id="S2")
        assert compute_identity(a) == compute_identity(b)
        sample_strategy = IdentityStrategy.GENE_PROTEIN_CHANGE_SAMPLE_AND_EVENT
        assert compute_identity(a, sample_strategy) != compute_identity(b, sample_strategy)

    def test_missing_coordinates_still_group(self, make_mutation):
        """Test that records missing the same coordinates share a key."""
        a = make_mutation(chr=None, start_position=None, end_position=None)
        b = make_mutation(chr=None, start_position=None, end_position=None, sample_id="S9")
        assert compute_identity(a) == compute_identity(b)
        assert compute_identity(a) == "TP53_R175H_None_None_None_C_T"

    def test_injected_key_function(self, sample_mutation):
        """Test that callers can supply their own key function."""
        assert compute_identity(sample_mutation, lambda m: m.sample_id) == "S1"

    def test_invalid_strategy(self):
        """Test that a non-callable strategy is rejected."""
        with pytest.raises(TypeError):
            resolve_id_generator("not a strategy")


class TestStructuralVariantIdentity:
    """Tests for structural variant identity and display."""

    def test_identity_symmetric_under_site_swap(self):
        """Test that swapping site1 and site2 gives the same identity."""
        forward = StructuralVariant(
            site1_hugo_symbol="EML4",
            site1_chromosome="2",
            site1_position=42522656,
            site2_hugo_symbol="ALK",
            site2_chromosome="2",
            site2_position=29446394,
            variant_class="FUSION",
        )
        reverse = StructuralVariant(
            site1_hugo_symbol="ALK",
            site1_chromosome="2",
            site1_position=29446394,
            site2_hugo_symbol="EML4",
            site2_chromosome="2",
            site2_position=42522656,
            variant_class="FUSION",
        )
        assert build_structural_variant_identity(forward) == build_structural_variant_identity(reverse)

    def test_identity_sorted_fields(self):
        """Test the exact sorted join."""
        sv = StructuralVariant(
            site1_hugo_symbol="B",
            site2_hugo_symbol="A",
            site1_position=2,
            site2_position=1,
            site1_chromosome="X",
            site2_chromosome="Y",
            variant_class="DELETION",
        )
        assert build_structural_variant_identity(sv) == "1_2_A_B_DELETION_X_Y"

    def test_camel_case_input(self):
        """Test that records can be built from REST API field names."""
        sv = StructuralVariant.model_validate({
            "site1HugoSymbol": "EML4",
            "site2HugoSymbol": "ALK",
            "variantClass": "FUSION",
        })
        assert sv.site1_hugo_symbol == "EML4"
        assert sv.site2_hugo_symbol == "ALK"

    def test_protein_change_fusion(self):
        """Test display name for a two-gene fusion."""
        sv = StructuralVariant(site1_hugo_symbol="EML4", site2_hugo_symbol="ALK")
        assert build_structural_variant_protein_change(sv) == "EML4-ALK Fusion"

    def test_protein_change_intragenic(self):
        """Test display name when both sites are in the same gene."""
        sv = StructuralVariant(site1_hugo_symbol="EGFR", site2_hugo_symbol="EGFR")
        assert build_structural_variant_protein_change(sv) == "EGFR intragenic"

    def test_protein_change_site2_only(self):
        """Test display name when only site2 has a gene."""
        sv = StructuralVariant(site2_hugo_symbol="ALK")
        assert build_structural_variant_protein_change(sv) == "ALK intragenic"
