"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture(autouse=True)
def fresh_logger():
    """Give every test its own classification logger."""
    from oncomerge.utils.logging_config import reset_logger

    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def make_mutation():
    """Factory for mutations with sensible defaults."""
    from oncomerge.models.mutation import Gene, Mutation

    def _make(
        symbol: str = "TP53",
        entrez_gene_id: int = 7157,
        protein_change: str = "R175H",
        sample_id: str = "S1",
        **kwargs,
    ) -> Mutation:
        fields = {
            "chr": "17",
            "start_position": 7578406,
            "end_position": 7578406,
            "reference_allele": "C",
            "variant_allele": "T",
            "mutation_type": "Missense_Mutation",
            "unique_sample_key": f"{sample_id}_KEY",
        }
        fields.update(kwargs)
        return Mutation(
            gene=Gene(entrez_gene_id=entrez_gene_id, hugo_gene_symbol=symbol),
            protein_change=protein_change,
            sample_id=sample_id,
            **fields,
        )

    return _make


@pytest.fixture
def sample_mutation(make_mutation):
    """TP53 R175H in sample S1."""
    return make_mutation()


@pytest.fixture
def make_indicator():
    """Factory for OncoKB indicator responses."""
    from oncomerge.models.oncokb import IndicatorQuery, IndicatorQueryResp

    def _make(query_id: str, oncogenic: str | None = "Oncogenic") -> IndicatorQueryResp:
        return IndicatorQueryResp(query=IndicatorQuery(id=query_id), oncogenic=oncogenic)

    return _make


@pytest.fixture
def gene_lookup():
    """Authoritative gene table."""
    from oncomerge.models.mutation import Gene

    return {
        7157: Gene(entrez_gene_id=7157, hugo_gene_symbol="TP53"),
        673: Gene(entrez_gene_id=673, hugo_gene_symbol="BRAF"),
        1956: Gene(entrez_gene_id=1956, hugo_gene_symbol="EGFR"),
    }
