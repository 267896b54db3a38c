"""Centralized constants and mappings for oncomerge.

This module consolidates the fixed vocabularies used across the codebase:
- The custom driver annotation label
- OncoKB oncogenicity values recognized as driver evidence
- Copy-number alteration levels and their OncoKB names
- Allele-specific copy number (ASCN) property names
- Clinical attribute ids used for tumor type resolution

Centralizing these makes maintenance easier and ensures consistency.
"""

# =============================================================================
# CUSTOM DRIVER ANNOTATIONS
# =============================================================================
# Label written by study curators into the driver filter column of a
# mutation or copy-number record.

PUTATIVE_DRIVER: str = "Putative_Driver"


# =============================================================================
# ONCOKB
# =============================================================================
# Oncogenic classifications that count as driver evidence (lower-cased)

ONCOKB_ONCOGENIC_LOWERCASE: tuple[str, ...] = (
    "likely oncogenic",
    "predicted oncogenic",
    "oncogenic",
    "resistance",
)

# Fusions are annotated through the structural variant endpoint, never as
# protein changes
FUSION_MUTATION_TYPE: str = "Fusion"

# Discrete copy-number level -> OncoKB alteration name
CNA_ALTERATION_NAMES: dict[int, str] = {
    -2: "Deletion",
    -1: "Loss",
    1: "Gain",
    2: "Amplification",
}


# =============================================================================
# GERMLINE
# =============================================================================

GERMLINE_STATUS: str = "germline"


# =============================================================================
# ALLELE-SPECIFIC COPY NUMBER
# =============================================================================
# Property names that may appear in a mutation's allele_specific_copy_number

ASCN_ATTRIBUTES: tuple[str, ...] = (
    "ascnIntegerCopyNumber",
    "ascnMethod",
    "ccfExpectedCopiesUpper",
    "ccfExpectedCopies",
    "clonal",
    "minorCopyNumber",
    "expectedAltCopies",
    "totalCopyNumber",
)


# =============================================================================
# CLINICAL ATTRIBUTES
# =============================================================================

CANCER_TYPE_ATTRIBUTE: str = "CANCER_TYPE"
CANCER_TYPE_DETAILED_ATTRIBUTE: str = "CANCER_TYPE_DETAILED"
