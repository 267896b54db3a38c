"""Annotation pipeline combining merge, driver evaluation and partitioning.

ARCHITECTURE:
    called + uncalled → merge (identity groups)
    OncoKB + hotspot SourceResults → per-record lookups ─┐
    AnnotationSettings ───────────────────────────────────┼→ driver info (cached) → partitions
    gene table ───────────────────────────────────────────┘

Callers resolve every upstream source before building the pipeline; nothing
here waits on or fetches anything.

Key Design:
- Failed sources are logged and replaced by neutral lookups (no OncoKB label,
  no hotspot) so classification degrades instead of crashing
- Driver evaluations are cached under the record, the settings flags and a
  token for the current sources snapshot, so a cache can be shared between
  pipelines and replaced sources never serve stale evaluations
- Stateless apart from the sources snapshot and the cache
"""

import itertools
import logging
from typing import Callable, Iterable, Mapping, Sequence

from oncomerge.cache import DriverInfoCache
from oncomerge.classifier import (
    GeneLookup,
    evaluate_putative_driver_info,
    evaluate_putative_driver_info_with_hotspots,
    partition_molecular_data,
    partition_mutations,
)
from oncomerge.config import AnnotationSettings
from oncomerge.identity import DEFAULT_IDENTITY_STRATEGY, IdentityStrategy, MutationIdGenerator
from oncomerge.merge import MergeReport, merge_report
from oncomerge.models.annotations import (
    DriverInfoWithHotspots,
    HotspotInfo,
    MolecularDataPartition,
    MutationPartition,
    PutativeDriverInfo,
)
from oncomerge.models.mutation import Mutation, NumericGeneMolecularData
from oncomerge.models.oncokb import IndicatorQueryResp, OncoKbData
from oncomerge.models.result import SourceResult
from oncomerge.oncokb import (
    make_cna_indicator_lookup,
    make_hotspot_lookup,
    make_mutation_indicator_lookup,
)
from oncomerge.utils.logging_config import ClassificationLogger, get_logger

logger = logging.getLogger(__name__)

# One token per sources snapshot, unique across pipelines sharing a cache
_snapshot_tokens = itertools.count()


def _no_indicator(record: object) -> IndicatorQueryResp | None:
    return None


def _no_hotspot(mutation: Mutation) -> bool:
    return False


class AnnotationPipeline:
    """
    Pipeline for merging and classifying mutation and copy-number records.

    Holds one snapshot of the annotation sources plus a driver evaluation
    cache, so repeated classification (e.g. after toggling a setting) does not
    re-evaluate unchanged records.
    """

    def __init__(
        self,
        settings: AnnotationSettings | None = None,
        oncokb: SourceResult[OncoKbData] | None = None,
        cna_oncokb: SourceResult[OncoKbData] | None = None,
        hotspots: SourceResult[Iterable[str]] | None = None,
        unique_sample_key_to_tumor_type: Mapping[str, str] | None = None,
        cache: DriverInfoCache | None = None,
        enable_logging: bool = True,
        hotspot_strategy: IdentityStrategy = DEFAULT_IDENTITY_STRATEGY,
    ):
        self.settings = settings or AnnotationSettings()
        self.cache = cache if cache is not None else DriverInfoCache(self.settings.driver_cache_size)
        self.event_logger: ClassificationLogger | None = (
            get_logger(enable_file_logging=False) if enable_logging else None
        )
        self.hotspot_strategy = hotspot_strategy
        self.failed_sources: list[str] = []
        self.update_sources(
            oncokb=oncokb,
            cna_oncokb=cna_oncokb,
            hotspots=hotspots,
            unique_sample_key_to_tumor_type=unique_sample_key_to_tumor_type,
        )

    def update_sources(
        self,
        oncokb: SourceResult[OncoKbData] | None = None,
        cna_oncokb: SourceResult[OncoKbData] | None = None,
        hotspots: SourceResult[Iterable[str]] | None = None,
        unique_sample_key_to_tumor_type: Mapping[str, str] | None = None,
    ) -> None:
        """Replace the annotation sources.

        Cached evaluations of earlier sources are left in the cache but are no
        longer reachable from this pipeline.

        A missing source is treated as resolved with no data.
        """
        self.failed_sources = []

        mutation_lookup = make_mutation_indicator_lookup(
            oncokb or SourceResult.ok(None, source="oncokb"),
            unique_sample_key_to_tumor_type,
        )
        cna_lookup = make_cna_indicator_lookup(
            cna_oncokb or SourceResult.ok(None, source="oncokb_cna"),
            unique_sample_key_to_tumor_type,
        )
        hotspot_lookup = make_hotspot_lookup(
            hotspots or SourceResult.ok(None, source="hotspots"),
            self.hotspot_strategy,
        )

        self._mutation_indicator: Callable[[Mutation], IndicatorQueryResp | None] = self._resolve(
            mutation_lookup, _no_indicator
        )
        self._cna_indicator: Callable[[NumericGeneMolecularData], IndicatorQueryResp | None] = self._resolve(
            cna_lookup, _no_indicator
        )
        self._is_hotspot: Callable[[Mutation], bool] = self._resolve(hotspot_lookup, _no_hotspot)

        self._sources_token = next(_snapshot_tokens)

    def _resolve(self, result: SourceResult, neutral: Callable) -> Callable:
        """Unwrap a lookup, substituting the neutral lookup for failed sources."""
        if not result.is_failed:
            return result.data

        self.failed_sources.append(result.source)
        if self.event_logger:
            self.event_logger.log_source_failure(result.source, result.reason)
        else:
            logger.warning(f"Annotation source '{result.source}' failed: {result.reason}")
        return neutral

    def merge(
        self,
        called: Sequence[Mutation] | None,
        uncalled: Sequence[Mutation] | None = None,
        strategy: IdentityStrategy | MutationIdGenerator = DEFAULT_IDENTITY_STRATEGY,
    ) -> MergeReport:
        """Merge called and uncalled mutations into identity groups."""
        report = merge_report(called, uncalled, strategy)

        if self.event_logger:
            self.event_logger.log_merge(
                strategy=strategy.value if isinstance(strategy, IdentityStrategy) else getattr(strategy, "__name__", "custom"),
                primary_count=report.primary_count,
                secondary_count=report.secondary_count,
                group_count=len(report.groups),
                dropped=report.dropped,
            )

        return report

    def mutation_driver_info(self, mutation: Mutation) -> DriverInfoWithHotspots:
        """Driver evidence for one mutation under the current settings."""
        settings = self.settings

        def compute() -> DriverInfoWithHotspots:
            return evaluate_putative_driver_info_with_hotspots(
                mutation,
                self._mutation_indicator(mutation),
                settings.custom_driver_annotations_active,
                settings.custom_driver_tier_selection,
                HotspotInfo(
                    hotspot_annotations_active=settings.hotspot_annotations_active,
                    hotspot_driver=self._is_hotspot(mutation),
                ),
            )

        flags = ("mutation", self._sources_token, settings.flags())
        return self.cache.get_or_compute(mutation, flags, compute)

    def molecular_driver_info(self, datum: NumericGeneMolecularData) -> PutativeDriverInfo:
        """Driver evidence for one copy-number datum under the current settings."""
        settings = self.settings

        def compute() -> PutativeDriverInfo:
            return evaluate_putative_driver_info(
                datum,
                self._cna_indicator(datum),
                settings.custom_driver_annotations_active,
                settings.custom_driver_tier_selection,
            )

        flags = ("cna", self._sources_token, settings.flags())
        return self.cache.get_or_compute(datum, flags, compute)

    def classify_mutations(
        self,
        mutations: Sequence[Mutation],
        gene_lookup: GeneLookup | None = None,
    ) -> MutationPartition:
        """Partition mutations into driver, VUS, germline and germline VUS."""
        partition = partition_mutations(mutations, self.mutation_driver_info, gene_lookup)

        if self.event_logger:
            self.event_logger.log_classification(
                record_type="mutations",
                counts=partition.counts(),
                settings=self.settings.model_dump(exclude={"driver_cache_size"}),
                failed_sources=self.failed_sources,
            )

        return partition

    def classify_molecular_data(
        self,
        molecular_data: Sequence[NumericGeneMolecularData],
        gene_lookup: GeneLookup | None = None,
    ) -> MolecularDataPartition:
        """Partition copy-number data into driver and VUS."""
        partition = partition_molecular_data(molecular_data, self.molecular_driver_info, gene_lookup)

        if self.event_logger:
            self.event_logger.log_classification(
                record_type="copy-number data",
                counts=partition.counts(),
                settings=self.settings.model_dump(exclude={"driver_cache_size"}),
                failed_sources=self.failed_sources,
            )

        return partition

    def merge_and_classify(
        self,
        called: Sequence[Mutation] | None,
        uncalled: Sequence[Mutation] | None = None,
        gene_lookup: GeneLookup | None = None,
        strategy: IdentityStrategy | MutationIdGenerator = DEFAULT_IDENTITY_STRATEGY,
    ) -> tuple[MergeReport, MutationPartition]:
        """Merge sources, then classify every merged record in group order."""
        report = self.merge(called, uncalled, strategy)
        merged = [mutation for group in report.groups for mutation in group]
        return report, self.classify_mutations(merged, gene_lookup)
