"""Identity-grouped merging of mutation sources.

ARCHITECTURE:
    called mutations ──┐
                       ├→ identity key → ordered groups (MutationGroup)
    uncalled mutations ┘   (uncalled only joins existing keys)

Key Design:
- Group order is the order in which keys were first seen
- Within a group: called records first, then uncalled, each in input order
- Uncalled records never create a group on their own; they are evidence only
  for events already called
- Absent sources are treated as empty
"""

import logging
from typing import Callable, Iterable, Sequence, TypeVar

from pydantic import BaseModel, Field

from oncomerge.constants import ASCN_ATTRIBUTES
from oncomerge.identity import (
    DEFAULT_IDENTITY_STRATEGY,
    IdentityStrategy,
    MutationIdGenerator,
    resolve_id_generator,
)
from oncomerge.models.mutation import DiscreteCopyNumberData, Mutation

logger = logging.getLogger(__name__)

T = TypeVar("T")

MutationGroup = list[Mutation]


class MergeReport(BaseModel):
    """Merged groups plus bookkeeping about the secondary source."""

    groups: list[list[Mutation]] = Field(default_factory=list)
    primary_count: int = 0
    secondary_count: int = 0
    dropped: int = Field(0, description="Secondary records whose identity was not called")

    @property
    def merged_count(self) -> int:
        return sum(len(group) for group in self.groups)


def _update_id_to_mutations(
    id_to_mutations: dict[str, MutationGroup],
    mutations: Iterable[Mutation] | None,
    generate_id: MutationIdGenerator,
    only_update_existing_ids: bool,
) -> int:
    """Append mutations to their identity groups, returning how many were skipped."""
    skipped = 0
    for mutation in mutations or ():
        mutation_id = generate_id(mutation)
        if only_update_existing_ids and mutation_id not in id_to_mutations:
            skipped += 1
            continue
        id_to_mutations.setdefault(mutation_id, []).append(mutation)
    return skipped


def merge_report(
    primary: Sequence[Mutation] | None,
    secondary: Sequence[Mutation] | None = None,
    strategy: IdentityStrategy | MutationIdGenerator = DEFAULT_IDENTITY_STRATEGY,
) -> MergeReport:
    """Merge called and uncalled mutations, keeping count of dropped records.

    Args:
        primary: Called mutations; every identity here becomes a group
        secondary: Uncalled mutations; only joined onto existing groups
        strategy: Identity strategy or key function

    Returns:
        MergeReport with groups in first-seen key order
    """
    generate_id = resolve_id_generator(strategy)
    id_to_mutations: dict[str, MutationGroup] = {}

    _update_id_to_mutations(id_to_mutations, primary, generate_id, only_update_existing_ids=False)
    dropped = _update_id_to_mutations(id_to_mutations, secondary, generate_id, only_update_existing_ids=True)

    if dropped:
        logger.debug(f"Dropped {dropped} uncalled mutations with no matching called event")

    return MergeReport(
        groups=list(id_to_mutations.values()),
        primary_count=len(primary or ()),
        secondary_count=len(secondary or ()),
        dropped=dropped,
    )


def merge_sources(
    primary: Sequence[Mutation] | None,
    secondary: Sequence[Mutation] | None = None,
    strategy: IdentityStrategy | MutationIdGenerator = DEFAULT_IDENTITY_STRATEGY,
) -> list[MutationGroup]:
    """Merge called and uncalled mutations into identity groups."""
    return merge_report(primary, secondary, strategy).groups


def merge_mutations(
    mutations: Sequence[Mutation] | None,
    strategy: IdentityStrategy | MutationIdGenerator = DEFAULT_IDENTITY_STRATEGY,
) -> list[MutationGroup]:
    """Group a single mutation source by identity."""
    return merge_sources(mutations, None, strategy)


def concat_sources(
    primary: Sequence[Mutation] | None,
    secondary: Sequence[Mutation] | None = None,
) -> list[Mutation]:
    """Called mutations followed by uncalled mutations, without de-duplication."""
    return [*(primary or ()), *(secondary or ())]


def group_by(
    data: Iterable[T],
    key_fn: Callable[[T], str],
    default_keys: Iterable[str] = (),
) -> dict[str, list[T]]:
    """Group items by key, preserving first-seen order.

    Keys in ``default_keys`` are present (possibly empty) and come first.
    """
    groups: dict[str, list[T]] = {key: [] for key in default_keys}
    for datum in data:
        groups.setdefault(key_fn(datum), []).append(datum)
    return groups


def merge_discrete_cna_data(data: Sequence[DiscreteCopyNumberData] | None) -> list[list[DiscreteCopyNumberData]]:
    """Group discrete copy-number calls by gene and alteration level."""
    return list(group_by(data or (), lambda d: f"{d.entrez_gene_id}_{d.alteration}").values())


def _has_ascn_property(mutation: Mutation, prop: str) -> bool:
    ascn = mutation.allele_specific_copy_number
    if not ascn:
        return False
    value = ascn.get(prop)
    return value is not None and value != ""


def exists_some_mutation_with_ascn_property(
    mutations: Sequence[Mutation] | Sequence[Sequence[Mutation]],
) -> dict[str, bool]:
    """Whether any mutation carries a value for each ASCN property.

    Accepts a flat list of mutations or a list of mutation groups.
    """
    flat: list[Mutation] = []
    for element in mutations:
        if isinstance(element, Mutation):
            flat.append(element)
        else:
            flat.extend(element)

    return {
        prop: any(_has_ascn_property(mutation, prop) for mutation in flat)
        for prop in ASCN_ATTRIBUTES
    }
