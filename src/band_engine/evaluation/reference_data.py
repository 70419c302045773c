"""
Reference Data

Static synonym, variation, irregular-plural and verdict tables used by the
matchers. A ReferenceData value is built once (from the packaged YAML file
or a file named in configuration) and then shared read-only, so any number
of threads can evaluate answers against it without locking.
"""

from functools import lru_cache
from types import MappingProxyType
from pathlib import Path
from typing import FrozenSet, Mapping, Optional, Tuple, Union
from dataclasses import dataclass

import yaml

from ..core.exceptions import ReferenceDataError
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_REFERENCE_PATH = Path(__file__).parent / "data" / "reference_data.yaml"

TRUE = "true"
FALSE = "false"
NOT_GIVEN = "not_given"

SynonymGroup = FrozenSet[str]
VariationGroup = FrozenSet[str]


@dataclass(frozen=True)
class ReferenceData:
    """Immutable lookup tables for fuzzy answer matching."""
    synonym_groups: Tuple[SynonymGroup, ...] = ()
    variation_groups: Mapping[str, VariationGroup] = None
    irregular_plurals: Tuple[Tuple[str, str], ...] = ()
    verdict_variants: Mapping[str, FrozenSet[str]] = None

    def __post_init__(self):
        # Tables are copied into read-only views
        object.__setattr__(self, 'synonym_groups',
                           tuple(frozenset(group) for group in self.synonym_groups))
        object.__setattr__(self, 'variation_groups', MappingProxyType(
            {name: frozenset(group) for name, group in (self.variation_groups or {}).items()}))
        object.__setattr__(self, 'irregular_plurals',
                           tuple(tuple(pair) for pair in self.irregular_plurals))
        object.__setattr__(self, 'verdict_variants', MappingProxyType(
            {bucket: frozenset(words) for bucket, words in (self.verdict_variants or {}).items()}))

    def are_synonyms(self, first: str, second: str) -> bool:
        """Both words belong to the same synonym group."""
        return any(first in group and second in group for group in self.synonym_groups)

    def are_plural_variants(self, first: str, second: str) -> bool:
        """
        Singular/plural forms of the same word.

        Trailing ``s`` characters are stripped from both sides before
        comparing; irregular pairs come from the plural table.
        """
        if first.rstrip('s') == second.rstrip('s'):
            return True

        for singular, plural in self.irregular_plurals:
            if (first == singular and second == plural) or (first == plural and second == singular):
                return True

        return False

    def matches_variation_group(self, first: str, second: str) -> bool:
        """Both strings are listed in the same listening variation group."""
        return any(first in group and second in group for group in self.variation_groups.values())

    def true_false_bucket(self, answer: str) -> Optional[str]:
        """Map a verdict word ("yes", "ng", ...) to true, false or not_given."""
        for bucket, variants in self.verdict_variants.items():
            if answer in variants:
                return bucket
        return None

    @classmethod
    def from_dict(cls, data: Mapping, source: str = "<dict>") -> "ReferenceData":
        """Build reference data from parsed YAML content."""
        if not isinstance(data, Mapping):
            raise ReferenceDataError("Reference data root must be a mapping", path=source)

        try:
            synonym_groups = tuple(
                frozenset(_clean(word) for word in group)
                for group in data.get('synonym_groups') or []
            )
            variation_groups = {
                str(name): frozenset(_clean(entry) for entry in entries)
                for name, entries in (data.get('variation_groups') or {}).items()
            }
            irregular_plurals = tuple(
                (_clean(singular), _clean(plural))
                for singular, plural in (data.get('irregular_plurals') or {}).items()
            )
            verdict_variants = {
                _clean(bucket): frozenset(_clean(variant) for variant in variants)
                for bucket, variants in (data.get('true_false_not_given') or {}).items()
            }
        except (TypeError, AttributeError, ValueError) as e:
            raise ReferenceDataError(f"Malformed reference data: {e}", path=source) from e

        unknown_buckets = set(verdict_variants) - {TRUE, FALSE, NOT_GIVEN}
        if unknown_buckets:
            raise ReferenceDataError(
                f"Unknown true/false/not given buckets: {sorted(unknown_buckets)}", path=source
            )

        return cls(
            synonym_groups=synonym_groups,
            variation_groups=variation_groups,
            irregular_plurals=irregular_plurals,
            verdict_variants=verdict_variants,
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ReferenceData":
        """Load reference data from a YAML file."""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ReferenceDataError(f"Cannot read reference data: {e}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise ReferenceDataError(f"Invalid YAML in reference data: {e}", path=str(path)) from e

        reference = cls.from_dict(data or {}, source=str(path))
        logger.debug(
            f"Loaded reference data from {path}: {len(reference.synonym_groups)} synonym groups, "
            f"{len(reference.variation_groups)} variation groups"
        )
        return reference


def _clean(value) -> str:
    # YAML may hand back ints for entries such as 01 or 1
    return str(value).strip().lower()


@lru_cache(maxsize=None)
def load_reference_data(path: Optional[str] = None) -> ReferenceData:
    """
    Load and cache reference data.

    Args:
        path: YAML file to load; None loads the packaged tables

    Returns:
        Shared ReferenceData instance (one per path)
    """
    return ReferenceData.from_yaml(path or DEFAULT_REFERENCE_PATH)
