"""Ordered feature registry with lookup by name."""

from typing import Iterator, List, Optional, Sequence

from toggler.domain.errors import FeatureLookupError
from toggler.domain.features import Feature


class FeatureRegistry:
    """
    Read-only, ordered collection of configured features.

    Names are expected to be unique but this isn't enforced; lookups return
    the first feature with a matching name.
    """

    def __init__(self, features: Sequence[Feature] = ()):
        self._features: List[Feature] = list(features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def lookup(self, name: str) -> Optional[Feature]:
        """Return the first feature named exactly `name` (case-sensitive)."""
        for feature in self._features:
            if feature.name == name:
                return feature
        return None

    def require(self, name: str) -> Feature:
        """
        Return the feature named `name`.

        Raises:
            FeatureLookupError: If no feature has that name
        """
        feature = self.lookup(name)
        if feature is None:
            raise FeatureLookupError(name)
        return feature

    def names(self) -> List[str]:
        return [feature.name for feature in self._features]
