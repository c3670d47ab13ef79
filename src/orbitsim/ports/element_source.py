# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for external orbital element sources.

Adapters handle the actual file or catalog access.
"""
from typing import Protocol, runtime_checkable

from orbitsim.domain.element_set import OrbitalElements


@runtime_checkable
class ElementSetSource(Protocol):
    """Port for loading parsed element sets from an external source."""

    def load_element_sets(self) -> list[OrbitalElements]:
        """Load and parse every element set the source provides."""
        ...
