# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for external element-set providers.

Adapters implement these to handle files, catalogs or generators.
"""
from orbitsim.ports.element_source import ElementSetSource

__all__ = ["ElementSetSource"]
