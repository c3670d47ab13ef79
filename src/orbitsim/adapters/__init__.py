# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for element-set input.

External dependencies (file I/O) are confined to this layer.
"""
from orbitsim.adapters.tle_file import TleFileSource, parse_tle_text, read_tle_file

__all__ = ["TleFileSource", "parse_tle_text", "read_tle_file"]
