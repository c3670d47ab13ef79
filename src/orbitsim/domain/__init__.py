# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Domain layer: element sets, propagation, satellite state and frames.

Pure computation. Imports only stdlib, numpy and orbitsim.domain.
"""
