# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Infrastructure layer: cross-cutting runtime concerns."""
