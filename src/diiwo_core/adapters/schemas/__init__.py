# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Transport-facing schemas."""
