# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Adapters: persistence (SQLAlchemy) and HTTP response schemas."""
