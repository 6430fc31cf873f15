# Copyright (c) Diiwo.
# SPDX-License-Identifier: MIT
"""Domain layer: lifecycle model, capabilities, results and business errors.

No HTTP, DB, or framework imports are allowed below this package.
"""
