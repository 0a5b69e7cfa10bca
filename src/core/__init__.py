"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks for carb absorption
estimation that are independent of external systems (sensors, storage, etc.).
"""
