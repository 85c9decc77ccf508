"""
Fixed-precision decimal value type, rounding primitives, and JSON contracts.

This package is self-contained: no I/O, no global state, no background work.
"""
