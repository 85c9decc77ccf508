"""
Test suite for fixed-decimal

Contains:
- tests/unit/          : Unit tests for rounding primitives, the Decimal model, and JSON contracts
"""
