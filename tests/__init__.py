"""
Test suite for exactnum

Contains:
- tests/unit/          : Unit tests for the magnitude, integer and rational
                         engines and the JSON value contracts
"""
