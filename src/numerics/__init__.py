"""
Decorated numeric value types.

Primitive numbers wrapped in policy-parameterized envelopes that enforce an
invariant on every value they hold:

- Quantity: non-negative magnitude that may be exactly infinite
- Rounded: value re-rounded by its policy after every mutation
- Angle: unit-tagged angle converting between units on access

The library never configures logging; attach handlers to the "src.numerics"
logger to see specialization and configuration records.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
