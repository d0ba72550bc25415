"""
Core domain models, mathematical primitives, and invariants.

Term Store, numerical safeguards, arithmetic algorithms and the
serialization contract. Independent of text parsing and formatting.
"""
