"""
Symbolic algebra utilities.

This subpackage offers:
- the Simplifier interface and its sympy-backed implementation
- the EquivalenceChecker, which proves or disproves metric identities
  by simplifying their difference to zero.
"""
