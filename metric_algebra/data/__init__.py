"""
Confusion-matrix data utilities.

This subpackage provides:
- the ConfusionMatrix value type
- lazy, restartable enumeration of bounded confusion matrices
- the two-metric sweep used for empirical comparison and plotting.
"""
