"""
Top-level package for the classifier metric algebra project.

This package contains modules for:
- symbolic definitions of confusion-matrix metrics (formulas)
- symbolic equivalence checking through a pluggable simplifier (algebra)
- bounded enumeration of confusion matrices (data)
- numeric evaluation, analysis and plotting of sweep results (evaluation)
- shared configuration and logging helpers (utils)

The metrics are all expressed over the four confusion-matrix counts
(tp, fp, fn, tn), which together are a sufficient statistic for the
performance of a decision classifier.
"""
