"""
Evaluation and analysis utilities.

This subpackage offers:
- numeric evaluation of symbolic metrics at a confusion matrix
- helpers to turn sweep results into DataFrames and summarize them
- scatter plots comparing two metrics over a sweep.
"""
