"""
Credit Default Prediction

Batch pipeline that compares classifiers for credit default under k-fold
cross-validation, refits the best one and scores a competition dataset.
"""

__version__ = "1.0.0"
__author__ = "Credit Scoring Team"
