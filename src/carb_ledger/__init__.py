"""
Carb Ledger - Carbohydrate entry modelling and health-store sync records.

Models user-reported carbohydrate intake, folds fat and protein into a
carbohydrate equivalent, and builds raw values and external store records.
"""

__version__ = "0.1.0"
