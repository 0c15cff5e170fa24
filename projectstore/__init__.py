"""
Project Store Package - Persistence for ML projects, their fields, labels and training data.
"""

__version__ = "1.0.0"
