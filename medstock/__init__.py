"""
MedStock - pharmacy inventory status & sales analytics service.
"""

__version__ = "1.0.0"
