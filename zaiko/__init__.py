"""
Zaiko - Multi-warehouse Stock Ledger
"""
__version__ = "1.0.0"
