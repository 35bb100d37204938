"""
recap-check — environment diagnostics for RECAP project templates.
"""

__version__ = "0.1.0"
