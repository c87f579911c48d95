"""
exactnum — точная арифметика произвольной точности.
"""

__version__ = "0.1.0"
