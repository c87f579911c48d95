"""
Core arithmetic engine and value contracts.

This module contains the number types and their JSON contracts; it has no
I/O and no process-wide state.
"""
