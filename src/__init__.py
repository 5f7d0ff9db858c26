"""
ADIL - Indonesian Legal Assistant

Grounded answers about Indonesian law.

This package provides the core functionality for the ADIL assistant,
including validation of generated answers against Indonesian legal
sources before they are returned to the user.
"""

__version__ = "0.1.0"
__author__ = "ADIL Team"
