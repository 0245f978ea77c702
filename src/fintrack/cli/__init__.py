"""
CLI Package

Click command groups for every fintrack operation, registered on the
`fintrack` entry point in main.py.
"""

from .main import main

__all__ = ["main"]
