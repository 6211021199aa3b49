"""text-menu client for the pizza store database"""

__version__ = "0.1.0"
