"""
UI Localizer - extract, machine-translate and write back UI strings in a
front-end source tree.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
