"""
g-brief Letter Exporter

Exports parsed outline documents as LaTeX letters for the g-brief class.
"""

__version__ = "0.1.0"
