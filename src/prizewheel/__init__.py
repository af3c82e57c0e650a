"""Weighted prize wheel: selection, equal-angle layout, eased spin and rendering."""

__version__ = "0.1.0"
