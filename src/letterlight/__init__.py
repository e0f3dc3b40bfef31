"""Letterlight - Outline geometry and LED module placement for channel letters.

Letterlight is the geometry core behind illuminated-letter signage design. It
parses SVG-style path descriptions into contours, validates outlines, supports
safe interactive anchor editing, and fills letter interiors with rectangular
LED modules that stay strictly inside the outline.

Example:
    $ letterlight autofill "M 0 0 L 100 0 L 100 60 L 0 60 Z"

This prints the module positions produced by the grid autofill.
"""

__version__ = "0.1.0"
__author__ = "Letterlight Contributors"

__all__ = ["__author__", "__version__"]
