"""glyph-tool techniques, one per module.

A module registers itself by defining `technique = Technique(...)`; see
glyph_cutter.registry.discover(). The module docstring is the text shown
by `glyph-tool help <technique>`.
"""
