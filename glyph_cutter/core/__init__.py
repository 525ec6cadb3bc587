"""glyph_cutter.core — Raster engine and foundation layer.

Contains the value types, colour rule evaluation, binarisation, flood-fill
and grid segmentation, crop/extraction, background recomputation, settings
and the report builder. This package has NO dependencies on
glyph_cutter.techniques or glyph_cutter.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
