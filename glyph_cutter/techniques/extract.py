"""Crop every detected rect out of the image and save each as a PNG.

Rects come from --grid when given, otherwise from flood-fill regions (see
`regions`) plus --fixed rects, or from --fixed alone with --fixed-only.
Pixels are copied exactly; nothing is resampled or composited.

--chars labels the glyphs in order: the first rect is chars[0], and so on.
Files are named <tmp_dir>/glyph_NNN.png, or glyph_NNN_U+XXXX.png when a
character is assigned.

Example:
    uv run glyph-tool extract ./tmp strip.png --rule 000000:202020 --chars 0123456789
    uv run glyph-tool extract ./tmp sheet.png --grid 0,0,8,12,1,1,16,6
"""

import os
import sys

from glyph_cutter.core.glyphs import extract_glyphs
from glyph_cutter.core.imaging import image_from_raster
from glyph_cutter.core.pipeline import compute_rects, request_for
from glyph_cutter.core.types import Job, Report, Technique

technique = Technique(
    name='extract',
    help='Crop each rect (grid or regions) to its own PNG. Label glyphs with --chars.',
)


@technique.run
def run(job: Job, report: Report, args) -> None:
    rects = compute_rects(request_for(job))
    glyphs = extract_glyphs(job.raster, rects, getattr(args, 'chars', None) or '')

    os.makedirs(args.tmp_dir, exist_ok=True)
    saved = []
    for glyph in glyphs:
        path = os.path.join(args.tmp_dir, f'{glyph.label}.png')
        image_from_raster(glyph.raster).save(path)
        saved.append(
            {
                'file': path,
                'rect': list(glyph.rect.as_tuple()),
                'width': glyph.raster.width,
                'height': glyph.raster.height,
                'char': glyph.char,
            }
        )

    print(f'extract: wrote {len(saved)} glyph(s) to {args.tmp_dir}', file=sys.stderr)
    report.add('extract', {'count': len(saved), 'dir': args.tmp_dir, 'glyphs': saved})
