"""Black/white rendition of the image (or of --region) and save it as PNG.

Pixels matching any enabled --rule become white, all others black. With
--avg-range LOW,HIGH the rules are ignored and a pixel is white when the
average of its R, G and B lies in [LOW, HIGH].

Saves to <tmp_dir>/<image stem>_binary.png. Feed that file back with
--binary to segment it.

Example:
    uv run glyph-tool binarize ./tmp shot.png --rule FFFFFF:101010 --region 0,0,200,40
    uv run glyph-tool binarize ./tmp shot.png --avg-range 0,72
"""

import os

from glyph_cutter.core.imaging import image_from_raster
from glyph_cutter.core.pipeline import compute_preview, request_for
from glyph_cutter.core.types import Job, Report, Technique

technique = Technique(
    name='binarize',
    help='Map pixels to white (rule match) or black. Save the two-level image as PNG.',
)


@technique.run
def run(job: Job, report: Report, args) -> None:
    preview = compute_preview(request_for(job))
    if preview is None:
        report.add('binarize', {'error': 'no enabled --rule or --avg-range given'})
        return

    os.makedirs(args.tmp_dir, exist_ok=True)
    path = os.path.join(args.tmp_dir, f'{job.name}_binary.png')
    image_from_raster(preview).save(path)

    report.add(
        'binarize',
        {
            'mode': 'avg-range' if job.avg_range is not None else 'rules',
            'file': path,
            'width': preview.width,
            'height': preview.height,
        },
    )
