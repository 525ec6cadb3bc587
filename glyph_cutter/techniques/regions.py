"""Region detection by 8-connected flood fill over rule-matching pixels.

Every pixel that matches an enabled --rule seeds a breadth-first fill over
its eight neighbours; each component is reported as its bounding box.
Boxes narrower or shorter than --min-size (default 2x2) are dropped as
noise. Boxes are listed in scan order: top to bottom, left to right by the
first pixel of each component.

With --binary the input is treated as an already black/white image and
white pixels are segmented. With --avg-range the RGB-average rendition
(see `binarize`) is segmented instead of the rules. --region limits the
search to one rect; boxes stay in image coordinates. --fixed rects are
appended after the detected ones, or replace them with --fixed-only.

Finds: glyphs in a text strip, icons on a toolbar, cells of a sprite sheet.

Example:
    uv run glyph-tool regions ./tmp strip.png --rule FFFFFF:101010
    uv run glyph-tool regions ./tmp binary.png --binary --min-size 3x5
    uv run glyph-tool regions ./tmp shot.png --avg-range 0,72 --region 0,0,200,40
"""

from glyph_cutter.core.pipeline import compute_rects, enabled_rules, request_for
from glyph_cutter.core.types import Job, Report, Technique

technique = Technique(
    name='regions',
    help='Flood-fill rule-matching pixels into 8-connected regions. Output bounding boxes.',
)


@technique.run
def run(job: Job, report: Report, args) -> None:
    if not (job.binary or job.avg_range is not None or enabled_rules(job.rules) or job.fixed_rects):
        report.add('regions', {'count': 0, 'rects': [], 'error': 'no enabled --rule, --avg-range or --binary given'})
        return

    rects = compute_rects(request_for(job, use_grid=False))
    report.check_count(len(rects), getattr(args, 'min_regions', None))
    report.add(
        'regions',
        {
            'count': len(rects),
            'rects': [list(r.as_tuple()) for r in rects],
        },
    )
