"""Uniform grid cells from --grid X,Y,W,H[,COLGAP,ROWGAP[,COLS,ROWS]].

Cell (r, c) starts at X + c*(W+COLGAP), Y + r*(H+ROWGAP) and is W x H.
Cells are listed row by row. A zero or negative cell size gives no cells.
The image is not inspected; cells may extend past its edges.

Example:
    uv run glyph-tool grid ./tmp font_sheet.png --grid 0,0,10,10,2,0,16,6
"""

from glyph_cutter.core.segment import generate_grid
from glyph_cutter.core.types import Job, Report, Technique

technique = Technique(
    name='grid',
    help='Generate a uniform lattice of cell rects from --grid. Output the rects.',
)


@technique.run
def run(job: Job, report: Report, args) -> None:
    if job.grid is None:
        report.add('grid', {'count': 0, 'rects': [], 'error': '--grid required'})
        return

    rects = generate_grid(job.grid)
    report.check_count(len(rects), getattr(args, 'min_regions', None))
    report.add('grid', {'count': len(rects), 'rects': [list(r.as_tuple()) for r in rects]})
