"""Run segmentation, binarisation and extraction, combined into one report.

Runs: grid when --grid is given, otherwise regions.
Runs: binarize when a --rule is enabled or --avg-range is given.
Runs: extract.
Skips: pick (needs --at — run explicitly).

Example:
    uv run glyph-tool all ./tmp strip.png --rule FFFFFF:101010 --chars ABC
    uv run glyph-tool all ./tmp sheet.png --grid 0,0,8,12,1,1,16,6 --json
"""

from glyph_cutter.core.pipeline import enabled_rules
from glyph_cutter.core.types import Job, Report, Technique

technique = Technique(
    name='all',
    help='Run regions/grid, binarize and extract. Combine into a single report.',
)

# Techniques never run automatically
SKIP = {'all', 'pick'}


@technique.run
def run(job: Job, report: Report, args) -> None:
    from glyph_cutter.registry import all_techniques

    can_binarize = job.avg_range is not None or bool(enabled_rules(job.rules))
    for name, tech in sorted(all_techniques().items()):
        if name in SKIP:
            continue
        if name == 'grid' and job.grid is None:
            continue
        if name == 'regions' and job.grid is not None:
            continue
        if name == 'binarize' and not can_binarize:
            continue
        tech.execute(job, report, args)
