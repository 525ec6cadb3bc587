"""Read the colour at --at X,Y and show the rule a pick would add.

The rule uses the configured default tolerance (GLYPH_TOOL_TOLERANCE,
default 101010). It is reported as not added when the --rule set already
has a rule for that colour or is full (GLYPH_TOOL_MAX_RULES, default 10).

Example:
    uv run glyph-tool pick ./tmp shot.png --at 12,7
    uv run glyph-tool pick ./tmp shot.png --at 12,7 --rule FFFFFF:101010
"""

from glyph_cutter.core.env import load_settings
from glyph_cutter.core.palette import format_hex
from glyph_cutter.core.rules import add_picked_rule
from glyph_cutter.core.types import Job, Report, Technique

technique = Technique(
    name='pick',
    help='Read the pixel colour at --at X,Y. Output its hex value and the matching rule.',
)


@technique.run
def run(job: Job, report: Report, args) -> None:
    at = getattr(args, 'at', None)
    if at is None:
        report.add('pick', {'error': '--at X,Y required'})
        return

    x, y = at
    raster = job.raster
    if not (0 <= x < raster.width and 0 <= y < raster.height):
        report.add('pick', {'error': f'({x},{y}) outside {raster.width}x{raster.height} image'})
        return

    settings = load_settings()
    hex_value = format_hex(raster.pixel(x, y))
    target = hex_value[1:]
    rules = add_picked_rule(job.rules, target, settings.tolerance, limit=settings.max_rules)

    report.add(
        'pick',
        {
            'x': x,
            'y': y,
            'hex': hex_value,
            'argb': f'{raster.pixel(x, y):08X}',
            'rule': f'{target}:{settings.tolerance}',
            'added': len(rules) > len(job.rules),
        },
    )
