"""glyph-tool — Extract bitmap-font glyphs and UI regions from screenshots.

Usage: uv run glyph-tool <technique> <tmp_dir> <image> [options]

Techniques are auto-discovered from glyph_cutter/techniques/.
Each technique module's docstring is its documentation.
Run `glyph-tool help <technique>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, glyph-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import os
import sys
from collections.abc import Callable

from PIL import Image

from glyph_cutter import registry
from glyph_cutter.core.arg_parser import parse_grid, parse_point, parse_range, parse_rect, parse_rule, parse_size
from glyph_cutter.core.env import Settings, load_env, load_settings
from glyph_cutter.core.imaging import raster_from_image
from glyph_cutter.core.report import format_json, format_text
from glyph_cutter.core.types import Job, Report


def _load_technique_module(name: str) -> object:
    """Load the raw module for a technique (for docstring access)."""
    return importlib.import_module(f'glyph_cutter.techniques.{name}')


def _arg_type(parse: Callable, label: str) -> Callable:
    """Wrap a parser so argparse reports ValueError as a usage error."""

    def convert(text: str):
        try:
            return parse(text)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from e

    convert.__name__ = label
    return convert


def _short_help(name: str, tech) -> str:
    doc = (_load_technique_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else tech.help


def _build_parser() -> argparse.ArgumentParser:
    techniques = registry.all_techniques()

    epilog = (
        'Examples:\n'
        '  glyph-tool regions ./tmp strip.png --rule FFFFFF:101010\n'
        '  glyph-tool extract ./tmp strip.png --rule 000000:202020 --chars 0123456789\n'
        '  glyph-tool grid ./tmp sheet.png --grid 0,0,10,10,2,0,16,6\n'
        '  glyph-tool binarize ./tmp shot.png --avg-range 0,72\n'
        '  glyph-tool all ./tmp strip.png --rule FFFFFF:101010 --json --min-regions 10\n'
        '  glyph-tool pick ./tmp shot.png --at 12,7\n'
        '  glyph-tool help regions\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  GLYPH_TOOL_TOLERANCE=101010   tolerance for rules given without one\n'
        '  GLYPH_TOOL_MIN_W / GLYPH_TOOL_MIN_H   default --min-size\n'
        '  GLYPH_TOOL_MAX_RULES=10       cap on --rule count\n'
    )
    parser = argparse.ArgumentParser(
        prog='glyph-tool',
        description='Extract bitmap-font glyphs and UI regions from screenshots.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='technique', help='Technique to run')

    for name, tech in sorted(techniques.items()):
        p = sub.add_parser(name, help=_short_help(name, tech))
        p.add_argument('tmp_dir', help='Working directory for artefacts')
        p.add_argument('image', help='Path to screenshot PNG/JPG/BMP')
        p.add_argument(
            '-r',
            '--rule',
            action='append',
            default=[],
            metavar='TARGET[:TOL][:off]',
            help='Colour rule, e.g. FFFFFF:101010 (repeatable)',
        )
        p.add_argument('-g', '--grid', type=_arg_type(parse_grid, 'grid'), help='X,Y,W,H[,COLGAP,ROWGAP[,COLS,ROWS]]')
        p.add_argument(
            '-f',
            '--fixed',
            action='append',
            default=[],
            type=_arg_type(parse_rect, 'rect'),
            metavar='L,T,R,B',
            help='Extra rect appended to detected regions (repeatable)',
        )
        p.add_argument(
            '--fixed-only',
            action='store_true',
            help='Use the --fixed rects instead of detected regions',
        )
        p.add_argument(
            '--region',
            type=_arg_type(parse_rect, 'rect'),
            metavar='L,T,R,B',
            help='Limit binarize and region detection to this rect',
        )
        p.add_argument('-b', '--binary', action='store_true', help='Input is already black/white; segment white')
        p.add_argument(
            '--avg-range',
            type=_arg_type(parse_range, 'range'),
            metavar='LOW,HIGH',
            help='Binarize by RGB average in [LOW, HIGH] instead of rules',
        )
        p.add_argument('--min-size', type=_arg_type(parse_size, 'size'), metavar='WxH', help='Smallest region kept')
        p.add_argument('-c', '--chars', default='', help='Characters labelling extracted glyphs in order')
        p.add_argument('-a', '--at', type=_arg_type(parse_point, 'point'), metavar='X,Y', help='Pixel for pick')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument(
            '-m',
            '--min-regions',
            type=int,
            default=None,
            metavar='N',
            help='Exit 1 if fewer than N rects were found (CI gating)',
        )

    help_parser = sub.add_parser('help', help='Print full docs for a technique')
    help_parser.add_argument('command', nargs='?', help='Technique name')

    return parser


def _print_help(command: str | None) -> None:
    """Print full module docstring for a technique."""
    techniques = registry.all_techniques()

    if command is None:
        print('Available techniques:\n')
        for name, tech in sorted(techniques.items()):
            print(f'  {name:<10} {_short_help(name, tech)}')
        print('\nRun: glyph-tool help <technique> for full docs.')
        return

    if command not in techniques:
        print(f'Unknown technique: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(techniques))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_technique_module(command).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {command!r})')
        return
    print(doc)


def _check_min_regions(report: Report, minimum: int) -> bool:
    """Return True if fewer than `minimum` rects were found."""
    count = report.rect_count()
    if count is None:
        count = report.results.get('extract', {}).get('count', 0)
    if count < minimum:
        print(f'\nFAIL: found {count} rect(s), expected at least {minimum}')
        return True
    return False


def _build_job(name: str, image: Image.Image, args: argparse.Namespace, settings: Settings) -> Job:
    rules = tuple(parse_rule(text, default_tolerance=settings.tolerance) for text in args.rule)
    if len(rules) > settings.max_rules:
        print(f'glyph-tool: using the first {settings.max_rules} of {len(rules)} rules', file=sys.stderr)
        rules = rules[: settings.max_rules]
    min_w, min_h = args.min_size if args.min_size else (settings.min_w, settings.min_h)
    return Job(
        name=name,
        raster=raster_from_image(image),
        rules=rules,
        grid=args.grid,
        fixed_rects=tuple(args.fixed),
        region=args.region,
        fixed_only=args.fixed_only,
        binary=args.binary,
        min_w=min_w,
        min_h=min_h,
        avg_range=args.avg_range,
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'glyph-tool: loaded {env_path}', file=sys.stderr)

    if not args.technique:
        parser.print_help()
        sys.exit(1)

    if args.technique == 'help':
        _print_help(getattr(args, 'command', None))
        return

    if not os.path.isfile(args.image):
        print(f'Error: image not found: {args.image}', file=sys.stderr)
        sys.exit(1)

    try:
        image = Image.open(args.image)
        image.load()
    except OSError as e:
        print(f'Error: cannot read image {args.image}: {e}', file=sys.stderr)
        sys.exit(1)

    name = os.path.splitext(os.path.basename(args.image))[0]
    job = _build_job(name, image, args, load_settings())

    report = Report(image_path=args.image, image_width=job.raster.width, image_height=job.raster.height)

    tech = registry.get(args.technique)
    tech.execute(job, report, args)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # CI gate — after output so the report is visible even on failure
    minimum = getattr(args, 'min_regions', None)
    if minimum is not None and _check_min_regions(report, minimum):
        sys.exit(1)


if __name__ == '__main__':
    main()
