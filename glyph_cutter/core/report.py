"""Report builder — text and JSON output for glyph-tool results."""

import json
from typing import Any

from glyph_cutter.core.types import Report


def _box(rect: list[int]) -> str:
    return f'[{rect[0]},{rect[1]}→{rect[2]},{rect[3]}]'


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'glyph-tool: {report.image_path} ({report.image_width}×{report.image_height})', '']

    for tech_name, data in report.results.items():
        lines.append(f'── {tech_name}')
        if 'error' in data:
            lines.append(f'  error: {data["error"]}')
        elif tech_name in ('regions', 'grid'):
            lines.append(f'  rects: {data["count"]}')
            for rect in data['rects']:
                lines.append(f'    {_box(rect)}')
        elif tech_name == 'binarize':
            lines.append(f'  {data["mode"]}: {data["file"]} ({data["width"]}×{data["height"]})')
        elif tech_name == 'extract':
            lines.append(f'  glyphs: {data["count"]} → {data["dir"]}')
            for glyph in data['glyphs']:
                char = f' {glyph["char"]!r}' if glyph.get('char') else ''
                lines.append(f'    {glyph["file"]} {_box(glyph["rect"])}{char}')
        elif tech_name == 'pick':
            lines.append(f'  ({data["x"]},{data["y"]}) {data["hex"]}  rule: {data["rule"]}')
        else:
            for k, v in data.items():
                lines.append(f'  {tech_name}.{k}: {v}')
        lines.append('')

    total = report.pass_count + report.fail_count
    if total > 0:
        lines.append(f'PASS {report.pass_count}/{total}  FAIL {report.fail_count}/{total}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
        'results': report.results,
        'summary': {
            'total': report.pass_count + report.fail_count,
            'pass': report.pass_count,
            'fail': report.fail_count,
        },
    }
    return json.dumps(obj, indent=2)
