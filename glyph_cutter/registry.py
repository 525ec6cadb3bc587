"""Technique registry.

Every module under glyph_cutter/techniques/ whose name does not start with
an underscore is imported once; those defining a module-level `technique`
(a Technique instance) are registered under the technique's name.
"""

import importlib
import pkgutil

import glyph_cutter.techniques as techniques_pkg
from glyph_cutter.core.types import Technique

_registry: dict[str, Technique] = {}


def _technique_modules() -> list[str]:
    return sorted(info.name for info in pkgutil.iter_modules(techniques_pkg.__path__) if not info.name.startswith('_'))


def discover() -> dict[str, Technique]:
    """Import the technique modules on first use and return name -> Technique."""
    if not _registry:
        for modname in _technique_modules():
            module = importlib.import_module(f'{techniques_pkg.__name__}.{modname}')
            tech = getattr(module, 'technique', None)
            if isinstance(tech, Technique):
                _registry[tech.name] = tech
    return _registry


def get(name: str) -> Technique:
    techniques = discover()
    try:
        return techniques[name]
    except KeyError:
        raise KeyError(f'Unknown technique: {name}. Available: {", ".join(sorted(techniques))}') from None


def all_techniques() -> dict[str, Technique]:
    return discover()
