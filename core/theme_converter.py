"""
Theme Converter Module
Converts Tailwind v3 theme settings into v4 CSS declarations.
"""

import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# daisyUI v4 short variable names -> v5 color names
DAISYUI_COLOR_NAMES = {
    'p': 'primary',
    'pc': 'primary-content',
    's': 'secondary',
    'sc': 'secondary-content',
    'a': 'accent',
    'ac': 'accent-content',
    'n': 'neutral',
    'nc': 'neutral-content',
    'b1': 'base-100',
    'b2': 'base-200',
    'b3': 'base-300',
    'bc': 'base-content',
    'in': 'info',
    'inc': 'info-content',
    'su': 'success',
    'suc': 'success-content',
    'wa': 'warning',
    'wac': 'warning-content',
    'er': 'error',
    'erc': 'error-content',
}
COLOR_VARIABLE_PATTERN = re.compile(r'oklch\(var\(--([\w-]+)\)\)')


def _color_variable(match: re.Match) -> str:
    name = match.group(1)
    return f'var(--color-{DAISYUI_COLOR_NAMES.get(name, name)})'


def rewrite_color_variables(css: str) -> str:
    """Rewrite daisyUI v4 `oklch(var(--p))` references to v5 `var(--color-primary)`."""
    return COLOR_VARIABLE_PATTERN.sub(_color_variable, css)


def convert_color(value: str) -> str:
    """
    Normalize a color value for v4 output.

    Values already written as oklch(...) literals pass through unchanged, so
    converting converted output is a no-op.
    """
    value = str(value).strip()
    if value.lower().startswith('oklch(') and 'var(' not in value:
        return value
    return rewrite_color_variables(value)


def convert_screens(screens: Dict[str, str]) -> List[str]:
    return [f'@custom-media --{name} (min-width: {value});' for name, value in screens.items()]


def convert_theme(theme: Optional[Dict[str, Any]]) -> List[str]:
    """Convert theme.screens into @custom-media declarations."""
    css_vars = []
    if not isinstance(theme, dict):
        return css_vars
    screens = theme.get('screens')
    if isinstance(screens, dict):
        css_vars.extend(convert_screens(screens))
    return css_vars


def _flatten_colors(colors: Dict[str, Any], prefix: str,
                    warnings: Optional[List[str]]) -> Iterator[Tuple[str, str]]:
    for name, value in colors.items():
        if name.startswith('...'):
            _warn(warnings, f"Color spread '{name}' cannot be resolved statically and was skipped")
            continue
        if name == 'DEFAULT' and prefix:
            key = prefix
        else:
            key = f'{prefix}-{name}' if prefix else name
        if isinstance(value, dict):
            yield from _flatten_colors(value, key, warnings)
        elif isinstance(value, (str, int, float)) and not isinstance(value, bool):
            yield key, convert_color(value)
        else:
            _warn(warnings, f"Color '{key}' is not a literal value and was skipped")


def _merge_colors(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    """Merge `source` into `target`, combining shade mappings key by key."""
    for name, value in source.items():
        current = target.get(name)
        if isinstance(current, dict) and isinstance(value, dict):
            merged = dict(current)
            _merge_colors(merged, value)
            target[name] = merged
        else:
            target[name] = value


def convert_theme_colors(theme: Optional[Dict[str, Any]], warnings: Optional[List[str]] = None) -> List[str]:
    """Convert theme.colors and theme.extend.colors into an @theme block."""
    if not isinstance(theme, dict):
        return []
    colors = {}
    extend = theme.get('extend')
    for source in (theme.get('colors'), extend.get('colors') if isinstance(extend, dict) else None):
        if source is None:
            continue
        if not isinstance(source, dict):
            _warn(warnings, f"Theme colors are defined by an expression ({source}) and were not converted")
            continue
        _merge_colors(colors, source)
    declarations = [f'  --color-{name}: {value};' for name, value in _flatten_colors(colors, '', warnings)]
    if not declarations:
        return []
    return ['@theme {', *declarations, '}']


def _warn(warnings: Optional[List[str]], message: str) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
