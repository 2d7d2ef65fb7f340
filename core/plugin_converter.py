"""
Plugin Converter Module
Converts Tailwind v3 plugin registrations into v4 @plugin blocks.

The typography plugin gets its DEFAULT.css overrides as a nested block and the
daisyUI companion plugin gets its theme list plus one @theme block per custom
inline theme. Other plugins are loaded with a bare @plugin line when their
module name is known.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from .theme_converter import convert_color

logger = logging.getLogger(__name__)

TYPOGRAPHY_PLUGIN = '@tailwindcss/typography'
TYPOGRAPHY_IDENTIFIER = 'typography'
DAISYUI_PLUGIN = 'daisyui'
DARK_THEME_FALLBACKS = ('dark', 'night')
DEFAULT_THEMES_DECLARATION = 'themes: light --default, dark --prefersdark;'
# daisyUI v5 options that keep their meaning in the @plugin block
DAISYUI_OPTIONS = ('prefix', 'logs', 'root')
DAISYUI_HANDLED_KEYS = ('themes', 'darkTheme')
SKIPPED_THEME_KEYS = ('name', 'parent')
# the object scanner keeps spread entries under '...<expression>' keys
SPREAD_PREFIX = '...'
CAMEL_CASE_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')


def property_name(key: str) -> str:
    """camelCase JS property -> kebab-case CSS property."""
    if key.startswith('--'):
        return key
    return CAMEL_CASE_BOUNDARY.sub(lambda m: '-' + m.group(1).lower(), key)


def css_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, list):
        return ', '.join(css_value(item) for item in value)
    return str(value)


def _is_null(value: Any) -> bool:
    return value is None or value == 'null'


def _typography_lines(css: Dict[str, Any], depth: int = 1,
                      warnings: Optional[List[str]] = None) -> List[str]:
    indent = '  ' * depth
    lines = []
    for key, value in css.items():
        if key.startswith(SPREAD_PREFIX):
            _warn(warnings, f"Typography spread '{key}' cannot be resolved statically and was skipped")
        elif _is_null(value):
            lines.append(f'{indent}{property_name(key)}: initial;')
        elif isinstance(value, dict):
            lines.append(f'{indent}{key} {{')
            lines.extend(_typography_lines(value, depth + 1, warnings))
            lines.append(f'{indent}}}')
        else:
            lines.append(f'{indent}{property_name(key)}: {css_value(value)};')
    return lines


def typography_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return theme.extend.typography.DEFAULT.css, or {} when not configured."""
    node = config
    for key in ('theme', 'extend', 'typography', 'DEFAULT', 'css'):
        if not isinstance(node, dict):
            return {}
        node = node.get(key)
    return node if isinstance(node, dict) else {}


def convert_typography(config: Dict[str, Any], warnings: Optional[List[str]] = None) -> List[str]:
    overrides = typography_overrides(config)
    logger.debug(f"Typography config: {json.dumps(overrides, indent=2, default=str)}")
    lines = _typography_lines(overrides, warnings=warnings)
    if not lines:
        return [f'@plugin "{TYPOGRAPHY_PLUGIN}";']
    css_parts = [f'@plugin "{TYPOGRAPHY_PLUGIN}" {{', *lines, '}']
    logger.debug(f"Generated CSS parts: {css_parts}")
    return css_parts


def theme_list_declaration(names: List[str], dark_theme: Optional[str] = None) -> str:
    """
    Build the daisyUI v5 `themes:` declaration.

    The first theme is tagged --default. The dark theme (darkTheme, or the
    first of 'dark'/'night') is tagged --prefersdark. Everything else follows
    untagged in its original order.
    """
    if not names:
        return ''
    default_theme = names[0]
    dark = dark_theme or next((name for name in names if name in DARK_THEME_FALLBACKS), None)
    if dark == default_theme:
        entries = [f'{default_theme} --default --prefersdark']
    else:
        entries = [f'{default_theme} --default']
        if dark:
            entries.append(f'{dark} --prefersdark')
    entries.extend(name for name in names[1:] if name != dark)
    return f"themes: {', '.join(entries)};"


def custom_theme_block(name: str, variables: Dict[str, Any],
                       warnings: Optional[List[str]] = None) -> List[str]:
    lines = [f'/* daisyUI theme: {name} */', '@theme {']
    for key, value in variables.items():
        if key.startswith(SPREAD_PREFIX):
            _warn(warnings, f"daisyUI theme '{name}' spreads '{key[len(SPREAD_PREFIX):]}', which cannot be "
                            "resolved statically; only its own variables were converted")
        elif key.startswith('--') or key == 'font-family':
            lines.append(f'  {key}: {convert_color(css_value(value))};')
        elif key not in SKIPPED_THEME_KEYS:
            lines.append(f'  --color-{key}: {convert_color(css_value(value))};')
    lines.append('}')
    return lines


def _collect_themes(themes: List[Any], warnings: Optional[List[str]]) -> Tuple[List[str], List[Tuple[str, Dict]]]:
    names = []
    custom_themes = []
    for entry in themes:
        if isinstance(entry, str):
            names.append(entry)
        elif isinstance(entry, dict) and len(entry) == 1:
            theme_name, variables = next(iter(entry.items()))
            if isinstance(variables, dict):
                names.append(theme_name)
                custom_themes.append((theme_name, variables))
            else:
                _warn(warnings, f"daisyUI theme '{theme_name}' has no variable mapping and was skipped")
        else:
            _warn(warnings, f"daisyUI theme entry {css_value(entry)!r} is not a name or a single-theme object; it was skipped")
    return names, custom_themes


def convert_daisyui(config: Dict[str, Any], warnings: Optional[List[str]] = None) -> List[str]:
    settings = config.get('daisyui') if isinstance(config, dict) else None
    if not isinstance(settings, dict):
        return []
    logger.debug(f"daisyui settings: {settings}")
    css_parts = [f'@plugin "{DAISYUI_PLUGIN}" {{']
    custom_themes = []
    themes = settings.get('themes', True)
    if themes is True:
        css_parts.append(f'  {DEFAULT_THEMES_DECLARATION}')
    elif themes is False:
        css_parts.append('  themes: false;')
    elif isinstance(themes, str):
        css_parts.append(f'  themes: {themes};')
    elif isinstance(themes, list):
        names, custom_themes = _collect_themes(themes, warnings)
        declaration = theme_list_declaration(names, settings.get('darkTheme'))
        if declaration:
            css_parts.append(f'  {declaration}')
        else:
            _warn(warnings, 'daisyUI theme list is empty; no themes were declared')
    for key, value in settings.items():
        if key in DAISYUI_OPTIONS:
            css_parts.append(f'  {key}: {json.dumps(value) if isinstance(value, str) else css_value(value)};')
        elif key not in DAISYUI_HANDLED_KEYS:
            _warn(warnings, f"daisyUI option '{key}' has no v5 equivalent and was dropped")
    css_parts.append('}')

    for theme_name, variables in custom_themes:
        css_parts.append('')
        css_parts.extend(custom_theme_block(theme_name, variables, warnings))
    return css_parts


def _plugin_name(descriptor: Any) -> str:
    if isinstance(descriptor, dict):
        return str(descriptor.get('name', ''))
    return str(descriptor)


def convert_plugins(config: Dict[str, Any], warnings: Optional[List[str]] = None) -> List[List[str]]:
    """Convert every configured plugin, in plugin-list order, into @plugin blocks."""
    blocks = []
    daisyui_done = False
    plugins = config.get('plugins') if isinstance(config, dict) else None
    for descriptor in plugins if isinstance(plugins, list) else []:
        name = _plugin_name(descriptor)
        module = descriptor.get('module') if isinstance(descriptor, dict) else None
        identity = f'{name} {module or ""}'
        if TYPOGRAPHY_IDENTIFIER in identity:
            blocks.append(convert_typography(config, warnings))
        elif DAISYUI_PLUGIN in identity:
            if not daisyui_done:
                blocks.append(convert_daisyui(config, warnings) or [f'@plugin "{DAISYUI_PLUGIN}";'])
                daisyui_done = True
        elif module:
            blocks.append([f'@plugin "{module}";'])
        else:
            _warn(warnings, f"Plugin '{name}' could not be mapped to a module and was skipped")
    if not daisyui_done:
        daisyui = convert_daisyui(config, warnings)
        if daisyui:
            blocks.append(daisyui)
    return blocks


def _warn(warnings: Optional[List[str]], message: str) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
