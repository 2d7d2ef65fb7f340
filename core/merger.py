"""
Merger Module
Assembles extracted config and stylesheet sections into Tailwind v4 CSS.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from tailwind.config_reader import ExtractionError, parse_tailwind_config

from .css_sectionizer import (
    BaseRule,
    SectionedCSS,
    extract_base_rules,
    extract_components,
    parse_css_file,
    parse_declarations,
)
from .plugin_converter import convert_plugins
from .theme_converter import convert_theme, convert_theme_colors, rewrite_color_variables

logger = logging.getLogger(__name__)

TAILWIND_IMPORT = '@import "tailwindcss";'
TAILWIND_IMPORT_PATTERN = re.compile(r'''@import\s+(?:url\(\s*)?['"]@?tailwindcss(?:/[\w.-]+)?['"]''')


@dataclass
class ConversionResult:
    css: str = ''
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict:
        return {'css': self.css, 'warnings': list(self.warnings), 'errors': list(self.errors)}


def _trim_blank_lines(lines: List[str]) -> List[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def render_base_layer(rules: List[BaseRule]) -> List[str]:
    if not rules:
        return []
    lines = ['@layer base {']
    for rule in rules:
        if rule.raw is not None:
            lines.extend(f'  {line}' for line in rewrite_color_variables(rule.raw).splitlines())
            continue
        lines.append(f'  {rule.selector} {{')
        lines.extend(f'    {rewrite_color_variables(declaration)};' for declaration in rule.declarations)
        lines.append('  }')
    lines.append('}')
    return lines


def render_components_layer(components: Dict[str, str], warnings: Optional[List[str]] = None) -> List[str]:
    if not components:
        return []
    lines = ['@layer components {']
    for class_name, rules in components.items():
        lines.append(f'  .{class_name} {{')
        declarations = parse_declarations(rewrite_color_variables(rules), f'.{class_name}', warnings)
        lines.extend(f'    {declaration};' for declaration in declarations)
        lines.append('  }')
    lines.append('}')
    return lines


def _section(parts: List[str], comment: str, lines: List[str]) -> None:
    if lines:
        parts.append(f'/* {comment} */')
        parts.extend(lines)
        parts.append('')


def merge_and_convert(config: Dict[str, Any], css: SectionedCSS,
                      warnings: Optional[List[str]] = None) -> ConversionResult:
    """
    Build the v4 stylesheet in a fixed order: pass-through imports, the
    tailwindcss import, base layer, custom media queries and theme, components
    layer, plugins, then the utilities and custom sections as written.

    Any exception while assembling becomes the single entry of `errors` and
    leaves `css` empty.
    """
    result = ConversionResult(warnings=list(warnings or []))
    try:
        parts = []
        passthrough = [line for line in css.imports if not TAILWIND_IMPORT_PATTERN.search(line)]
        _section(parts, 'Imports', passthrough)
        _section(parts, 'Import Tailwind', [TAILWIND_IMPORT])
        _section(parts, 'Base layer', render_base_layer(extract_base_rules(css.text('base'), result.warnings)))
        theme = config.get('theme')
        _section(parts, 'Custom media queries', convert_theme(theme))
        _section(parts, 'Theme', convert_theme_colors(theme, result.warnings))
        _section(parts, 'Components',
                 render_components_layer(extract_components(css.text('components'), result.warnings),
                                         result.warnings))

        plugin_blocks = convert_plugins(config, result.warnings)
        if plugin_blocks:
            parts.append('/* Plugin configurations */')
            for block in plugin_blocks:
                parts.extend(block)
                parts.append('')

        _section(parts, 'Utilities',
                 [rewrite_color_variables(line) for line in _trim_blank_lines(css.utilities)])
        _section(parts, 'Custom styles',
                 [rewrite_color_variables(line) for line in _trim_blank_lines(css.custom)])
        result.css = '\n'.join(parts).rstrip('\n') + '\n'
    except Exception as e:
        logger.error(f"Conversion error: {str(e)}", exc_info=True)
        result.css = ''
        result.errors.append(f'Conversion error: {e}')
    return result


def convert(config_source: Union[str, Mapping[str, Any]], css_source: str) -> ConversionResult:
    """Run the whole pipeline on config source (text or mapping) and stylesheet text."""
    warnings = []
    try:
        config = parse_tailwind_config(config_source, warnings)
    except ExtractionError as e:
        logger.error(str(e))
        return ConversionResult(warnings=warnings, errors=[str(e)])
    css_data = parse_css_file(css_source)
    return merge_and_convert(config, css_data, warnings)
