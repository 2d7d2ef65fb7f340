"""
CSS Sectionizer Module
Splits a Tailwind v3 stylesheet into import, base, components, utilities and
custom sections, and mines the base and components sections for rules.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import tinycss2

logger = logging.getLogger(__name__)

IMPORT_DIRECTIVE = '@import'
SECTION_MARKERS = {
    'base': ('@tailwindcss/base', '@tailwind base'),
    'components': ('@tailwindcss/components', '@tailwind components'),
    'utilities': ('@tailwindcss/utilities', '@tailwind utilities'),
}
DEFAULT_SECTION = 'custom'
COMPONENT_PATTERN = re.compile(r'\.([a-zA-Z0-9_-]+)\s*{([^}]*)}')
COMMENT_PATTERN = re.compile(r'/\*[\s\S]*?\*/')


@dataclass
class SectionedCSS:
    imports: List[str] = field(default_factory=list)
    base: List[str] = field(default_factory=list)
    components: List[str] = field(default_factory=list)
    utilities: List[str] = field(default_factory=list)
    custom: List[str] = field(default_factory=list)

    def text(self, section: str) -> str:
        """Join the lines of one section back into stylesheet text."""
        return '\n'.join(getattr(self, section))


@dataclass
class BaseRule:
    selector: str
    declarations: List[str] = field(default_factory=list)
    # At-rules (@font-face, @media, ...) are carried as serialized source
    raw: Optional[str] = None


def section_for_marker(line: str) -> Optional[str]:
    for section, markers in SECTION_MARKERS.items():
        if any(marker in line for marker in markers):
            return section
    return None


def tag_lines(css_str: str) -> Iterator[Tuple[str, str]]:
    """
    Tag every line with the section it belongs to.

    Import lines are always tagged 'imports'. A marker line switches the
    current section for the lines after it and is not yielded. Everything
    else belongs to the current section, starting with 'custom'.
    """
    current_section = DEFAULT_SECTION
    for line in css_str.splitlines():
        if line.lstrip().startswith(IMPORT_DIRECTIVE):
            yield 'imports', line
            continue
        marker_section = section_for_marker(line)
        if marker_section:
            logger.debug(f"Section marker found, switching to '{marker_section}': {line.strip()}")
            current_section = marker_section
            continue
        yield current_section, line


def parse_css_file(css_str: str) -> SectionedCSS:
    """Split stylesheet text into SectionedCSS. Never fails."""
    data = SectionedCSS()
    for section, line in tag_lines(css_str):
        getattr(data, section).append(line)
    logger.debug(
        f"Sectioned CSS: {len(data.imports)} import, {len(data.base)} base, "
        f"{len(data.components)} components, {len(data.utilities)} utilities, "
        f"{len(data.custom)} custom lines")
    return data


def parse_declarations(content, selector: str, warnings: Optional[List[str]] = None) -> List[str]:
    """
    Read a rule body (text or tinycss2 tokens) into `name: value` strings.

    Nested at-rules such as @apply are kept as written, without the trailing
    semicolon.
    """
    declarations = []
    for decl in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        if decl.type == 'declaration':
            value = tinycss2.serialize(decl.value).strip()
            declarations.append(f"{decl.name}: {value}{' !important' if decl.important else ''}")
        elif decl.type == 'at-rule':
            declarations.append(tinycss2.serialize([decl]).strip().rstrip(';'))
        else:
            _warn(warnings, f"Could not read part of the rule '{selector}'; it was dropped")
    return declarations


def extract_base_rules(css: str, warnings: Optional[List[str]] = None) -> List[BaseRule]:
    """
    Parse the base section into rules using tinycss2.

    html, ::selection and the scrollbar selectors are the usual content, but
    every top-level rule is returned in source order.
    """
    rules = []
    stylesheet = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    for node in stylesheet:
        if node.type == 'qualified-rule':
            selector = tinycss2.serialize(node.prelude).strip()
            rules.append(BaseRule(selector=selector,
                                  declarations=parse_declarations(node.content, selector, warnings)))
        elif node.type == 'at-rule':
            rules.append(BaseRule(selector=f'@{node.at_keyword}', raw=tinycss2.serialize([node]).strip()))
        elif node.type == 'error':
            _warn(warnings, f"Base layer contains unreadable CSS ({node.message}); it was dropped")
    logger.debug(f"Extracted base rules: {[rule.selector for rule in rules]}")
    return rules


def extract_components(css: str, warnings: Optional[List[str]] = None) -> Dict[str, str]:
    """
    Extract `.class-name { rules }` pairs from the components section.

    The matcher does not understand nested braces, so nested rule blocks are
    split at the first closing brace. A class defined twice keeps its last
    definition.
    """
    components = {}
    for match in COMPONENT_PATTERN.finditer(css):
        class_name, rules = match.group(1), match.group(2)
        if class_name in components:
            _warn(warnings, f"Component '.{class_name}' is defined more than once; the last definition was kept")
        components[class_name] = rules.strip()
    leftover = COMMENT_PATTERN.sub('', COMPONENT_PATTERN.sub('', css)).strip()
    if leftover:
        _warn(warnings, 'Components section contains CSS that is not a simple .class rule; it was not carried over')
    return components


def _warn(warnings: Optional[List[str]], message: str) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
