"""
Tailwind Config Reader Module
Extracts theme, plugin and daisyUI settings from a Tailwind v3 configuration
file without evaluating it.
"""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from core.js_object_parser import (
    JSSyntaxError,
    RawExpression,
    iter_elements,
    iter_properties,
    parse_js_literal,
)

logger = logging.getLogger(__name__)

CONFIG_ANCHOR = re.compile(r'export\s+default\s*(\{[\s\S]*\})\s*satisfies\s+Config\b')
IMPORT_BINDING = re.compile(r'''import\s+(?:\*\s+as\s+)?([A-Za-z_$][\w$]*)\s+from\s+['"]([^'"]+)['"]''')
REQUIRE_BINDING = re.compile(
    r'''(?:const|let|var|import)\s+([A-Za-z_$][\w$]*)\s*=\s*require\(\s*['"]([^'"]+)['"]\s*\)''')
REQUIRE_CALL = re.compile(r'''^require\(\s*['"]([^'"]+)['"]\s*\)''')
LEADING_IDENTIFIER = re.compile(r'^([A-Za-z_$][\w$]*)')
ARROW_FUNCTION = re.compile(r'^(?:\([^)]*\)|[A-Za-z_$][\w$]*)\s*=>\s*')

DEFAULT_DAISYUI = {'themes': True}


class ExtractionError(ValueError):
    """Raised when no Tailwind config object can be located in the source."""


class TailwindConfigReader:
    def __init__(self):
        self.config = {}
        self.warnings = []
        self.bindings = {}

    def read_config(self, source: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
        """Extract a best-effort config dict from tailwind.config source text."""
        if isinstance(source, Mapping):
            source = stringify_config(source)
        self.config = {}
        self.warnings = []
        match = CONFIG_ANCHOR.search(source)
        if not match:
            raise ExtractionError('Could not find Tailwind config object')
        self.bindings = self.collect_bindings(source)
        logger.debug(f"Resolved module bindings: {self.bindings}")

        for key, raw in self._properties(match.group(1), 'the config object'):
            if key == 'theme':
                self.config['theme'] = self.extract_theme(raw)
            elif key == 'plugins':
                plugins = self.extract_plugins(raw)
                if plugins is not None:
                    self.config['plugins'] = plugins
            elif key == 'daisyui':
                self.config['daisyui'] = self.extract_daisyui(raw)
            else:
                self.config[key] = self._parse_opaque(raw, key)
        logger.debug(f"Extracted config keys: {list(self.config.keys())}")
        return self.config

    def collect_bindings(self, source: str) -> Dict[str, str]:
        """Map identifiers bound by import/require statements to module names."""
        bindings = {}
        for pattern in (IMPORT_BINDING, REQUIRE_BINDING):
            for name, module in pattern.findall(source):
                bindings[name] = module
        return bindings

    def extract_theme(self, raw: str) -> Union[Dict[str, Any], RawExpression]:
        if not raw.startswith('{'):
            self._warn(f"theme is not an object literal ({_preview(raw)}); screens and typography were not converted")
            return RawExpression(raw)
        theme = {}
        for key, value in self._properties(raw, 'theme'):
            if key == 'screens':
                screens = self.extract_screens(value)
                if screens is not None:
                    theme['screens'] = screens
            elif key == 'extend':
                theme['extend'] = self.extract_extend(value)
            else:
                theme[key] = self._parse_opaque(value, f'theme.{key}')
        return theme

    def extract_screens(self, raw: str) -> Optional[Dict[str, str]]:
        parsed = self._parse_strict(raw, 'theme.screens')
        if parsed is None:
            return None
        if not isinstance(parsed, dict):
            self._warn(f"theme.screens is not an object literal ({_preview(raw)}); custom media queries were skipped")
            return None
        screens = {}
        for name, value in parsed.items():
            if isinstance(value, str):
                screens[name] = value
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                self._warn(f"Screen '{name}' has a numeric value; it was converted to the string '{value}'")
                screens[name] = str(value)
            elif isinstance(value, dict) and isinstance(value.get('min'), str):
                screens[name] = value['min']
            else:
                self._warn(f"Screen '{name}' uses an unsupported value and was skipped")
        return screens

    def extract_extend(self, raw: str) -> Union[Dict[str, Any], RawExpression]:
        if not raw.startswith('{'):
            self._warn(f"theme.extend is not an object literal ({_preview(raw)}) and was not converted")
            return RawExpression(raw)
        extend = {}
        for key, value in self._properties(raw, 'theme.extend'):
            if key == 'typography':
                extend['typography'] = self.extract_typography(value)
            else:
                extend[key] = self._parse_opaque(value, f'theme.extend.{key}')
        return extend

    def extract_typography(self, raw: str) -> Dict[str, Any]:
        """Read typography overrides, including the ({ theme }) => ({...}) form."""
        arrow = ARROW_FUNCTION.match(raw)
        body = raw[arrow.end():].strip() if arrow else raw
        if arrow and body.startswith('(') and body.endswith(')'):
            body = body[1:-1].strip()
        typography = self._parse_strict(body, 'theme.extend.typography')
        if isinstance(typography, dict):
            default = typography.get('DEFAULT')
            if isinstance(default, dict) and isinstance(default.get('css'), dict):
                logger.debug(f"Typography config: {json.dumps(default['css'], indent=2, default=str)}")
                return typography
            self._warn('theme.extend.typography has no DEFAULT.css object; typography overrides were skipped')
        elif typography is not None:
            self._warn('theme.extend.typography is not an object literal; typography overrides were skipped')
        return {'DEFAULT': {'css': {}}}

    def extract_daisyui(self, raw: str) -> Dict[str, Any]:
        settings = self._parse_strict(raw, 'daisyui')
        if not isinstance(settings, dict):
            if settings is not None:
                self._warn('daisyui settings are not an object literal')
            self._warn('daisyui settings fell back to the default theme list (themes: true)')
            return dict(DEFAULT_DAISYUI)
        themes = settings.get('themes', True)
        if not isinstance(themes, (bool, str, list)):
            self._warn(f"daisyui.themes has an unsupported value ({_preview(str(themes))}); using themes: true")
            themes = True
        settings['themes'] = themes
        if 'darkTheme' in settings and not isinstance(settings['darkTheme'], str):
            self._warn('daisyui.darkTheme is not a string and was ignored')
            del settings['darkTheme']
        logger.debug(f"daisyui settings: {settings}")
        return settings

    def extract_plugins(self, raw: str) -> Optional[List[Dict[str, str]]]:
        if not raw.startswith('['):
            self._warn(f"plugins is not an array literal ({_preview(raw)}); no plugins were converted")
            return None
        plugins = []
        try:
            for element in iter_elements(raw):
                plugins.append(self.describe_plugin(element))
        except JSSyntaxError as e:
            self._warn(f"Could not read every entry of plugins: {e}; {len(plugins)} plugin(s) were kept")
        return plugins

    def describe_plugin(self, expression: str) -> Dict[str, str]:
        """Build a plugin descriptor, resolving the module name where possible."""
        descriptor = {'name': expression}
        if expression[:1] in ('"', "'"):
            try:
                literal = parse_js_literal(expression)
            except JSSyntaxError:
                literal = None
            if isinstance(literal, str):
                descriptor['name'] = literal
                descriptor['module'] = literal
                return descriptor
        require = REQUIRE_CALL.match(expression)
        if require:
            descriptor['module'] = require.group(1)
            return descriptor
        identifier = LEADING_IDENTIFIER.match(expression)
        if identifier and identifier.group(1) in self.bindings:
            descriptor['module'] = self.bindings[identifier.group(1)]
        return descriptor

    def _properties(self, raw: str, label: str) -> List:
        entries = []
        try:
            for key, value in iter_properties(raw):
                entries.append((key, value))
        except JSSyntaxError as e:
            self._warn(f"Could not read every property of {label}: {e}; later properties were skipped")
        return entries

    def _parse_strict(self, raw: str, label: str) -> Any:
        try:
            return parse_js_literal(raw)
        except JSSyntaxError as e:
            self._warn(f"Could not parse {label}: {e}")
            return None

    def _parse_opaque(self, raw: str, label: str) -> Any:
        try:
            return parse_js_literal(raw)
        except JSSyntaxError as e:
            logger.debug(f"Keeping {label} as raw source: {e}")
            return RawExpression(raw)

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


def _preview(text: str, limit: int = 40) -> str:
    text = ' '.join(text.split())
    return text if len(text) <= limit else text[:limit - 3] + '...'


def stringify_config(config: Mapping[str, Any]) -> str:
    """Render a config mapping in the `export default {...} satisfies Config` shape."""
    return f"export default {json.dumps(config, indent=2, default=str)} satisfies Config;\n"


def parse_tailwind_config(source: Union[str, Mapping[str, Any]],
                          warnings: Optional[List[str]] = None) -> Dict[str, Any]:
    """
    Parse tailwind.config source text (or an already structured mapping).

    Degraded sub-fields are reported through `warnings` when a list is given.
    Raises ExtractionError when the config object itself cannot be found.
    """
    reader = TailwindConfigReader()
    try:
        config = reader.read_config(source)
    except ExtractionError as e:
        raise ExtractionError(f'Failed to parse Tailwind config: {e}') from e
    if warnings is not None:
        warnings.extend(reader.warnings)
    return config
