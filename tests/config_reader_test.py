import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.js_object_parser import RawExpression
from tailwind.config_reader import (
    ExtractionError,
    TailwindConfigReader,
    parse_tailwind_config,
    stringify_config,
)

SAMPLE_CONFIG = """import type { Config } from 'tailwindcss'
import typography from '@tailwindcss/typography'
import daisyui from 'daisyui'

export default {
  content: ['./src/**/*.{html,js,svelte,ts}'],
  darkMode: 'class',
  theme: {
    screens: {
      sm: '640px',
      md: '768px',
      lg: '1024px',
    },
    extend: {
      colors: {
        brand: '#123456',
      },
      typography: {
        DEFAULT: {
          css: {
            maxWidth: null,
            img: { margin: '0' },
          },
        },
      },
    },
  },
  plugins: [typography, daisyui, require('@tailwindcss/forms')],
  daisyui: {
    themes: ['light', 'dark', 'cupcake'],
  },
} satisfies Config
"""

def test_extracts_theme_screens_in_order():
    config = parse_tailwind_config(SAMPLE_CONFIG)
    screens = config['theme']['screens']
    assert screens == {'sm': '640px', 'md': '768px', 'lg': '1024px'}
    assert list(screens) == ['sm', 'md', 'lg']

def test_extracts_typography_overrides():
    config = parse_tailwind_config(SAMPLE_CONFIG)
    css = config['theme']['extend']['typography']['DEFAULT']['css']
    assert css == {'maxWidth': None, 'img': {'margin': '0'}}

def test_extracts_plugins_with_modules():
    config = parse_tailwind_config(SAMPLE_CONFIG)
    assert config['plugins'] == [
        {'name': 'typography', 'module': '@tailwindcss/typography'},
        {'name': 'daisyui', 'module': 'daisyui'},
        {'name': "require('@tailwindcss/forms')", 'module': '@tailwindcss/forms'},
    ]

def test_extracts_daisyui_settings():
    config = parse_tailwind_config(SAMPLE_CONFIG)
    assert config['daisyui'] == {'themes': ['light', 'dark', 'cupcake']}

def test_unknown_keys_are_preserved():
    config = parse_tailwind_config(SAMPLE_CONFIG)
    assert config['content'] == ['./src/**/*.{html,js,svelte,ts}']
    assert config['darkMode'] == 'class'
    assert config['theme']['extend']['colors'] == {'brand': '#123456'}

def test_valid_config_has_no_warnings():
    warnings = []
    parse_tailwind_config(SAMPLE_CONFIG, warnings)
    assert warnings == []

def test_missing_anchor_raises():
    with pytest.raises(ExtractionError) as excinfo:
        parse_tailwind_config("module.exports = { theme: { screens: { sm: '640px' } } }")
    assert str(excinfo.value) == 'Failed to parse Tailwind config: Could not find Tailwind config object'

def test_missing_anchor_attempts_no_field(monkeypatch):
    reader = TailwindConfigReader()
    called = []
    monkeypatch.setattr(reader, 'extract_theme', lambda raw: called.append(raw))
    monkeypatch.setattr(reader, 'extract_plugins', lambda raw: called.append(raw))
    monkeypatch.setattr(reader, 'extract_daisyui', lambda raw: called.append(raw))
    with pytest.raises(ExtractionError):
        reader.read_config('export default { theme: {} }')
    assert called == []

def test_malformed_daisyui_falls_back_to_default_themes():
    source = """export default {
      theme: { screens: { sm: '640px' } },
      daisyui: { themes: ['light', 'dark'], darkTheme: },
    } satisfies Config"""
    warnings = []
    config = parse_tailwind_config(source, warnings)
    assert config['daisyui'] == {'themes': True}
    assert config['theme']['screens'] == {'sm': '640px'}
    assert any('daisyui' in warning for warning in warnings)

def test_unsupported_themes_value_falls_back():
    reader = TailwindConfigReader()
    config = reader.read_config("export default { daisyui: { themes: allThemes } } satisfies Config")
    assert config['daisyui']['themes'] is True
    assert len(reader.warnings) == 1

def test_typography_function_form():
    source = """export default {
      theme: {
        extend: {
          typography: ({ theme }) => ({
            DEFAULT: {
              css: {
                color: theme('colors.gray.700'),
                a: { textDecoration: 'none' },
              },
            },
          }),
        },
      },
    } satisfies Config"""
    config = parse_tailwind_config(source)
    css = config['theme']['extend']['typography']['DEFAULT']['css']
    assert css['color'] == RawExpression("theme('colors.gray.700')")
    assert css['a'] == {'textDecoration': 'none'}

def test_typography_without_default_css_degrades():
    source = "export default { theme: { extend: { typography: { lg: { css: {} } } } } } satisfies Config"
    warnings = []
    config = parse_tailwind_config(source, warnings)
    assert config['theme']['extend']['typography'] == {'DEFAULT': {'css': {}}}
    assert len(warnings) == 1

def test_numeric_screen_is_stringified_with_warning():
    warnings = []
    config = parse_tailwind_config("export default { theme: { screens: { sm: 640 } } } satisfies Config", warnings)
    assert config['theme']['screens'] == {'sm': '640'}
    assert len(warnings) == 1

def test_plugin_with_embedded_commas_is_one_descriptor():
    source = "export default { plugins: [require('plugin-x')({ a: 1, b: 2 }), myPlugin] } satisfies Config"
    warnings = []
    config = parse_tailwind_config(source, warnings)
    assert config['plugins'] == [
        {'name': "require('plugin-x')({ a: 1, b: 2 })", 'module': 'plugin-x'},
        {'name': 'myPlugin'},
    ]
    assert warnings == []

def test_require_binding_resolves_identifier():
    source = """const forms = require('@tailwindcss/forms')
    export default { plugins: [forms({ strategy: 'class' })] } satisfies Config"""
    config = parse_tailwind_config(source)
    assert config['plugins'][0]['module'] == '@tailwindcss/forms'

def test_unreadable_property_keeps_earlier_ones():
    source = "export default { theme: { screens: { sm: '640px' } }, plugins: [foo( ], daisyui: {} } satisfies Config"
    warnings = []
    config = parse_tailwind_config(source, warnings)
    assert config['theme']['screens'] == {'sm': '640px'}
    assert 'plugins' not in config
    assert 'daisyui' not in config
    assert len(warnings) == 1

def test_mapping_input_is_stringified():
    mapping = {
        'theme': {'screens': {'sm': '640px'}},
        'plugins': ['@tailwindcss/typography'],
        'daisyui': {'themes': True},
    }
    assert stringify_config(mapping).startswith('export default {')
    config = parse_tailwind_config(mapping)
    assert config['theme']['screens'] == {'sm': '640px'}
    assert config['plugins'] == [{'name': '@tailwindcss/typography', 'module': '@tailwindcss/typography'}]
    assert config['daisyui'] == {'themes': True}
