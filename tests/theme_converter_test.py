import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.js_object_parser import RawExpression
from core.theme_converter import (
    convert_color,
    convert_screens,
    convert_theme,
    convert_theme_colors,
    rewrite_color_variables,
)

def test_convert_screens_one_line_per_entry_in_order():
    screens = {'xs': '480px', 'sm': '640px', '2xl': '1536px'}
    assert convert_screens(screens) == [
        '@custom-media --xs (min-width: 480px);',
        '@custom-media --sm (min-width: 640px);',
        '@custom-media --2xl (min-width: 1536px);',
    ]

def test_convert_theme_absent_or_empty():
    assert convert_theme(None) == []
    assert convert_theme({}) == []
    assert convert_theme(RawExpression('baseTheme')) == []

def test_convert_theme_uses_screens():
    assert convert_theme({'screens': {'md': '768px'}, 'extend': {}}) == ['@custom-media --md (min-width: 768px);']

def test_convert_color_passes_oklch_through():
    value = 'oklch(70% 0.1 200)'
    assert convert_color(value) == value
    assert convert_color(convert_color(value)) == value

def test_convert_color_leaves_other_formats():
    assert convert_color('#fff') == '#fff'
    assert convert_color(' rgb(0 0 0) ') == 'rgb(0 0 0)'

def test_convert_color_rewrites_daisyui_variables():
    assert convert_color('oklch(var(--p))') == 'var(--color-primary)'

def test_rewrite_color_variables():
    css = 'color: oklch(var(--bc)); border-color: oklch(var(--custom));'
    assert rewrite_color_variables(css) == 'color: var(--color-base-content); border-color: var(--color-custom);'
    assert rewrite_color_variables(rewrite_color_variables(css)) == rewrite_color_variables(css)

def test_convert_theme_colors():
    theme = {
        'colors': {'brand': '#123', 'gray': {'DEFAULT': '#888', '100': '#f5f5f5'}},
        'extend': {'colors': {'accent': 'oklch(70% 0.2 30)'}},
    }
    assert convert_theme_colors(theme) == [
        '@theme {',
        '  --color-brand: #123;',
        '  --color-gray: #888;',
        '  --color-gray-100: #f5f5f5;',
        '  --color-accent: oklch(70% 0.2 30);',
        '}',
    ]

def test_convert_theme_colors_skips_expressions():
    warnings = []
    theme = {'extend': {'colors': {'...colors': RawExpression('colors'), 'brand': RawExpression('brandColor')}}}
    assert convert_theme_colors(theme, warnings) == []
    assert len(warnings) == 2

def test_convert_theme_colors_without_colors():
    assert convert_theme_colors({'screens': {'sm': '640px'}}) == []

def test_convert_theme_colors_merges_extended_shades():
    theme = {
        'colors': {'gray': {'100': '#f5f5f5', '200': '#eee'}},
        'extend': {'colors': {'gray': {'200': '#ddd', '900': '#111'}}},
    }
    assert convert_theme_colors(theme) == [
        '@theme {',
        '  --color-gray-100: #f5f5f5;',
        '  --color-gray-200: #ddd;',
        '  --color-gray-900: #111;',
        '}',
    ]
    assert theme['colors']['gray'] == {'100': '#f5f5f5', '200': '#eee'}
