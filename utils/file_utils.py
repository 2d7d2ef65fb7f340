"""
File Utilities Module
Locating and reading the config and stylesheet a migration starts from.
"""

from pathlib import Path
from typing import List, Optional

# Tailwind v3 config file names, in lookup order
CONFIG_FILENAMES = [
    'tailwind.config.ts',
    'tailwind.config.js',
    'tailwind.config.mjs',
    'tailwind.config.cjs',
]
STYLESHEET_EXTENSIONS = {'.css', '.pcss', '.postcss'}
TAILWIND_DIRECTIVES = ('@tailwind ', '@tailwindcss/', "'tailwindcss/", '"tailwindcss/')


def normalize_path(path: str | Path) -> Path:
    """Convert string path to normalized Path object."""
    return Path(path).resolve()


def is_hidden(name: str) -> bool:
    return name.startswith('.')


def find_config_file(directory: str | Path) -> Optional[Path]:
    """Return the first Tailwind config file found directly in `directory`."""
    base_path = normalize_path(directory)
    for name in CONFIG_FILENAMES:
        candidate = base_path / name
        if candidate.is_file():
            return candidate
    return None


def find_stylesheets(directory: str | Path) -> List[Path]:
    """
    Recursively collect stylesheets under `directory`.

    Hidden directories and node_modules are skipped.
    """
    base_path = normalize_path(directory)
    matching_files = []
    for file_path in sorted(base_path.rglob('*')):
        relative_parts = file_path.relative_to(base_path).parts
        if any(is_hidden(part) or part == 'node_modules' for part in relative_parts):
            continue
        if file_path.is_file() and file_path.suffix.lower() in STYLESHEET_EXTENSIONS:
            matching_files.append(file_path)
    return matching_files


def find_entry_stylesheet(directory: str | Path) -> Optional[Path]:
    """Return the first stylesheet under `directory` that carries Tailwind directives."""
    for file_path in find_stylesheets(directory):
        content = read_file_content(file_path)
        if any(marker in content for marker in TAILWIND_DIRECTIVES):
            return file_path
    return None


def read_file_content(file_path: str | Path) -> str:
    """
    Read file content as text.

    Args:
        file_path: Path to the file to read

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        # Fallback to system default encoding if UTF-8 fails
        with open(file_path, 'r') as f:
            return f.read()


def write_file_content(file_path: str | Path, content: str) -> None:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
