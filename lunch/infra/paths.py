import os
import sys
from pathlib import Path

# Bundled data files (single source of truth)
PACKAGE_DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
SEED_FILE = PACKAGE_DATA_DIR / 'lunch_list.csv'

DB_FILENAME = 'lunch.db'


def data_dir() -> Path:
    """Return the per-platform application-data directory for the store.

    macOS:   ~/Library/Application Support/Lunch
    Windows: %APPDATA%\\lunch
    other:   $XDG_DATA_HOME/lunch (falls back to ~/.local/share/lunch)
    """
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'Lunch'
    if sys.platform.startswith('win'):
        appdata = os.environ.get('APPDATA')
        base = Path(appdata) if appdata else Path.home() / 'AppData' / 'Roaming'
        return base / 'lunch'
    xdg = os.environ.get('XDG_DATA_HOME')
    base = Path(xdg) if xdg else Path.home() / '.local' / 'share'
    return base / 'lunch'


def db_path() -> Path:
    return data_dir() / DB_FILENAME


__all__ = ['PACKAGE_DATA_DIR', 'SEED_FILE', 'DB_FILENAME', 'data_dir', 'db_path']
