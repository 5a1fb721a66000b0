import sys
import os

def get_base_path():
    """
    Get the base path for resources.
    - If frozen (PyInstaller), returns sys._MEIPASS
    - If dev, returns the project root (src/core/utils/path_helper.py -> root)
    """
    if getattr(sys, 'frozen', False):
        return sys._MEIPASS
    current_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.abspath(os.path.join(current_dir, "..", "..", ".."))

def get_resource_path(relative_path):
    """
    Get absolute path to a bundled resource (read-only), e.g. database/schema_sqlite.sql.
    """
    return os.path.join(get_base_path(), relative_path)
