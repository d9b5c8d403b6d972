"""
Centralized constants for the cell text renderer.
All layout magic numbers and glyphs live here.
"""
import os

# ===========================================
# LAYOUT
# ===========================================
DEFAULT_WIDTH = 80                    # character cells
RAW_RENDERER_WIDTH = 80               # reported by the whitespace-collapsing backend
MIN_WIDTH = 1

# ===========================================
# BORDER GLYPHS
# ===========================================
BORDER_HORIZONTAL = '─'
BORDER_VERTICAL = '│'
BORDER_JOIN_BELOW = '┬'               # vertical rule continues downwards
BORDER_JOIN_ABOVE = '┴'               # vertical rule arrives from above
BORDER_JOIN_CROSS = '┼'

# ===========================================
# BACKENDS
# ===========================================
DEFAULT_BACKEND = 'text'
SUPPORTED_BACKENDS = ['text', 'raw']

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = os.environ.get('CELLTEXT_LOG_LEVEL', 'INFO')
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = os.environ.get('CELLTEXT_LOG_FILE', '')   # empty: console only
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
