"""
bridgedocs/core/paths.py: Centralized Path Configuration

Single source of truth for directory paths. Every module imports from here
instead of computing its own DATA_DIR.
"""

import os
import logging

log = logging.getLogger("bridgedocs.paths")

# ── Project Root ──────────────────────────────────────────────────────────────
_THIS_FILE = os.path.abspath(__file__)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(_THIS_FILE)))

_DEFAULT_DATA_DIR = os.path.join(PROJECT_ROOT, "data")


# Priority: BRIDGEDOCS_DATA_DIR env → project data/
def _resolve_data_dir() -> str:
    """Find the data directory (logs, optional config)."""
    env_dir = os.environ.get("BRIDGEDOCS_DATA_DIR", "")
    if env_dir:
        return env_dir
    return _DEFAULT_DATA_DIR


DATA_DIR = _resolve_data_dir()
LOG_DIR = os.path.join(DATA_DIR, "logs")

# ── Static assets ────────────────────────────────────────────────────────────
ASSETS_DIR = os.path.join(PROJECT_ROOT, "assets")
DEFAULT_LOGO_PATH = os.path.join(ASSETS_DIR, "logo.png")

# ── Optional JSON config (company block, editor defaults) ────────────────────
CONFIG_PATH = os.environ.get("BRIDGEDOCS_CONFIG",
                             os.path.join(PROJECT_ROOT, "bridgedocs_config.json"))

os.makedirs(DATA_DIR, exist_ok=True)


def validate_paths() -> dict:
    """Runtime validation; call at app startup to catch path issues early.

    Returns:
        {"ok": bool, "errors": [str], "warnings": [str], "resolved": {name: path}}
    """
    result = {"ok": True, "errors": [], "warnings": [], "resolved": {}}

    checks = {
        "PROJECT_ROOT": (PROJECT_ROOT, True),
        "DATA_DIR": (DATA_DIR, True),
        "ASSETS_DIR": (ASSETS_DIR, False),
        "DEFAULT_LOGO_PATH": (DEFAULT_LOGO_PATH, False),
        "CONFIG_PATH": (CONFIG_PATH, False),
    }

    for name, (path, required) in checks.items():
        result["resolved"][name] = path
        if not os.path.exists(path):
            if required:
                result["errors"].append(f"{name} not found: {path}")
                result["ok"] = False
            else:
                result["warnings"].append(f"{name} not found: {path}")

    # DATA_DIR must be writable for the rotating log file
    test_file = os.path.join(DATA_DIR, ".write_test")
    try:
        with open(test_file, "w") as f:
            f.write("ok")
        os.remove(test_file)
    except OSError as e:
        result["errors"].append(f"DATA_DIR not writable: {e}")
        result["ok"] = False

    return result
