"""
Application configuration.

Env vars win, then the optional JSON config file (BRIDGEDOCS_CONFIG or
bridgedocs_config.json at the project root), then the built-in defaults.

    {
      "company": {"name": "...", "phone": "..."},
      "defaults": {"tax_rate": 8.25, "validity_days": 14}
    }
"""

import os
import json
import logging
from copy import deepcopy

from bridgedocs.core.paths import CONFIG_PATH, DEFAULT_LOGO_PATH

log = logging.getLogger("bridgedocs.config")

COMPANY = {
    "name":       "JH Bridge Translation",
    "legal_name": "JH Bridge Translation Services",
    "address":    "500 Grossman Dr, Braintree, MA 02184, United States",
    "phone":      "+1 (774) 223 8771",
    "email":      "jhbridgetranslation@gmail.com",
    "web":        "jhbridgetranslation.com",
    "slogan":     "Breaking Language Barriers for Global Success",
    "tagline":    ["Breaking Language Barriers", "for Global Success"],
}

DEFAULTS = {
    "tax_enabled":   True,
    "tax_rate":      10,
    "tax_label":     "Tax",
    "validity_days": 30,
    "due_days":      30,
}

DEFAULT_ACCESS_CODE = "zxcvbnm"


def load_config(path: str = "") -> dict:
    """Merge the JSON config file over the built-in company/defaults blocks.

    A missing or unreadable file is not an error; the built-ins are used.
    """
    config = {"company": deepcopy(COMPANY), "defaults": deepcopy(DEFAULTS)}
    path = path or CONFIG_PATH
    if not os.path.exists(path):
        return config
    try:
        with open(path, "r") as f:
            file_config = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        log.warning("Config %s unreadable, using defaults: %s", path, e)
        return config
    for section in ("company", "defaults"):
        overrides = file_config.get(section)
        if isinstance(overrides, dict):
            config[section].update(overrides)
    return config


def get_access_code() -> str:
    return os.environ.get("APP_ACCESS_CODE", DEFAULT_ACCESS_CODE)


def get_logo_source() -> str:
    """Logo path or http(s) URL used at export time."""
    return os.environ.get("LOGO_SOURCE", DEFAULT_LOGO_PATH)
