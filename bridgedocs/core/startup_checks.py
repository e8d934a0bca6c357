"""
bridgedocs/core/startup_checks.py: Runtime Self-Test on App Boot

Runs when the app starts and logs what it finds:

  1. Path resolution (DATA_DIR writable, assets present)
  2. Config file parseable
  3. Logo loadable (text header is used otherwise)
  4. Access code changed from the built-in default
  5. Route integrity (no duplicate endpoints)
"""

import json
import logging
import os

log = logging.getLogger("bridgedocs.startup")


def run_startup_checks(app=None) -> dict:
    """Run all startup validation checks. Call from app.py after blueprint registration.

    Returns:
        {"passed": int, "failed": int, "warnings": int, "details": [...]}
    """
    results = {"passed": 0, "failed": 0, "warnings": 0, "details": []}

    def _pass(msg):
        results["passed"] += 1
        results["details"].append(("PASS", msg))
        log.info("PASS %s", msg)

    def _fail(msg):
        results["failed"] += 1
        results["details"].append(("FAIL", msg))
        log.error("STARTUP CHECK FAILED: %s", msg)

    def _warn(msg):
        results["warnings"] += 1
        results["details"].append(("WARN", msg))
        log.warning("%s", msg)

    # ── 1. Path Validation ────────────────────────────────────────────────────
    try:
        from bridgedocs.core.paths import validate_paths, DATA_DIR
        path_result = validate_paths()
        if path_result["ok"]:
            _pass(f"All paths valid (DATA_DIR={DATA_DIR})")
        else:
            for err in path_result["errors"]:
                _fail(err)
        for warn in path_result.get("warnings", []):
            _warn(warn)
    except Exception as e:
        _fail(f"Path validation error: {e}")

    # ── 2. Config Integrity ───────────────────────────────────────────────────
    try:
        from bridgedocs.core.paths import CONFIG_PATH
        if os.path.exists(CONFIG_PATH):
            with open(CONFIG_PATH) as f:
                cfg = json.load(f)
            unknown = [k for k in cfg if k not in ("company", "defaults")]
            if unknown:
                _warn(f"Config has unused keys: {unknown}")
            else:
                _pass(f"Config valid ({CONFIG_PATH})")
        else:
            _pass("No config file, using built-in company block")
    except json.JSONDecodeError as e:
        _fail(f"Config is not valid JSON: {e}")
    except Exception as e:
        _warn(f"Config check error: {e}")

    # ── 3. Logo ───────────────────────────────────────────────────────────────
    try:
        from bridgedocs.core.config import get_logo_source
        src = get_logo_source()
        if src.startswith(("http://", "https://")):
            _pass(f"Logo from URL {src} (loaded at export time)")
        elif os.path.exists(src):
            _pass(f"Logo found at {src}")
        else:
            _warn(f"Logo not found at {src}; PDFs will use the text header")
    except Exception as e:
        _warn(f"Logo check skipped: {e}")

    # ── 4. Access code ────────────────────────────────────────────────────────
    from bridgedocs.core.config import get_access_code, DEFAULT_ACCESS_CODE
    if get_access_code() == DEFAULT_ACCESS_CODE:
        _warn("APP_ACCESS_CODE not set; using the built-in access code")
    else:
        _pass("Access code configured")

    # ── 5. Route Integrity (if app provided) ──────────────────────────────────
    if app:
        try:
            rules = [r for r in app.url_map.iter_rules()
                     if r.endpoint and not r.endpoint.startswith("static")]
            _pass(f"Flask routes registered: {len(rules)}")
            endpoints = [r.endpoint for r in rules]
            dupes = set(e for e in endpoints if endpoints.count(e) > 1)
            if dupes:
                _fail(f"Duplicate route endpoints: {dupes}")
        except Exception as e:
            _warn(f"Route check skipped: {e}")

    # ── Summary ──────────────────────────────────────────────────────────────
    total = results["passed"] + results["failed"] + results["warnings"]
    if results["failed"] > 0:
        log.error("STARTUP: %d/%d checks FAILED, app may not work correctly",
                  results["failed"], total)
    else:
        log.info("STARTUP: All %d checks passed (%d warnings)",
                 results["passed"], results["warnings"])

    return results
