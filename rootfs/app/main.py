"""
Farm Catalog

Entry point. Loads the config, the templates and the product catalog once,
then serves the catalog pages until interrupted.
"""

import sys

from version import VERSION
from logging_util import log, set_level
from config import load_config
from config_validator import ConfigValidator
from errors import FarmCatalogError
from web import AppContext, WebServer


def main(argv=None) -> int:
    log("info", "=" * 60)
    log("info", f"  Farm Catalog v{VERSION}")
    log("info", "=" * 60)

    cfg = load_config(argv[0] if argv else None)

    validator = ConfigValidator()
    results = validator.validate(cfg)
    for r in results:
        level = "error" if r.severity == "critical" else "warning"
        hint = f" ({r.suggestion})" if r.suggestion else ""
        log(level, f"Config {r.field}: {r.message}{hint}")
    if validator.has_critical(results):
        log("error", "Invalid configuration, not starting")
        return 1
    validator.apply_safe_defaults(cfg, results)

    set_level(cfg.log_level)
    log("info", f"Config ({cfg.source}): host={cfg.host}, port={cfg.port}, data={cfg.data_path}")

    try:
        ctx = AppContext.build(cfg)
    except FarmCatalogError as e:
        log("error", f"Startup failed: {e}")
        return 1

    log("info", f"Slugs: {', '.join(ctx.catalog.slugs)}")

    web = WebServer(ctx)
    try:
        web.serve_forever()
    except KeyboardInterrupt:
        log("info", "Interrupted, shutting down")
    finally:
        web.shutdown()
    return 0


def run():
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
