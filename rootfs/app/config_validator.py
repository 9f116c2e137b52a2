"""
Config validation for Farm Catalog.

Validates the Config dataclass and returns a list of ValidationResult items.
Critical errors block startup (the server is never started).
Non-critical warnings use safe defaults with logged messages.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class ValidationResult:
    """Describes a single config validation issue."""

    field: str        # Config field name, e.g. "port"
    value: object     # Actual value found in the config
    severity: str     # "critical" or "warning"
    message: str      # Human-readable description of the problem
    suggestion: str = ""  # How the user can fix it


class ConfigValidator:
    """Validates a Config object and returns a list of ValidationResult items."""

    def validate(self, cfg) -> List[ValidationResult]:
        """Run all validation rules on cfg and return the results."""
        results: List[ValidationResult] = []

        # --- Critical validations ---
        self._check_port(cfg, results)
        self._check_data_path(cfg, results)
        self._check_template_dir(cfg, results)

        # --- Non-critical validations ---
        self._check_host(cfg, results)
        self._check_log_level(cfg, results)

        return results

    # ------------------------------------------------------------------
    # Critical checks
    # ------------------------------------------------------------------

    def _check_port(self, cfg, results: List[ValidationResult]) -> None:
        val = cfg.port
        # 0 lets the OS pick a free port
        if isinstance(val, bool) or not isinstance(val, int) or not 0 <= val <= 65535:
            results.append(ValidationResult(
                field="port",
                value=val,
                severity="critical",
                message=f"port must be an integer between 0 and 65535, got {val!r}",
                suggestion="The usual development port is 8000",
            ))

    def _check_data_path(self, cfg, results: List[ValidationResult]) -> None:
        val = cfg.data_path
        if not val or not Path(val).is_file():
            results.append(ValidationResult(
                field="data_path",
                value=val,
                severity="critical",
                message=f"Catalog data file not found: {val}",
                suggestion="Point data_path at a JSON array of products",
            ))

    def _check_template_dir(self, cfg, results: List[ValidationResult]) -> None:
        val = cfg.template_dir
        if not val or not Path(val).is_dir():
            results.append(ValidationResult(
                field="template_dir",
                value=val,
                severity="critical",
                message=f"Template directory not found: {val}",
                suggestion=(
                    "The directory must contain template-overview.html, "
                    "template-card.html and template-product.html"
                ),
            ))

    # ------------------------------------------------------------------
    # Non-critical checks (warnings only, safe defaults applied by caller)
    # ------------------------------------------------------------------

    def _check_host(self, cfg, results: List[ValidationResult]) -> None:
        val = cfg.host
        if not isinstance(val, str) or not val.strip():
            results.append(ValidationResult(
                field="host",
                value=val,
                severity="warning",
                message=f"host is {val!r} - falling back to 127.0.0.1",
                suggestion="Use 0.0.0.0 to listen on all interfaces",
            ))

    def _check_log_level(self, cfg, results: List[ValidationResult]) -> None:
        val = cfg.log_level
        if str(val).lower() not in LOG_LEVELS:
            results.append(ValidationResult(
                field="log_level",
                value=val,
                severity="warning",
                message=f"Unknown log_level {val!r} - falling back to info",
                suggestion=f"One of: {', '.join(LOG_LEVELS)}",
            ))

    # ------------------------------------------------------------------
    # Helper
    # ------------------------------------------------------------------

    @staticmethod
    def has_critical(results: List[ValidationResult]) -> bool:
        """Return True if any result has severity 'critical'."""
        return any(r.severity == "critical" for r in results)

    @staticmethod
    def apply_safe_defaults(cfg, results: List[ValidationResult]) -> None:
        """Reset fields that produced warnings to their safe defaults."""
        for r in results:
            if r.severity != "warning":
                continue
            if r.field == "host":
                cfg.host = "127.0.0.1"
            elif r.field == "log_level":
                cfg.log_level = "info"
