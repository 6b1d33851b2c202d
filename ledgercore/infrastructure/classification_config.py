"""Loader for per-tenant classification tables.

The file is JSON shaped as::

    {
        "default": [{"prefix": "10", "section": "assets",
                     "subsection": "current_assets", "is_cash": true}, ...],
        "tenants": {"tenant-a": [...]}
    }

Both keys are optional; a missing `default` keeps the built-in table.
"""

import json
from pathlib import Path

from ledgercore.domain.services.classification import (
    DEFAULT_CLASSIFICATION_TABLE,
    ClassificationRegistry,
    ClassificationTable,
)
from ledgercore.infrastructure.logging.logger import get_app_logger


def load_classification_registry(
    path: Path | None,
    logger=None,
) -> ClassificationRegistry:
    """Build the classification registry from a JSON file.

    Args:
        path: Location of the JSON file, or None for the built-in table.
        logger: Optional logger; defaults to the app logger.

    Returns:
        ClassificationRegistry: Registry with the default and tenant tables.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file content is not a valid classification config.
    """
    if path is None:
        return ClassificationRegistry()
    logger = logger or get_app_logger()
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Classification file {path} is not valid JSON: {exc}"
        ) from exc
    if not isinstance(payload, dict):
        raise ValueError(
            f"Classification file {path} must contain a JSON object"
        )

    default_rows = payload.get("default")
    default = (
        ClassificationTable.from_mapping(default_rows)
        if default_rows is not None
        else DEFAULT_CLASSIFICATION_TABLE
    )
    tenants = payload.get("tenants") or {}
    if not isinstance(tenants, dict):
        raise ValueError(
            f"'tenants' in {path} must map tenant ids to rule lists"
        )
    tenant_tables = {
        str(tenant_id): ClassificationTable.from_mapping(rows)
        for tenant_id, rows in tenants.items()
    }
    logger.info(
        f"Loaded classification config from {path}: "
        f"{len(default.rules)} default rules, "
        f"{len(tenant_tables)} tenant tables"
    )
    return ClassificationRegistry(default=default, tenant_tables=tenant_tables)


__all__ = ["load_classification_registry"]
