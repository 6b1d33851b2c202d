"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal
import os
from pathlib import Path
from typing import Optional

from ledgercore.domain.constants import (
    DEFAULT_CURRENCY_CODE,
    DEFAULT_MINOR_UNIT,
)
from ledgercore.infrastructure.logging.logger import get_app_logger
from ledgercore.utils.decimal_utils import minor_unit_epsilon
from ledgercore.utils.utils import get_project_root

SUPPORTED_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger engine.

    Attributes:
        backend: Storage backend identifier (sqlalchemy or memory).
        currency_code: ISO code stamped on report metadata.
        minor_unit: Decimal places of the currency; drives epsilon.
        cash_account_codes: Account codes treated as cash. Empty means the
            classification table decides.
        classification_file: Optional JSON file with classification tables.
        snapshot_isolation_level: Isolation level of read snapshots, or None
            to keep the driver default.
    """

    backend: str = "sqlalchemy"
    currency_code: str = DEFAULT_CURRENCY_CODE
    minor_unit: int = DEFAULT_MINOR_UNIT
    cash_account_codes: tuple[str, ...] = ()
    classification_file: Optional[Path] = None
    snapshot_isolation_level: Optional[str] = "REPEATABLE READ"

    @property
    def epsilon(self) -> Decimal:
        """Return the smallest amount treated as an imbalance."""
        return minor_unit_epsilon(self.minor_unit)

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.

        Raises:
            ValueError: If a variable holds an unsupported value.
        """
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported LEDGER_BACKEND '{backend}'. "
                f"Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
            )
        currency_code = (
            os.getenv("LEDGER_CURRENCY", DEFAULT_CURRENCY_CODE).strip().upper()
        )
        minor_unit = cls._parse_minor_unit(os.getenv("LEDGER_MINOR_UNIT"))
        cash_codes = cls._split_codes(os.getenv("LEDGER_CASH_ACCOUNT_CODES"))
        classification_file = None
        raw_file = os.getenv("LEDGER_CLASSIFICATION_FILE")
        if raw_file:
            classification_file = cls._normalize_path(raw_file)
        isolation = os.getenv("LEDGER_SNAPSHOT_ISOLATION", "REPEATABLE READ")
        isolation = isolation.strip().upper() or None
        if isolation == "DEFAULT":
            isolation = None
        return cls(
            backend=backend,
            currency_code=currency_code or DEFAULT_CURRENCY_CODE,
            minor_unit=minor_unit,
            cash_account_codes=cash_codes,
            classification_file=classification_file,
            snapshot_isolation_level=isolation,
        )

    @staticmethod
    def _parse_minor_unit(raw_value: Optional[str]) -> int:
        if raw_value is None or not raw_value.strip():
            return DEFAULT_MINOR_UNIT
        try:
            minor_unit = int(raw_value)
        except ValueError as exc:
            raise ValueError(
                f"LEDGER_MINOR_UNIT must be an integer, got '{raw_value}'"
            ) from exc
        if minor_unit < 0:
            raise ValueError(
                f"LEDGER_MINOR_UNIT must be non-negative, got {minor_unit}"
            )
        return minor_unit

    @staticmethod
    def _split_codes(raw_codes: Optional[str]) -> tuple[str, ...]:
        if not raw_codes:
            return ()
        return tuple(code.strip() for code in raw_codes.split(",") if code.strip())

    @staticmethod
    def _normalize_path(raw_path: str) -> Path:
        """Resolve the classification file path.

        Relative paths are resolved against the project root.

        Args:
            raw_path: Raw file path string.

        Returns:
            Path: Absolute path of the file.
        """
        path = Path(raw_path).expanduser()
        if not path.is_absolute():
            path = get_project_root() / path
        path = path.resolve()
        if not path.exists():
            get_app_logger().warning(
                f"Classification file does not exist at {path}"
            )
        return path


__all__ = ["LedgerSettings", "SUPPORTED_BACKENDS"]
