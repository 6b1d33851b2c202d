"""CLI adapter to create the ledger tables."""

from ledgercore.infrastructure.container import build_database_adapter
from ledgercore.infrastructure.ledger_schema import create_ledger_schema
from ledgercore.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create the ledger tables in the configured database."""
    logger = get_app_logger()
    engine = build_database_adapter().get_ledger_engine()
    create_ledger_schema(engine)
    logger.info(f"Ledger schema ready on {engine.url}")
    print("Ledger schema created (existing tables were kept).")


if __name__ == "__main__":  # pragma: no cover
    main()
