from takt.infra.ledger.csv_store import CsvLedgerStore
from takt.infra.ledger.store import LedgerStore

__all__ = ["CsvLedgerStore", "LedgerStore"]
