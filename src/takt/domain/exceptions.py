class TaktError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RecordValidationError(TaktError):
    """A single ledger row is malformed (columns, timestamp, kind, future date)."""


class LedgerIOError(TaktError):
    """The ledger file could not be read or written, even after recovery."""


class DomainError(TaktError):
    """Caller misuse of the aggregation engine; never recovered from."""


class EmptyLedgerError(DomainError):
    """No records to reconstruct sessions from."""


class UnsupportedPeriodError(DomainError):
    """Aggregation was asked for a period other than day/week/month/year."""

    def __init__(self, period: str) -> None:
        self.period = period
        super().__init__(f"unsupported period: {period}")


class ExternalToolError(TaktError):
    """An editor or git invocation failed."""


class InvalidYearError(DomainError):
    """A grid was requested for a year outside the calendar range."""

    def __init__(self, year: int) -> None:
        self.year = year
        super().__init__(f"invalid year: {year} (must be between 1 and 9999)")
