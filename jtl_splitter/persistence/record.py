"""
Basic data structures for JTL sample rows.
"""


class JTLRecord:
    """One parsed sample row. Only the interpreted columns are typed."""

    def __init__(self, timestamp: int, elapsed: int, success: bool, bytes_received: int,
                 bytes_sent: int, raw_line: str, line_number: int = 0):
        self.timestamp = timestamp
        self.elapsed = elapsed
        self.success = success
        self.bytes_received = bytes_received
        self.bytes_sent = bytes_sent
        self.raw_line = raw_line  # Written back out verbatim
        self.line_number = line_number

    def __repr__(self) -> str:
        return (f"JTLRecord(line={self.line_number}, timestamp={self.timestamp}, "
                f"elapsed={self.elapsed}, success={self.success})")


class TooManyColumns:
    """Recoverable parse failure: the row has more columns than the JTL layout allows."""

    def __init__(self, line_number: int, raw_line: str):
        self.line_number = line_number
        self.raw_line = raw_line

    def __repr__(self) -> str:
        return f"TooManyColumns(line={self.line_number})"
