"""sqlweave scanning layer: column-name keyed decoders for result rows."""
from sqlweave.scan.binding import ColumnBinding
from sqlweave.scan.scanner import (
    ScanFunc,
    Scanner,
    Slot,
    scan,
    scan_time,
    set_attr,
    set_item,
)

__all__ = [
    "ColumnBinding",
    "Scanner",
    "ScanFunc",
    "Slot",
    "scan",
    "scan_time",
    "set_attr",
    "set_item",
]
