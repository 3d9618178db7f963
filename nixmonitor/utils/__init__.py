"""Small string utilities shared by the decoder and tracker."""

from nixmonitor.utils.paths import label_for, store_path_base
from nixmonitor.utils.text import clean_log_line, ensure_printable, strip_ansi

__all__ = [
    "clean_log_line",
    "ensure_printable",
    "label_for",
    "store_path_base",
    "strip_ansi",
]
