import logging
import sys

from .config import LOG_LEVEL, LOG_NAMESPACES


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)

log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app_logger = logging.getLogger("sales_reports")
app_logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)

# --- Namespace-based Filter ---
# LOG_NAMESPACES="sales_reports.features.reports,sales_reports.main" only lets
# records from those namespaces through. Empty means everything passes.
console_handler.addFilter(NamespaceFilter(LOG_NAMESPACES))

app_logger.addHandler(console_handler)

# --- Namespace-specific logging level configuration ---
# Report generation logs row counts at DEBUG.
# logging.getLogger("sales_reports.features.reports").setLevel(logging.DEBUG)

# Note: modules use logging.getLogger(__name__), which creates loggers like
# "sales_reports.features.reports.service". These child loggers inherit levels from
# their parents or from the application's root logger ("sales_reports").

# sh = logging.StreamHandler(sys.stdout)
# sh.setLevel(logging.DEBUG)
# sh.setFormatter(log_formatter)
# # will print debug sql
# logger_db_client = logging.getLogger("tortoise.db_client")
# logger_db_client.setLevel(logging.DEBUG)
# # logger_db_client.addHandler(sh)
