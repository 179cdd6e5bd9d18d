import logging
import os
import sys


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True  # No namespaces configured, let everything through
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app_logger = logging.getLogger("ebike_admin")
app_logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)

# Comma separated list, e.g. LOG_NAMESPACES="ebike_admin.features.sales,ebike_admin.main"
allowed_log_namespaces = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]
if allowed_log_namespaces:
    console_handler.addFilter(NamespaceFilter(allowed_log_namespaces))

if not any(isinstance(h, logging.StreamHandler) for h in app_logger.handlers):
    app_logger.addHandler(console_handler)

# Ledger mutations are the interesting part of the request and sale flows.
logging.getLogger("ebike_admin.features.inventory_requests").setLevel(logging.DEBUG)
logging.getLogger("ebike_admin.features.shop_inventory").setLevel(logging.DEBUG)

# Modules use logging.getLogger(__name__), so "ebike_admin.features.sales.service"
# inherits from "ebike_admin.features.sales" and then from "ebike_admin".
