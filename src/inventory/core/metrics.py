from prometheus_client import Counter

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)

STORE_MUTATIONS = Counter(
    "product_store_mutations_total",
    "Total number of product store mutations",
    ["operation", "outcome"],
)

STORAGE_FALLBACKS = Counter(
    "product_storage_fallbacks_total",
    "Number of times the seed dataset replaced missing or unreadable storage",
    ["reason"],
)

STORAGE_WRITE_FAILURES = Counter(
    "product_storage_write_failures_total",
    "Total number of failed writes to product storage",
)

NOTIFICATIONS = Counter(
    "notifications_total",
    "Total number of notifications emitted",
    ["severity"],
)
