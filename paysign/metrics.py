from prometheus_client import Counter, Histogram

REQS = Counter("paysign_requests_total", "Total requests", ["path","method","status"])
SIGNED = Counter("paysign_signatures_total", "Signatures computed", ["op"])
VERIFY_FAIL = Counter("paysign_verify_failures_total", "Failed verifications", ["reason"])
LAT = Histogram("paysign_request_latency_seconds", "Latency", ["path","method"])
