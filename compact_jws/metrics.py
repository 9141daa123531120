from prometheus_client import Counter, Histogram

# Sign / verify latency
SIGN_LATENCY_SECONDS = Histogram(
    "jws_sign_latency_seconds",
    "JWS signing latency (seconds)",
    ["alg"],
)

VERIFY_LATENCY_SECONDS = Histogram(
    "jws_verify_latency_seconds",
    "JWS verification latency (seconds)",
    ["alg"],
)

# Failures by error class
JWS_ERRORS_TOTAL = Counter(
    "jws_errors_total",
    "Total encode/decode failures by type",
    ["type"],
)
