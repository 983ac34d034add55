"""Custom Prometheus metrics for the Interview Practice API.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- retry_outcomes_total{outcome="overloaded"} (upstream capacity problems)
- problem_fallbacks_total (model returning malformed problem JSON)
- llm_latency_seconds (slow upstream)
"""

from prometheus_client import Counter, Histogram

# === Retry Metrics ===

retry_attempts_total = Counter(
    "retry_attempts_total",
    "Failed attempts observed by the retry policy",
    ["operation", "classification"],
)
"""
Failed attempt counter.

Labels:
- operation: transcription, feedback, problem_generation
- classification: overload (HTTP 503 / overloaded), other
"""

retry_outcomes_total = Counter(
    "retry_outcomes_total",
    "Final outcome of retried operations",
    ["operation", "outcome"],
)
"""
Final outcome counter.

Labels:
- operation: transcription, feedback, problem_generation
- outcome: success, overloaded, failed, exhausted

Alert thresholds:
- WARN: overloaded > 5% of outcomes
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "Gemini generateContent latency in seconds",
    ["operation", "success"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens consumed by operation and type",
    ["operation", "token_type"],
)

# === Problem Generation ===

problem_fallbacks_total = Counter(
    "problem_fallbacks_total",
    "Generated problems replaced by the fallback problem",
    ["difficulty"],
)

# === Sandbox ===

sandbox_executions_total = Counter(
    "sandbox_executions_total",
    "Sandbox executions by language and status",
    ["language", "status"],
)

sandbox_duration_seconds = Histogram(
    "sandbox_duration_seconds",
    "Sandbox execution wall-clock duration in seconds",
    ["language"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
