"""Monitoring and metrics instrumentation for the Interview Practice API.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from interview_practice.monitoring.metrics import (
    llm_latency_seconds,
    llm_tokens_total,
    problem_fallbacks_total,
    retry_attempts_total,
    retry_outcomes_total,
    sandbox_duration_seconds,
    sandbox_executions_total,
)

__all__ = [
    "retry_attempts_total",
    "retry_outcomes_total",
    "llm_latency_seconds",
    "llm_tokens_total",
    "problem_fallbacks_total",
    "sandbox_executions_total",
    "sandbox_duration_seconds",
]
