"""Use-case services consumed by the API layer."""

from interview_practice.services.interview import InterviewService, parse_problem

__all__ = ["InterviewService", "parse_problem"]
