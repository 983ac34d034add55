"""
Integration tests for the Interview Practice API.

Test components together or against real external services:
- API endpoints (FastAPI TestClient with overridden LLM client)
- Retry policy through the full request path
- Sandbox subprocess execution behind /executions
- Gemini client (real calls, skipped without GEMINI_API_KEY)
"""
