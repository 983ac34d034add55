"""
Unit tests for the Interview Practice API.

Test individual components in isolation:
- Retry policy (classification, backoff, exhaustion)
- Gemini client (httpx.MockTransport)
- Prompt builder and text utilities
- Interview service use-cases and problem parsing
- Code sandbox
- API models and dependencies
"""
