"""
Interview Practice API.

Backend for an interview-practice tool:
- Transcription of recorded answers
- Short feedback on interview answers
- Coding problem generation by difficulty
- Sandboxed execution of submitted code

Architecture: FastAPI + Gemini generateContent client + retry policy with
overload-aware backoff + subprocess code sandbox
"""

__version__ = "0.1.0"
