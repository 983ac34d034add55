"""
Code execution for the practice editor.

Components:
- CodeSandbox: Isolated subprocess execution with time/memory/output limits
- code_template: Starter program per language
- exceptions: Submission rejections (empty, too large)
"""

from interview_practice.sandbox.exceptions import CodeTooLargeError, EmptyCodeError, SandboxError
from interview_practice.sandbox.executor import CodeSandbox
from interview_practice.sandbox.templates import code_template

__all__ = [
    "CodeSandbox",
    "code_template",
    "SandboxError",
    "EmptyCodeError",
    "CodeTooLargeError",
]
