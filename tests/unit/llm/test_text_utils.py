"""
Unit tests for text utilities.
"""

import json

from interview_practice.llm.text_utils import strip_code_fences


def test_strip_json_fence():
    text = '```json\n{"title": "Two Sum"}\n```'
    assert strip_code_fences(text) == '{"title": "Two Sum"}'


def test_strip_bare_fence():
    text = '```\n{"title": "Two Sum"}\n```'
    assert strip_code_fences(text) == '{"title": "Two Sum"}'


def test_strip_uppercase_json_fence():
    text = '```JSON\n{"a": 1}\n```'
    assert strip_code_fences(text) == '{"a": 1}'


def test_no_fence_only_trims():
    assert strip_code_fences('  \n{"a": 1}\n ') == '{"a": 1}'


def test_trailing_whitespace_after_closing_fence():
    text = '```json\n{"a": [1, 2]}\n```  \n'
    assert json.loads(strip_code_fences(text)) == {"a": [1, 2]}


def test_opening_fence_only():
    assert strip_code_fences('```json\n{"a": 1}') == '{"a": 1}'


def test_fence_inside_string_value_kept():
    """Only the first opening marker and a closing marker at the end are removed."""
    text = '```json\n{"hint": "use ``` carefully"}\n```'
    assert json.loads(strip_code_fences(text)) == {"hint": "use ``` carefully"}


def test_unfenced_json_mentioning_fences_unchanged():
    text = '{"title": "T", "description": "Wrap code in ``` fences"}'
    assert strip_code_fences(text) == text


def test_unfenced_json_with_json_fence_text_unchanged():
    text = '{"hint": "start the block with ```json"}'
    assert json.loads(strip_code_fences(text)) == {"hint": "start the block with ```json"}


def test_leading_whitespace_before_fence():
    assert strip_code_fences('\n  ```json\n{"a": 1}\n```') == '{"a": 1}'


def test_empty_string():
    assert strip_code_fences("") == ""
