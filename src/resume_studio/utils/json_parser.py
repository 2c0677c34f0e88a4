"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json


def extract_json(text: str) -> dict | list:
    """Extract JSON from LLM response, handling ```json blocks.

    Tries the full text, then the body of a fenced block, then the
    outermost ``{...}`` and ``[...]`` slices.
    """
    text = text.strip()
    candidates = [text]
    unfenced = strip_code_fences(text)
    if unfenced != text:
        candidates.append(unfenced)

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except (json.JSONDecodeError, TypeError):
            pass
        for opener, closer in (("{", "}"), ("[", "]")):
            start = candidate.find(opener)
            end = candidate.rfind(closer)
            if start != -1 and end > start:
                try:
                    return json.loads(candidate[start : end + 1])
                except json.JSONDecodeError:
                    pass

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence (```lang ... ```) if present."""
    lines = text.strip().split("\n")
    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]
        while lines and lines[-1].strip() in ("```", ""):
            lines = lines[:-1]
    return "\n".join(lines).strip()
