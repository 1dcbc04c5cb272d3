"""Deterministic stand-in results used when no real completion is available.

The response shape is picked from the template name. Every result ends with
:data:`FALLBACK_MARKER` so callers can tell it apart from model output.
"""

from __future__ import annotations

from typing import Optional

from .models import InvocationOutcome

FALLBACK_MARKER = (
    "*Note: This is a simulated response. Configure a completion provider "
    "to get real AI-generated output.*"
)

_REASONS = {
    InvocationOutcome.TIMED_OUT: "The completion provider did not answer in time.",
    InvocationOutcome.RETRIES_EXHAUSTED: "The completion provider kept failing after several retries.",
    InvocationOutcome.FAILED: "The completion provider rejected the request.",
    InvocationOutcome.UNAVAILABLE: "No completion provider is configured.",
}

_CODE_REVIEW = """## Code Review Results

### Positive Aspects:
- Code structure is well-organized
- Variable naming follows conventions
- Logic flow is clear and readable

### Areas for Improvement:
1. **Error Handling**: Consider handling failure paths explicitly
2. **Performance**: Some operations could be optimized
3. **Documentation**: Add comments for complex logic

### Recommendations:
- Add unit tests for better coverage
- Keep functions small and focused

**Overall Rating: 8/10** - Good code with room for minor improvements."""

_BLOG_POST = """# Sample Blog Post

## Introduction
Welcome to this blog post. Creating compelling content starts with a clear
message and a reader you want to reach.

## Main Content

### Understanding the Basics
Every good piece of writing starts with a solid foundation.

### Going Further
Building on that foundation, more advanced techniques help the message land.

### Putting It Into Practice
Real-world examples turn ideas into something readers can use.

## Conclusion
Consistent practice is what makes the difference. Start applying these ideas today."""

_CONTENT = """Here's your generated content based on your prompt:

This sample response shows how the system would process your request.

Key points covered:
- Relevant and engaging information
- Well-structured presentation
- Clear and concise language"""

_GENERIC = """## Response to '{name}'

Your prompt was processed successfully.

The template was rendered with the variables you supplied and handed to the
execution pipeline. This placeholder stands in for the model's answer."""


def _body_for(template_name: str) -> str:
    name = template_name.lower()
    if "code" in name or "review" in name:
        return _CODE_REVIEW
    if "blog" in name:
        return _BLOG_POST
    if "write" in name or "content" in name:
        return _CONTENT
    return _GENERIC.format(name=template_name)


def build_fallback_result(template_name: str, outcome: Optional[InvocationOutcome] = None) -> str:
    parts = [_body_for(template_name)]
    reason = _REASONS.get(outcome) if outcome is not None else None
    if reason:
        parts.append(f"_{reason}_")
    parts.append(FALLBACK_MARKER)
    return "\n\n".join(parts)


def is_fallback_result(text: Optional[str]) -> bool:
    return bool(text) and text.rstrip().endswith(FALLBACK_MARKER)
