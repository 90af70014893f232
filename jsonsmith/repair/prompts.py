"""Prompt text for LLM-assisted JSON repair."""

REPAIR_INSTRUCTION = (
    "Fix the JSON syntax errors in the text the user sends. "
    "Do not change any values, keys, or structure. "
    "Only fix syntax issues (missing commas, brackets, quotes, trailing commas, etc). "
    "Return ONLY the fixed JSON, nothing else: no markdown, no explanation."
)
