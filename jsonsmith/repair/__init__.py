"""LLM-assisted JSON syntax repair."""

from jsonsmith.repair.prompts import REPAIR_INSTRUCTION
from jsonsmith.repair.repairer import JsonRepairer, RepairError, RepairResult, strip_code_fences

__all__ = [
    "JsonRepairer",
    "REPAIR_INSTRUCTION",
    "RepairError",
    "RepairResult",
    "strip_code_fences",
]
