"""jsonsmith - validate, format and convert JSON, with LLM-assisted syntax repair."""

__version__ = "0.1.0"

from jsonsmith.config import JsonsmithConfig, load_config  # noqa: E402
from jsonsmith.convert import (  # noqa: E402
    ConversionFacade,
    ConversionFailure,
    ConversionResult,
    ConversionSuccess,
    render_markdown,
)
from jsonsmith.diff import ChangeRecord, diff_lines  # noqa: E402
from jsonsmith.repair import JsonRepairer  # noqa: E402

__all__ = [
    "ChangeRecord",
    "ConversionFacade",
    "ConversionFailure",
    "ConversionResult",
    "ConversionSuccess",
    "JsonRepairer",
    "JsonsmithConfig",
    "diff_lines",
    "load_config",
    "render_markdown",
]
