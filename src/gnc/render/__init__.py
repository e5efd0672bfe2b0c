from .bridge import PLACEHOLDERS, CountsRenderer, placeholder_values
from .template import FormatTemplate
from .widget import TextWidget

__all__ = [
    "PLACEHOLDERS",
    "CountsRenderer",
    "FormatTemplate",
    "TextWidget",
    "placeholder_values",
]
