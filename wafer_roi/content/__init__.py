"""Static text and field definitions consumed by the calculator UI."""

from .inputs import INPUT_FIELDS, InputFieldDefinition, default_inputs, get_input_field
from .methodology import get_methodology

__all__ = [
    "INPUT_FIELDS",
    "InputFieldDefinition",
    "default_inputs",
    "get_input_field",
    "get_methodology",
]
