"""Operation bulletin — dataclass, parsing, validation, and serialization."""

from .models import Operation
from .parsing import parse_operations
from .validation import validate_operations
from .serialization import operation_to_dict

__all__ = [
    # Models
    "Operation",
    # Parsing / Validation / Serialization
    "parse_operations", "validate_operations", "operation_to_dict",
]
