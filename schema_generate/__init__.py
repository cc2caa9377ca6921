"""
schema-generate

Generates Go MarshalJSON, UnmarshalJSON and ToMap methods from a
record/field/alias model.
"""

from .codegen import __version__, generate_from_model, quick_generate
from .loader import ModelError, load_model, model_from_dict

__all__ = [
    "__version__",
    "generate_from_model",
    "quick_generate",
    "ModelError",
    "load_model",
    "model_from_dict",
]
