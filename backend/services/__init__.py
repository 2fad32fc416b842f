"""Backend services."""

from services.input_normalizer import (
    infer_scheme,
    normalize,
    resolve_scheme,
)

__all__ = [
    "infer_scheme",
    "normalize",
    "resolve_scheme",
]
