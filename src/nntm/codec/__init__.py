"""Todo line format."""

from .line_codec import (
    decode_line,
    decode_pipe_line,
    encode_line,
    fold_priority,
    unfold_priority,
)

__all__ = [
    "decode_line",
    "decode_pipe_line",
    "encode_line",
    "fold_priority",
    "unfold_priority",
]
