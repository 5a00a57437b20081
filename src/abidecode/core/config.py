from __future__ import annotations

from dataclasses import dataclass

from abidecode.constants import DEFAULT_MAX_BUFFER_SIZE, DEFAULT_MAX_DEPTH, WORD_SIZE


@dataclass(frozen=True)
class DecoderConfig:
    """Limits applied while decoding untrusted ABI data.

    `max_elements` bounds the total work of one decode call: every array or
    tuple element costs one unit and every string/bytes payload costs one unit
    per 32 bytes. Offsets that alias the same sub-payload are charged each time
    they are followed. None derives the limit from `max_buffer_size`.
    """

    max_depth: int = DEFAULT_MAX_DEPTH  # nested arrays/tuples
    max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE  # bytes, per top-level buffer
    max_elements: int | None = None

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        if self.max_buffer_size < 0:
            raise ValueError("max_buffer_size must be >= 0")
        if self.max_elements is not None and self.max_elements < 0:
            raise ValueError("max_elements must be >= 0")

    @property
    def element_limit(self) -> int:
        if self.max_elements is not None:
            return self.max_elements
        return max(self.max_buffer_size // WORD_SIZE, 1)


DEFAULT_CONFIG = DecoderConfig()


def resolve_config(config: DecoderConfig | None) -> DecoderConfig:
    """Return `config` or the module defaults when None."""
    return DEFAULT_CONFIG if config is None else config
