"""Argon2id parameter sets recorded alongside each credential digest."""

from __future__ import annotations

from dataclasses import dataclass

from credential_core.domain.errors import KdfParameterError

# Argon2 (RFC 9106) lower bounds.
_MIN_TIME_COST = 1
_MIN_PARALLELISM = 1
_MAX_PARALLELISM = 2**24 - 1
_MIN_OUTPUT_LEN = 4
_MEMORY_KIB_PER_LANE = 8


@dataclass(frozen=True)
class KdfParameters:
    """Argon2id cost parameters.

    ``memory_cost`` is expressed in KiB of working memory, ``parallelism`` is
    the lane count and ``output_len`` is the digest length in bytes.
    """

    time_cost: int
    memory_cost: int
    parallelism: int
    output_len: int

    def validate(self) -> None:
        """Raise KdfParameterError when Argon2 would reject this combination."""

        if self.time_cost < _MIN_TIME_COST:
            raise KdfParameterError(f"time_cost must be >= {_MIN_TIME_COST}")
        if not _MIN_PARALLELISM <= self.parallelism <= _MAX_PARALLELISM:
            raise KdfParameterError(
                f"parallelism must be between {_MIN_PARALLELISM} and {_MAX_PARALLELISM}"
            )
        if self.memory_cost < _MEMORY_KIB_PER_LANE * self.parallelism:
            raise KdfParameterError(
                f"memory_cost must be >= {_MEMORY_KIB_PER_LANE} KiB per lane"
            )
        if self.output_len < _MIN_OUTPUT_LEN:
            raise KdfParameterError(f"output_len must be >= {_MIN_OUTPUT_LEN}")


DEFAULT_PARAMETERS_VERSION = 1
DEFAULT_KDF_PARAMETERS = KdfParameters(
    time_cost=1,
    memory_cost=64 * 1024,
    parallelism=4,
    output_len=32,
)


def max_concurrent_derivations(*, available_memory_kib: int, parameters: KdfParameters) -> int:
    """Return how many derivations fit in ``available_memory_kib`` at once."""

    return max(1, available_memory_kib // parameters.memory_cost)
