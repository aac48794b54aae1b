"""Argument checks shared by the solver operators."""

from ..grid import Field


def require_resolution(*fields: Field) -> int:
    """Return the common resolution N of ``fields``, rejecting N < 1 or mismatches."""
    n = fields[0].n
    if n < 1:
        raise ValueError(f"Field '{fields[0].name}' has grid resolution {n}")
    for f in fields[1:]:
        if f.n != n:
            raise ValueError(
                f"Field '{f.name}' has resolution {f.n}, expected {n} like '{fields[0].name}'"
            )
    return n


def require_distinct(target: Field, source: Field, operation: str):
    """Reject out-of-place operations whose target aliases the source."""
    if target is source or target.shares_buffer(source):
        raise ValueError(
            f"{operation}: target '{target.name}' and source '{source.name}' "
            "must be different buffers"
        )
