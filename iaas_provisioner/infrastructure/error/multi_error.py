"""Aggregation of several failure causes into a single exception.

A single logical operation can fail more than once, for instance when a
machine creation fails and removing the partially created machine fails as
well. Both causes must reach the caller, in the order they happened.
"""

from typing import Iterable, List, Optional, Tuple

from iaas_provisioner.domain.base.exceptions import DomainException


class MultiError(DomainException):
    """Ordered collection of exceptions reported as one."""

    def __init__(self, errors: Iterable[BaseException]):
        self.errors: Tuple[BaseException, ...] = tuple(errors)
        super().__init__(
            self._render(),
            "MULTIPLE_ERRORS",
            {"errors": [str(err) for err in self.errors]},
        )

    def _render(self) -> str:
        if not self.errors:
            return "multi error created but no errors added"
        if len(self.errors) == 1:
            return str(self.errors[0])
        lines = [f"multiple errors reported ({len(self.errors)}):"]
        for index, err in enumerate(self.errors):
            lines.append(f"error #{index}: {err}")
        return "\n".join(lines) + "\n"

    def __len__(self) -> int:
        return len(self.errors)


class ErrorAggregator:
    """Accumulates errors and produces the error to raise, if any."""

    def __init__(self, *errors: BaseException):
        self._errors: List[BaseException] = list(errors)

    def add(self, error: BaseException) -> None:
        self._errors.append(error)

    def __len__(self) -> int:
        return len(self._errors)

    @property
    def errors(self) -> Tuple[BaseException, ...]:
        return tuple(self._errors)

    def to_error(self) -> Optional[BaseException]:
        """Return None, the single error, or a MultiError for several."""
        if not self._errors:
            return None
        if len(self._errors) == 1:
            return self._errors[0]
        return MultiError(self._errors)
