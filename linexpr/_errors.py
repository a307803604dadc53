# _errors.py

r"""Exception classes raised by :mod:`linexpr`.

Every class derives from the closest built-in exception so callers can keep
catching e.g. :class:`IndexError` or :class:`ValueError`:

- :class:`BadIndexError`: out-of-range element or iterator access
- :class:`BadSizeError`: shape mismatch between operands
- :class:`ExternalLogicError`: iterators from different closures compared
- :class:`SingularMatrixError`: zero pivot in a routine that promised a result
- :class:`BadArgumentError`: invalid argument (e.g. rectangular input to ``inv``)
- :class:`UnsupportedError`: tag or type combination without an implementation
- :class:`KernelError`: a LAPACK routine rejected its arguments
- :class:`ConvergenceError`: an iterative LAPACK routine did not converge
"""


class LinexprError(Exception):
    """Base class of all :mod:`linexpr` errors."""


class BadIndexError(LinexprError, IndexError):
    """Element or iterator access outside the valid range."""


class BadSizeError(LinexprError, ValueError):
    """Operands whose shapes do not fit together."""


class ExternalLogicError(LinexprError, RuntimeError):
    """Programming error detected at run time, like mixing iterators."""


class SingularMatrixError(LinexprError, ArithmeticError):
    """A factorization hit an exactly singular pivot."""

    def __init__(self, msg: str, status: int = 0) -> None:
        super().__init__(msg)
        self.status = status


class BadArgumentError(LinexprError, ValueError):
    """An argument outside the domain of the operation."""


class UnsupportedError(LinexprError, TypeError):
    """No implementation for the given combination of types or tags."""


class KernelError(LinexprError, RuntimeError):
    """A LAPACK routine returned a negative ``info``."""

    def __init__(self, routine: str, info: int) -> None:
        msg = f"LAPACK routine '{routine}' rejected argument {-info} (info={info})."
        super().__init__(msg)
        self.routine = routine
        self.info = info


class ConvergenceError(LinexprError, ArithmeticError):
    """An iterative LAPACK routine (e.g. the SVD) did not converge."""

    def __init__(self, routine: str, info: int) -> None:
        msg = f"LAPACK routine '{routine}' did not converge (info={info})."
        super().__init__(msg)
        self.routine = routine
        self.info = info
