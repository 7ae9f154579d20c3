"""Exceptions raised by the nodal analysis engine and the equation tools."""

from __future__ import annotations

from enum import Enum


class _KindedError(Exception):
    """An error whose message is chosen by a member of its nested ``Kind`` enum."""

    Kind: type[Enum]

    def __init__(self, kind: Enum) -> None:
        self.kind = self.Kind(kind)
        super().__init__(self.kind.value)


class ElementCreationError(ValueError):
    """Both nodes of a potential-driving element were already locked."""

    def __init__(
        self,
        message: str = (
            "the element could not be created because both its input and "
            "output nodes were already locked."
        ),
    ) -> None:
        super().__init__(message)


class EquationGenerationError(_KindedError, ValueError):
    """The system equations of a model could not be generated."""

    class Kind(Enum):
        NODE_COUNT_INTEGER_OVERFLOW = (
            "the system equations could not be generated because there were "
            "more than 4,294,967,295 nodes in the given model"
        )
        NO_NODES_IN_SYSTEM = (
            "the system equations could not be generated because there were "
            "no nodes in the system"
        )


class FluxCalculationError(_KindedError, RuntimeError):
    """The flux of an element could not be calculated."""

    class Kind(Enum):
        NODE_REFS_ALREADY_DROPPED = (
            "failed to access nodes during flux calculation because they were "
            "already dropped."
        )


class NodalAnalysisConfigurationError(_KindedError, ValueError):
    """A study configuration was set up inconsistently."""

    class Kind(Enum):
        ELEMENT_TYPE_NAME_COLLISION = (
            "element type with this name was already created for this "
            "configurator object"
        )
        CONFIGURATION_NAME_COLLISION = (
            "a configuration with this name was already added to this model builder"
        )


class NodalAnalysisModellingError(_KindedError, LookupError):
    """A model refers to something that does not exist."""

    class Kind(Enum):
        NODE_DOES_NOT_EXIST = (
            "could not attach element to one or more of the given nodes because "
            "the node(s) did not exist in the model"
        )
        MODEL_TYPE_NOT_FOUND = (
            "could not find desired model type in the given or default configurators"
        )


class ConditionFormatError(_KindedError, ValueError):
    """A conditional statement could not be reformatted."""

    class Kind(Enum):
        CONDITIONAL_SYNTAX = "conditional statement failed to compile"
        COMPARATOR = (
            "invalid comparison operator. valid operators are: <, >, <=, >=, ==, !="
        )


class SolverConvergenceError(RuntimeError):
    """A solver did not reach the requested margin within its iteration limit."""

    def __init__(
        self,
        message: str = (
            "solver algorithm did not converge. consider allowing non-convergent "
            "solutions, or try to remove discontinuities from your system"
        ),
    ) -> None:
        super().__init__(message)


class SolverDivisionByZeroError(_KindedError, ZeroDivisionError):
    """A solver attempted to divide by zero."""

    class Kind(Enum):
        NEWTON_RAPHSON = "newton-raphson solver tried to divide by zero"
        MV_NEWTON_RAPHSON = (
            "multivariate newton-raphson solver tried to divide by zero"
        )
        GOLDEN_SECTION_SEARCH = "golden section search solver tried to divide by zero"