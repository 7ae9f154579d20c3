import pytest

from ngineer.errors import (
    ConditionFormatError,
    ElementCreationError,
    EquationGenerationError,
    FluxCalculationError,
    NodalAnalysisConfigurationError,
    NodalAnalysisModellingError,
    SolverConvergenceError,
    SolverDivisionByZeroError,
)


def test_element_creation_error_message():
    err = ElementCreationError()
    assert isinstance(err, ValueError)
    assert str(err) == (
        "the element could not be created because both its input and output "
        "nodes were already locked."
    )


def test_equation_generation_error_kind_and_message():
    err = EquationGenerationError(EquationGenerationError.Kind.NO_NODES_IN_SYSTEM)
    assert err.kind is EquationGenerationError.Kind.NO_NODES_IN_SYSTEM
    assert str(err) == (
        "the system equations could not be generated because there were no "
        "nodes in the system"
    )


def test_kind_from_other_error_is_rejected():
    with pytest.raises(ValueError):
        EquationGenerationError(FluxCalculationError.Kind.NODE_REFS_ALREADY_DROPPED)


def test_flux_calculation_error_is_runtime_error():
    err = FluxCalculationError(FluxCalculationError.Kind.NODE_REFS_ALREADY_DROPPED)
    assert isinstance(err, RuntimeError)
    assert err.kind is FluxCalculationError.Kind.NODE_REFS_ALREADY_DROPPED
    assert "already dropped" in str(err)


@pytest.mark.parametrize("kind", list(NodalAnalysisConfigurationError.Kind))
def test_configuration_error_message_follows_kind(kind):
    err = NodalAnalysisConfigurationError(kind)
    assert str(err) == kind.value
    assert isinstance(err, ValueError)


def test_modelling_error_is_lookup_error():
    err = NodalAnalysisModellingError(
        NodalAnalysisModellingError.Kind.MODEL_TYPE_NOT_FOUND
    )
    assert isinstance(err, LookupError)
    assert str(err) == (
        "could not find desired model type in the given or default configurators"
    )


def test_condition_format_error_comparator_message():
    err = ConditionFormatError(ConditionFormatError.Kind.COMPARATOR)
    assert str(err) == (
        "invalid comparison operator. valid operators are: <, >, <=, >=, ==, !="
    )


def test_solver_convergence_error_message():
    assert str(SolverConvergenceError()).startswith(
        "solver algorithm did not converge."
    )


def test_solver_division_by_zero_is_zero_division_error():
    err = SolverDivisionByZeroError(SolverDivisionByZeroError.Kind.MV_NEWTON_RAPHSON)
    assert isinstance(err, ZeroDivisionError)
    assert str(err) == (
        "multivariate newton-raphson solver tried to divide by zero"
    )