"""Building and solving nodal analysis studies."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ngineer import dc_circuits, heat_transfer
from ngineer.errors import (
    NodalAnalysisConfigurationError,
    NodalAnalysisModellingError,
    SolverConvergenceError,
    SolverDivisionByZeroError,
)
from ngineer.model import NodalAnalysisElement, NodalAnalysisModel, NodalMetadata
from ngineer.nodal import GenericElement, GenericNode

ElementConstructor = Callable[[GenericNode, GenericNode, list[float]], GenericElement]

_JACOBIAN_STEP = 1e-5
_PIVOT_TOLERANCE = 1e-8


@dataclass
class NodalAnalysisStudyConfigurator:
    """The dimension of a study type and the element types it knows."""

    dimension: int
    elements: dict[str, ElementConstructor] = field(default_factory=dict)

    def add_element_type(
        self, name: str, element_type: ElementConstructor
    ) -> NodalAnalysisStudyConfigurator:
        """Register an element constructor under ``name``; returns ``self``."""
        if name in self.elements:
            raise NodalAnalysisConfigurationError(
                NodalAnalysisConfigurationError.Kind.ELEMENT_TYPE_NAME_COLLISION
            )
        self.elements[name] = element_type
        return self


def default_study_builder_config() -> dict[str, NodalAnalysisStudyConfigurator]:
    """The study types available without any customisation."""
    return {
        dc_circuits.DC_CIRCUIT: NodalAnalysisStudyConfigurator(
            dimension=1,
            elements={
                dc_circuits.RESISTOR: dc_circuits.resistor,
                dc_circuits.VOLTAGE_SOURCE: dc_circuits.voltage_source,
                dc_circuits.CURRENT_SOURCE: dc_circuits.current_source,
            },
        ),
        heat_transfer.HEAT_TRANSFER: NodalAnalysisStudyConfigurator(
            dimension=1,
            elements={
                heat_transfer.CONDUCTOR: heat_transfer.conductor,
                heat_transfer.CONVECTION_INTERFACE: heat_transfer.convection_interface,
                heat_transfer.TEMPERATURE_DELTA: heat_transfer.temperature_delta,
                heat_transfer.HEAT_FLUX: heat_transfer.heat_flux,
            },
        ),
    }


@dataclass
class NodalAnalysisStudyResult:
    """Solved node potentials and element fluxes.

    Element keys are ``"<element_type>.<index>"``.
    """

    nodes: dict[int, list[float]] = field(default_factory=dict)
    elements: dict[str, list[float]] = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(
            {
                "nodes": {str(k): v for k, v in self.nodes.items()},
                "elements": dict(self.elements),
            },
            indent=2,
        )


def _solve_linear(matrix: list[list[float]], rhs: list[float]) -> list[float]:
    """Solve ``matrix @ x = rhs`` by Gaussian elimination with partial pivoting."""
    rows = [list(row) + [b] for row, b in zip(matrix, rhs)]
    size = len(rows)
    scale = max((abs(v) for row in matrix for v in row), default=0.0) or 1.0

    for col in range(size):
        pivot = max(range(col, size), key=lambda r: abs(rows[r][col]))
        if abs(rows[pivot][col]) <= _PIVOT_TOLERANCE * scale:
            raise SolverDivisionByZeroError(
                SolverDivisionByZeroError.Kind.MV_NEWTON_RAPHSON
            )
        rows[col], rows[pivot] = rows[pivot], rows[col]
        lead = rows[col]
        for row in rows[col + 1 :]:
            factor = row[col] / lead[col]
            if factor:
                row[col:] = [a - factor * b for a, b in zip(row[col:], lead[col:])]

    solution = [0.0] * size
    for col in reversed(range(size)):
        row = rows[col]
        known = sum(row[k] * solution[k] for k in range(col + 1, size))
        solution[col] = (row[size] - known) / row[col]
    return solution


def _jacobian(
    func: Callable[[list[float]], list[float]], x: list[float], fx: list[float]
) -> list[list[float]]:
    columns = []
    for j, xj in enumerate(x):
        shifted = list(x)
        shifted[j] = xj + _JACOBIAN_STEP * max(1.0, abs(xj))
        step = shifted[j] - xj
        f_shifted = func(shifted)
        columns.append([(a - b) / step for a, b in zip(f_shifted, fx)])
    return [list(row) for row in zip(*columns)]


def _newton_raphson(
    func: Callable[[list[float]], list[float]],
    guess: Sequence[float],
    margin: float,
    limit: int,
) -> list[float]:
    """Find a root of ``func`` with Newton's method and a numerical Jacobian."""
    x = list(guess)
    for _ in range(limit):
        fx = func(x)
        if max(abs(v) for v in fx) < margin:
            return x
        step = _solve_linear(_jacobian(func, x, fx), [-v for v in fx])
        x = [a + b for a, b in zip(x, step)]
    if max(abs(v) for v in func(x)) < margin:
        return x
    raise SolverConvergenceError()


class NodalAnalysisStudyBuilder:
    """Assembles a model step by step and solves it.

    The adding methods return the builder, so calls may be chained.
    """

    def __init__(
        self,
        study_type: str,
        configurator: dict[str, NodalAnalysisStudyConfigurator] | None = None,
    ) -> None:
        config = default_study_builder_config() if configurator is None else configurator
        if study_type not in config:
            raise NodalAnalysisModellingError(
                NodalAnalysisModellingError.Kind.MODEL_TYPE_NOT_FOUND
            )
        self.configurator = config
        self.model = NodalAnalysisModel(model_type=study_type)

    @classmethod
    def from_model_with_default_config(
        cls, model: NodalAnalysisModel
    ) -> NodalAnalysisStudyBuilder:
        """A builder for an existing model, using the default study types."""
        builder = cls(model.model_type)
        builder.model = model
        return builder

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r})"

    def _study_configuration(self) -> NodalAnalysisStudyConfigurator:
        try:
            return self.configurator[self.model.model_type]
        except KeyError:
            raise NodalAnalysisModellingError(
                NodalAnalysisModellingError.Kind.MODEL_TYPE_NOT_FOUND
            ) from None

    def add_nodes(self, n: int) -> NodalAnalysisStudyBuilder:
        self.model.nodes += n
        return self

    def configure_node(
        self,
        node: int,
        potential: Sequence[float],
        is_locked: bool,
        metadata: dict[str, float] | None = None,
    ) -> NodalAnalysisStudyBuilder:
        """Set the initial potential, lock state and metadata of a node."""
        self.model.configuration[node] = NodalMetadata(
            [float(p) for p in potential],
            is_locked,
            None if metadata is None else dict(metadata),
        )
        return self

    def add_element(
        self, element: str, input: int, output: int, gain: Sequence[float]
    ) -> NodalAnalysisStudyBuilder:
        """Add an element between two existing nodes."""
        if input >= self.model.nodes or output >= self.model.nodes:
            raise NodalAnalysisModellingError(
                NodalAnalysisModellingError.Kind.NODE_DOES_NOT_EXIST
            )
        self.model.elements.append(
            NodalAnalysisElement(element, input, output, [float(g) for g in gain])
        )
        return self

    def save_model(self) -> str:
        """Return the model as indented JSON."""
        return self.model.to_json()

    def run_study(self, margin: float, limit: int) -> NodalAnalysisStudyResult:
        """Build the network, solve it and gather node potentials and fluxes."""
        config = self._study_configuration()
        dim = config.dimension

        nodes = [GenericNode(potential=[1.0] * dim) for _ in range(self.model.nodes)]

        def node_at(index: int) -> GenericNode:
            if not 0 <= index < len(nodes):
                raise NodalAnalysisModellingError(
                    NodalAnalysisModellingError.Kind.NODE_DOES_NOT_EXIST
                )
            return nodes[index]

        for index, data in self.model.configuration.items():
            node = node_at(index)
            node.potential = list(data.potential)
            node.is_locked = data.is_locked
            node.metadata = None if data.metadata is None else dict(data.metadata)

        elements = []
        for spec in self.model.elements:
            try:
                constructor = config.elements[spec.element_type]
            except KeyError:
                raise KeyError(
                    f"unknown element type {spec.element_type!r} "
                    f"for study {self.model.model_type!r}"
                ) from None
            elements.append(
                constructor(node_at(spec.input), node_at(spec.output), list(spec.gain))
            )

        unknowns = [
            (i, c)
            for i, node in enumerate(nodes)
            if not node.is_locked
            for c in range(dim)
        ]

        def apply(values: Sequence[float]) -> None:
            for (i, c), value in zip(unknowns, values):
                nodes[i].potential[c] = value

        def residuals(values: list[float]) -> list[float]:
            apply(values)
            return [nodes[i].flux_discrepancy()[c] for i, c in unknowns]

        if unknowns:
            apply(_newton_raphson(residuals, [1.0] * len(unknowns), margin, limit))

        result = NodalAnalysisStudyResult()
        for idx, (spec, elem) in enumerate(zip(self.model.elements, elements)):
            result.elements[f"{spec.element_type}.{idx}"] = list(elem.flux())
        for idx, node in enumerate(nodes):
            result.nodes[idx] = list(node.potential)
        return result