"""Nodes, elements and the flux formulas that connect them."""

from __future__ import annotations

import weakref
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ngineer.errors import FluxCalculationError

FluxCalculation = Callable[
    ["GenericNode", "GenericNode", Sequence[float], bool], list[float]
]


def _add(a: Sequence[float], b: Sequence[float]) -> list[float]:
    return [x + y for x, y in zip(a, b, strict=True)]


def _sub(a: Sequence[float], b: Sequence[float]) -> list[float]:
    return [x - y for x, y in zip(a, b, strict=True)]


@dataclass(eq=False)
class GenericNode:
    """A point in a network where the fluxes of attached elements must balance."""

    potential: list[float] = field(default_factory=lambda: [1.0])
    inputs: list[GenericElement] = field(default_factory=list, repr=False)
    outputs: list[GenericElement] = field(default_factory=list, repr=False)
    is_locked: bool = False
    metadata: dict[str, float] | None = None

    def flux_discrepancy(self) -> list[float]:
        """Return the sum of incoming fluxes minus the sum of outgoing fluxes."""
        incoming = [0.0] * len(self.potential)
        outgoing = [0.0] * len(self.potential)
        for elem in self.inputs:
            incoming = _add(incoming, elem.flux())
        for elem in self.outputs:
            outgoing = _add(outgoing, elem.flux())
        return _sub(incoming, outgoing)


class GenericElement:
    """A conductor of flux between an input node and an output node.

    The element keeps only weak references to its nodes; the nodes it is
    connected to keep it alive.
    """

    def __init__(
        self,
        gain: Sequence[float],
        input_node: GenericNode,
        output_node: GenericNode,
        flux_calc: FluxCalculation,
        drives_output: bool = False,
        connect_to_input: bool = True,
        connect_to_output: bool = True,
    ) -> None:
        self.gain = [float(g) for g in gain]
        self.flux_calc = flux_calc
        self.drives_output = drives_output
        self._input = weakref.ref(input_node)
        self._output = weakref.ref(output_node)
        if connect_to_input:
            input_node.outputs.append(self)
        if connect_to_output:
            output_node.inputs.append(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(gain={self.gain!r}, "
            f"flux_calc={getattr(self.flux_calc, '__name__', self.flux_calc)!r}, "
            f"drives_output={self.drives_output!r})"
        )

    def _nodes(self) -> tuple[GenericNode, GenericNode]:
        inode, onode = self._input(), self._output()
        if inode is None or onode is None:
            raise FluxCalculationError(
                FluxCalculationError.Kind.NODE_REFS_ALREADY_DROPPED
            )
        return inode, onode

    @property
    def input_node(self) -> GenericNode:
        return self._nodes()[0]

    @property
    def output_node(self) -> GenericNode:
        return self._nodes()[1]

    def flux(self) -> list[float]:
        """Calculate this element's flux with its flux formula."""
        inode, onode = self._nodes()
        return self.flux_calc(inode, onode, self.gain, self.drives_output)


def normal_flux(
    inode: GenericNode,
    onode: GenericNode,
    gain: Sequence[float],
    drives_output: bool,
) -> list[float]:
    """Flux proportional to the potential drop from input to output."""
    scale = gain[0]
    return [d * scale for d in _sub(inode.potential, onode.potential)]


def observe_flux(
    inode: GenericNode,
    onode: GenericNode,
    delta: Sequence[float],
    drives_output: bool,
) -> list[float]:
    """Drive one node's potential from the other and report the flux it must carry."""
    if drives_output:
        onode.potential = _add(inode.potential, delta)
        submissive = onode
    else:
        inode.potential = _sub(onode.potential, delta)
        submissive = inode
    return [-d for d in submissive.flux_discrepancy()]


def constant_flux(
    inode: GenericNode,
    onode: GenericNode,
    flux: Sequence[float],
    drives_output: bool,
) -> list[float]:
    """A fixed flux, independent of the node potentials."""
    return list(flux)