"""Element constructors for steady-state DC circuits."""

from __future__ import annotations

from collections.abc import Sequence

from ngineer.errors import ElementCreationError
from ngineer.nodal import (
    GenericElement,
    GenericNode,
    constant_flux,
    normal_flux,
    observe_flux,
)

DC_CIRCUIT = "dc_circuit"
RESISTOR = "resistor"
VOLTAGE_SOURCE = "voltage_source"
CURRENT_SOURCE = "current_source"


def resistor(
    input_node: GenericNode, output_node: GenericNode, resistance: Sequence[float]
) -> GenericElement:
    """A resistor whose gain is the conductance, the reciprocal of its resistance."""
    return GenericElement([1.0 / resistance[0]], input_node, output_node, normal_flux)


def voltage_source(
    input_node: GenericNode, output_node: GenericNode, voltage: Sequence[float]
) -> GenericElement:
    """A voltage source that locks one of its nodes to the other plus ``voltage``.

    The output node is driven unless it is already locked, in which case the
    input node is driven instead.
    """
    if output_node.is_locked and input_node.is_locked:
        raise ElementCreationError()

    drives_output = not output_node.is_locked
    if drives_output:
        output_node.is_locked = True
        output_node.potential = [p + voltage[0] for p in input_node.potential]
    else:
        input_node.is_locked = True
        input_node.potential = [p + voltage[0] for p in output_node.potential]

    return GenericElement(
        list(voltage),
        input_node,
        output_node,
        observe_flux,
        drives_output,
        connect_to_input=drives_output,
        connect_to_output=not drives_output,
    )


def current_source(
    input_node: GenericNode, output_node: GenericNode, current: Sequence[float]
) -> GenericElement:
    """A source of constant current from the input node to the output node."""
    return GenericElement(list(current), input_node, output_node, constant_flux)