"""Element constructors for steady-state heat transfer."""

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

HEAT_TRANSFER = "heat_transfer"
CONDUCTOR = "conductor"
CONVECTION_INTERFACE = "convection_interface"
TEMPERATURE_DELTA = "temperature_delta"
HEAT_FLUX = "heat_flux"


class ConductorCreationError(ValueError):
    """A conductor was given neither a ratio nor a length and a conductivity."""

    def __init__(
        self,
        message: str = (
            "you must specify a conductivity coefficient 'k' and a length (in that "
            "order), or calculate the ratio youself to create a conductor element"
        ),
    ) -> None:
        super().__init__(message)


class ConvectionInterfaceCreationError(ValueError):
    """A convection interface was not given exactly one coefficient."""

    def __init__(
        self,
        message: str = (
            "you must specify only a convection coefficient 'h' to create a "
            "convection_interface element"
        ),
    ) -> None:
        super().__init__(message)


def conductor(
    input_node: GenericNode,
    output_node: GenericNode,
    length_and_conductivity: Sequence[float],
) -> GenericElement:
    """A one-dimensional conductor of heat between two nodes.

    Given one value, it is taken as the precomputed ratio ``k / l``; given two,
    they are the length ``l`` and the conductivity ``k``, in that order.
    """
    match list(length_and_conductivity):
        case [ratio]:
            gain = [ratio]
        case [length, conductivity]:
            gain = [conductivity / length]
        case _:
            raise ConductorCreationError()
    return GenericElement(gain, input_node, output_node, normal_flux)


def convection_interface(
    input_node: GenericNode,
    output_node: GenericNode,
    convection_coef: Sequence[float],
) -> GenericElement:
    """A convective boundary with heat transfer coefficient ``h``."""
    if len(convection_coef) != 1:
        raise ConvectionInterfaceCreationError()
    return GenericElement(list(convection_coef), input_node, output_node, normal_flux)


def temperature_delta(
    input_node: GenericNode,
    output_node: GenericNode,
    temp_delta: Sequence[float],
) -> GenericElement:
    """A fixed temperature difference that locks one node relative to the other.

    The output node is driven unless it is already locked, in which case the
    input node is driven instead.
    """
    if output_node.is_locked and input_node.is_locked:
        raise ElementCreationError()

    drives_output = not output_node.is_locked
    if drives_output:
        output_node.is_locked = True
        output_node.potential = [p + temp_delta[0] for p in input_node.potential]
    else:
        input_node.is_locked = True
        input_node.potential = [p + temp_delta[0] for p in output_node.potential]

    return GenericElement(
        list(temp_delta),
        input_node,
        output_node,
        observe_flux,
        drives_output,
        connect_to_input=drives_output,
        connect_to_output=not drives_output,
    )


def heat_flux(
    input_node: GenericNode, output_node: GenericNode, flux: Sequence[float]
) -> GenericElement:
    """A constant heat flux from the input node to the output node."""
    return GenericElement(list(flux), input_node, output_node, constant_flux)