"""
Layer reference extraction.

Walks the two shapes a service exposes its layer associations in and turns
every list element into a Slot that can be overwritten in place:

- compiled CloudFormation template: ``Resources.<id>.Properties.Layers`` of
  ``AWS::Lambda::Function`` resources
- service function map: ``functions.<name>.layers``
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from latestlayer.utils.logging import debug_logger

logger = debug_logger("latestlayer.extractor")

LAMBDA_FUNCTION_TYPE = "AWS::Lambda::Function"


@dataclass(eq=False)
class Slot:
    """A writable position inside a layer list owned by a configuration tree."""

    container: list[Any]
    index: int

    @property
    def value(self) -> Any:
        return self.container[self.index]

    def write(self, value: str) -> None:
        self.container[self.index] = value


def template_layer_associations(template: Mapping[str, Any] | None) -> Iterator[tuple[str, Any]]:
    """Yield ``(location, Properties.Layers)`` for every Lambda function resource."""
    resources = (template or {}).get("Resources") or {}
    if not isinstance(resources, Mapping):
        return
    for resource_id, resource in resources.items():
        if not isinstance(resource, Mapping) or resource.get("Type") != LAMBDA_FUNCTION_TYPE:
            continue
        properties = resource.get("Properties") or {}
        layers = properties.get("Layers") if isinstance(properties, Mapping) else None
        if layers is not None:
            yield f"{resource_id}.Properties.Layers", layers


def function_layer_associations(functions: Mapping[str, Any] | None) -> Iterator[tuple[str, Any]]:
    """Yield ``(location, layers)`` for every function definition."""
    for name, function in (functions or {}).items():
        if not isinstance(function, Mapping):
            continue
        layers = function.get("layers")
        if layers is not None:
            yield f"{name}.layers", layers


def template_layer_lists(template: Mapping[str, Any] | None) -> Iterator[Any]:
    """Yield the ``Properties.Layers`` value of every Lambda function resource."""
    return (layers for _, layers in template_layer_associations(template))


def function_layer_lists(functions: Mapping[str, Any] | None) -> Iterator[Any]:
    """Yield the ``layers`` value of every function definition."""
    return (layers for _, layers in function_layer_associations(functions))


def collect_slots(layer_lists: Iterable[Any]) -> list[Slot]:
    """
    Build slots for every element of every layer list, in discovery order.

    Values that are not lists are skipped; they never abort extraction.
    """
    slots: list[Slot] = []
    for layers in layer_lists:
        if not isinstance(layers, list):
            logger.debug(f"Skipping layer association as it is not a list: {layers!r}")
            continue
        slots.extend(Slot(layers, index) for index in range(len(layers)))
    return slots
