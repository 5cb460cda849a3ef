"""API descriptions and their resolution.

An API description declares the operations a client exposes: for each
operation its HTTP method, URI template, parameters and response model,
plus the base URL and model definitions. Descriptions are written as
:class:`ApiDescription` subclasses whose :meth:`ApiDescription.load`
returns the fully populated description::

    @register_description("twitter-urls")
    class TwitterUrlsApiDescription(ApiDescription):
        def load(self):
            return type(self)({
                "baseUrl": "http://urls.api.twitter.com/1/urls/",
                "operations": {
                    "count": {
                        "httpMethod": "GET",
                        "uri": "count.json",
                        "responseModel": "JsonResponse",
                        "parameters": {"url": {"type": "string", "location": "query", "required": True}},
                    }
                },
                "models": {"JsonResponse": {"type": "object", "additionalProperties": {"location": "json"}}},
            })

A client may reference its description as an instance, as a class, or by
registered name. :func:`resolve_description` normalises all three into one
loaded description, trying the by-reference lookup at most once.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeVar

from service_client_core.errors.exceptions import InvalidDescriptionError, UnknownOperationError

logger = logging.getLogger(__name__)

NO_DESCRIPTION_FOUND = "No API service description found"
MALFORMED_DESCRIPTION = "Malformed API service description"

PARAMETER_LOCATIONS = frozenset(["uri", "query", "header", "json", "form"])
RESPONSE_LOCATIONS = frozenset(["json", "body"])


class ResolutionState(Enum):
    """Outcome of resolving a description reference."""

    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


def _malformed(detail: str) -> InvalidDescriptionError:
    return InvalidDescriptionError(f"{MALFORMED_DESCRIPTION}: {detail}", reason=ResolutionState.MALFORMED)


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise _malformed(f"{what} must be a mapping, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Parameter:
    """A single operation parameter."""

    name: str
    location: str = "query"
    type: str | None = None
    required: bool = False
    default: Any = None
    sent_as: str | None = None

    @property
    def wire_name(self) -> str:
        """Name used on the wire (``sentAs`` if declared)."""
        return self.sent_as or self.name

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "Parameter":
        data = _mapping(data, f"parameter '{name}'")
        location = data.get("location", "query")
        if location not in PARAMETER_LOCATIONS:
            raise _malformed(f"parameter '{name}' has unknown location '{location}'")
        return cls(
            name=name,
            location=location,
            type=data.get("type"),
            required=bool(data.get("required", False)),
            default=data.get("default"),
            sent_as=data.get("sentAs"),
        )


@dataclass(frozen=True)
class Model:
    """A response model. Only where the response body is read from matters here."""

    name: str
    type: str = "object"
    location: str = "json"

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "Model":
        data = _mapping(data, f"model '{name}'")
        location = data.get("location")
        additional = data.get("additionalProperties")
        if location is None and isinstance(additional, Mapping):
            location = additional.get("location")
        location = location or "json"
        if location not in RESPONSE_LOCATIONS:
            raise _malformed(f"model '{name}' has unknown location '{location}'")
        return cls(name=name, type=data.get("type", "object"), location=location)


@dataclass(frozen=True)
class Operation:
    """A described API operation."""

    name: str
    http_method: str
    uri: str = ""
    parameters: Mapping[str, Parameter] = field(default_factory=lambda: MappingProxyType({}))
    response_model: str | None = None
    auth: str | None = None
    additional_parameters: bool = False
    summary: str | None = None

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "Operation":
        data = _mapping(data, f"operation '{name}'")
        http_method = data.get("httpMethod")
        if not http_method or not isinstance(http_method, str):
            raise _malformed(f"operation '{name}' has no httpMethod")
        parameters = {
            param_name: Parameter.from_dict(param_name, param)
            for param_name, param in _mapping(data.get("parameters"), f"parameters of '{name}'").items()
        }
        return cls(
            name=name,
            http_method=http_method.upper(),
            uri=data.get("uri", ""),
            parameters=MappingProxyType(parameters),
            response_model=data.get("responseModel"),
            auth=data.get("auth"),
            additional_parameters=bool(data.get("additionalParameters", False)),
            summary=data.get("summary"),
        )


class ApiDescription(ABC):
    """Base class for API descriptions.

    The constructor parses a description dict (``baseUrl``, ``name``,
    ``apiVersion``, ``operations``, ``models``); an empty or missing dict
    yields an empty description. Parsed state is read-only.

    Subclasses implement :meth:`load`, which the client calls exactly once
    and whose result it keeps.

    Raises:
        InvalidDescriptionError: If the dict is structurally invalid.
    """

    def __init__(self, config: Mapping[str, Any] | None = None):
        config = _mapping(config, "description")
        self._base_url: str | None = config.get("baseUrl") or None
        self._name: str | None = config.get("name")
        self._api_version: str | None = config.get("apiVersion")
        operations = _mapping(config.get("operations"), "operations")
        models = _mapping(config.get("models"), "models")
        self._operations = MappingProxyType({name: Operation.from_dict(name, op) for name, op in operations.items()})
        self._models = MappingProxyType({name: Model.from_dict(name, model) for name, model in models.items()})

        for operation in self._operations.values():
            if operation.response_model and operation.response_model not in self._models:
                raise _malformed(
                    f"operation '{operation.name}' references unknown model '{operation.response_model}'"
                )

    @property
    def base_url(self) -> str | None:
        return self._base_url

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def api_version(self) -> str | None:
        return self._api_version

    @property
    def operations(self) -> Mapping[str, Operation]:
        return self._operations

    @property
    def models(self) -> Mapping[str, Model]:
        return self._models

    def has_operation(self, name: str) -> bool:
        return name in self._operations

    def get_operation(self, name: str) -> Operation:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def get_model(self, name: str | None) -> Model | None:
        if name is None:
            return None
        return self._models.get(name)

    @abstractmethod
    def load(self) -> "ApiDescription":
        """Return the fully populated description."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} operations={sorted(self._operations)}>"


class StaticApiDescription(ApiDescription):
    """A description built directly from a dict; loading returns itself."""

    def load(self) -> "StaticApiDescription":
        return self


# registered name -> description class, written when description modules are imported
_registry: dict[str, type[ApiDescription]] = {}

D = TypeVar("D", bound=type[ApiDescription])


def register_description(name: str) -> Callable[[D], D]:
    """Class decorator registering a description under ``name``.

    Clients may then refer to the description by that name in their
    ``apiDescription`` option. Registering the same class again is a no-op;
    a different class under a taken name raises ValueError.
    """

    def decorator(description_class: D) -> D:
        if not (inspect.isclass(description_class) and issubclass(description_class, ApiDescription)):
            raise TypeError(f"{description_class!r} is not an ApiDescription subclass")
        registered = _registry.get(name)
        if registered is not None and registered is not description_class:
            raise ValueError(f"API description '{name}' is already registered to {registered.__name__}")
        _registry[name] = description_class
        return description_class

    return decorator


def registered_descriptions() -> Mapping[str, type[ApiDescription]]:
    """Read-only view of the description registry."""
    return MappingProxyType(_registry)


@dataclass(frozen=True)
class DescriptionResolution:
    """Result of :func:`resolve_reference`."""

    state: ResolutionState
    description: ApiDescription | None = None

    @property
    def resolved(self) -> bool:
        return self.state is ResolutionState.RESOLVED


def _description_class(reference: Any) -> type[ApiDescription] | None:
    if isinstance(reference, str):
        reference = _registry.get(reference)
    if (
        inspect.isclass(reference)
        and issubclass(reference, ApiDescription)
        and not inspect.isabstract(reference)
    ):
        return reference
    return None


def resolve_reference(reference: Any) -> DescriptionResolution:
    """Turn a description reference into a description instance.

    An instance is returned as-is. Otherwise a single by-reference attempt
    is made: a concrete ApiDescription subclass, or the name of a registered
    one, is instantiated with an empty configuration. Nothing is loaded here.
    """
    if isinstance(reference, ApiDescription):
        return DescriptionResolution(ResolutionState.RESOLVED, reference)

    if not reference:
        return DescriptionResolution(ResolutionState.NOT_FOUND)

    description_class = _description_class(reference)
    if description_class is None:
        return DescriptionResolution(ResolutionState.MALFORMED)

    logger.debug(f"Instantiating API description {description_class.__name__} from reference {reference!r}")
    try:
        description = description_class({})
    except TypeError as e:
        logger.debug(f"Cannot instantiate {description_class.__name__} from reference {reference!r}: {e}")
        return DescriptionResolution(ResolutionState.MALFORMED)
    return DescriptionResolution(ResolutionState.RESOLVED, description)


def resolve_description(reference: Any) -> ApiDescription:
    """Resolve ``reference`` and return the result of its ``load()``.

    Raises:
        InvalidDescriptionError: With ``reason`` NOT_FOUND when nothing was
            supplied, MALFORMED when the reference is unusable or ``load()``
            does not return an ApiDescription.
    """
    resolution = resolve_reference(reference)

    if resolution.state is ResolutionState.NOT_FOUND:
        raise InvalidDescriptionError(NO_DESCRIPTION_FOUND, reason=ResolutionState.NOT_FOUND)
    if resolution.state is ResolutionState.MALFORMED:
        raise InvalidDescriptionError(MALFORMED_DESCRIPTION, reason=ResolutionState.MALFORMED)

    loaded = resolution.description.load()
    if not isinstance(loaded, ApiDescription):
        raise _malformed(f"load() returned {type(loaded).__name__}, expected an ApiDescription")

    logger.debug(f"Loaded API description {loaded!r}")
    return loaded
