"""Map described operations onto HTTP requests and back.

This is a thin adapter: parameters are placed according to their declared
location and the response body is decoded according to the response
model's location. No type coercion or schema validation is done beyond
checking for missing required and unknown parameters.
"""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from service_client_core.description import ApiDescription, Operation
from service_client_core.errors.exceptions import InvalidParameterError
from service_client_core.transport.http import HttpTransport

_URI_VARIABLE = re.compile(r"\{([^{}]+)\}")


def _expand_uri(operation: Operation, values: Mapping[str, Any]) -> str:
    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in values:
            raise InvalidParameterError(
                f"URI variable '{name}' of operation '{operation.name}' has no value", operation.name, name
            )
        return quote(str(values[name]), safe="")

    return _URI_VARIABLE.sub(substitute, operation.uri)


def _join_url(base_url: str | None, uri: str) -> str | httpx.URL:
    if not base_url:
        return uri
    return httpx.URL(base_url).join(uri)


def build_request(
    transport: HttpTransport,
    description: ApiDescription,
    name: str,
    params: Mapping[str, Any] | None = None,
) -> httpx.Request:
    """Build the request for operation ``name`` with ``params``.

    Raises:
        UnknownOperationError: If the description has no such operation.
        InvalidParameterError: If a required parameter is missing, or an
            undeclared one is given to an operation without
            ``additionalParameters``.
    """
    operation = description.get_operation(name)
    values = dict(params or {})

    extra = [key for key in values if key not in operation.parameters]
    if extra and not operation.additional_parameters:
        raise InvalidParameterError(
            f"Unknown parameter '{extra[0]}' for operation '{name}'", operation=name, parameter=extra[0]
        )

    placed: dict[str, dict[str, Any]] = {"uri": {}, "query": {}, "header": {}, "json": {}, "form": {}}
    for parameter in operation.parameters.values():
        if values.get(parameter.name) is not None:
            value = values[parameter.name]
        elif parameter.default is not None:
            value = parameter.default
        elif parameter.required:
            raise InvalidParameterError(
                f"Missing required parameter '{parameter.name}' for operation '{name}'",
                operation=name,
                parameter=parameter.name,
            )
        else:
            continue
        placed[parameter.location][parameter.wire_name] = value

    # undeclared parameters ride along in the query string
    for key in extra:
        placed["query"][key] = values[key]

    url = _join_url(description.base_url, _expand_uri(operation, placed["uri"]))

    kwargs: dict[str, Any] = {}
    if placed["query"]:
        kwargs["params"] = placed["query"]
    if placed["header"]:
        kwargs["headers"] = {key: str(value) for key, value in placed["header"].items()}
    if placed["json"]:
        kwargs["json"] = placed["json"]
    if placed["form"]:
        kwargs["data"] = placed["form"]

    return transport.build_request(operation.http_method, url, auth=operation.auth, **kwargs)


def parse_response(description: ApiDescription, operation: Operation, response: httpx.Response) -> Any:
    """Decode ``response`` according to the operation's response model.

    Returns the decoded JSON for ``json`` models, the text for ``body``
    models and the response itself when no model is declared.
    """
    model = description.get_model(operation.response_model)
    if model is None:
        return response
    if model.location == "json":
        return response.json()
    return response.text
