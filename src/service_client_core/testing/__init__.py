"""Testing utilities for API clients.

Example:
    ```python
    from service_client_core.testing import RecordingHandler


    def test_count_sends_url():
        handler = RecordingHandler(json={"count": 1})
        client = MyClient({"handler": handler})
        client.count(url="http://www.google.com")
        assert handler.last_request.url.params["url"] == "http://www.google.com"
    ```
"""

from typing import Any

import httpx


class RecordingHandler(httpx.MockTransport):
    """Mock transport that records requests and replies with a canned response.

    Args:
        status_code: Status code of every reply.
        json: JSON body of every reply. Ignored when ``text`` is given.
        text: Plain text body of every reply.
        headers: Reply headers.
    """

    def __init__(
        self,
        status_code: int = 200,
        *,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self._json = json
        self._text = text
        self._headers = headers
        super().__init__(self._respond)

    def _respond(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._text is not None:
            return httpx.Response(self.status_code, text=self._text, headers=self._headers)
        return httpx.Response(self.status_code, json=self._json, headers=self._headers)

    @property
    def last_request(self) -> httpx.Request:
        if not self.requests:
            raise AssertionError("No request was sent")
        return self.requests[-1]


__all__ = ["RecordingHandler"]
