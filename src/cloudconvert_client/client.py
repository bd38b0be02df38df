"""CloudConvert API client.

Wraps the `processes` and `convert` endpoints of the CloudConvert service.
Every call goes through `CloudConvertClient.execute`, which performs one
blocking HTTP request and normalizes the response into an `Outcome`:

- decoded JSON (dict or list) when the body is a JSON object or array
- the raw payload (str for textual content types, bytes otherwise)
- "" for an empty body

API Reference: https://cloudconvert.com/apiconsole
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from contextlib import ExitStack
from typing import Any, Mapping

import httpx

from .config import DEFAULT_API_BASE, Settings, get_settings
from .encoding import append_query, split_form
from .errors import DecodeError, ServiceError, TransportError
from .models import ConversionParams, Outcome, Params, ParamValue, UploadFile

logger = logging.getLogger(__name__)

# Content types returned as str rather than bytes
TEXT_CONTENT_TYPES = ("application/json", "application/xml", "application/javascript")
JSON_CONTENT_TYPES = ("application/json", "text/json")


def _content_type(response: httpx.Response) -> str:
    return response.headers.get("content-type", "").split(";")[0].strip().lower()


def _looks_like_json(body: str, content_type: str) -> bool:
    """Check whether a trimmed body is shaped like a JSON object or array.

    The first and last characters must be a matching bracket pair. When the
    response is declared as JSON (or carries no content type) an opening
    bracket is enough, so truncated JSON is reported instead of returned.
    """
    if (body.startswith("{") and body.endswith("}")) or (body.startswith("[") and body.endswith("]")):
        return True
    declared_json = (
        not content_type or content_type in JSON_CONTENT_TYPES or content_type.endswith("+json")
    )
    return declared_json and body.startswith(("{", "["))


def _raw_payload(response: httpx.Response) -> str | bytes:
    content_type = _content_type(response)
    if (
        content_type.startswith("text/")
        or content_type in TEXT_CONTENT_TYPES
        or content_type.endswith(("+json", "+xml"))
    ):
        return response.text
    return response.content


class CloudConvertClient:
    """Synchronous client for the CloudConvert API.

    The API key is fixed at construction. No other state is kept between
    calls, and each request opens its own `httpx.Client`, so one instance
    can be shared across threads.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_base: str = DEFAULT_API_BASE,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._api_key = api_key
        self._api_base = api_base if api_base.endswith("/") else f"{api_base}/"
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> CloudConvertClient:
        """Create a client from environment configuration."""
        settings = settings or get_settings()
        if not settings.cloudconvert_api_key:
            raise ValueError("CLOUDCONVERT_API_KEY not configured")
        return cls(
            settings.cloudconvert_api_key,
            api_base=settings.api_base,
            timeout=settings.cloudconvert_timeout_seconds,
            transport=transport,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def api_base(self) -> str:
        return self._api_base

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_base={self._api_base!r})"

    def list_conversions(self) -> Outcome:
        """List the conversion processes of the account.

        Returns:
            Decoded response, normally a list of conversion records
        """
        return self.execute("GET", f"{self._api_base}processes", {"apikey": self._api_key})

    def delete_conversion(self, url: str) -> Outcome:
        """
        Delete one conversion process.

        Args:
            url: Scheme-less process URL as returned by the service
                (e.g. "//host123.cloudconvert.com/process/abc")

        Returns:
            Decoded response
        """
        return self.execute("DELETE", f"https:{url}")

    def delete_conversions(self) -> bool:
        """
        Delete every conversion process of the account.

        Deletions run one after the other in listed order. The first failure
        propagates and the remaining processes are left untouched.

        Returns:
            True once every deletion has been issued
        """
        conversions = self.list_conversions()
        count = 0
        for conversion in conversions:
            self.delete_conversion(conversion["url"])  # type: ignore[index]
            count += 1

        logger.info(f"Deleted {count} CloudConvert conversion(s)")
        return True

    def convert_download(
        self,
        inputformat: str,
        outputformat: str,
        fileurl: str,
        extra_params: Mapping[str, ParamValue] | None = None,
    ) -> Outcome:
        """
        Convert a file that CloudConvert downloads from a remote URL.

        The call blocks until the conversion has finished (`wait=1`).

        Args:
            inputformat: Input format (e.g. "docx")
            outputformat: Output format (e.g. "pdf")
            fileurl: URL the service fetches the input file from
            extra_params: Additional API parameters; they never override
                the fixed conversion parameters

        Returns:
            Decoded response
        """
        params = ConversionParams(
            inputformat=inputformat,
            outputformat=outputformat,
            input="download",
            file=fileurl,
            extra=extra_params or {},
        )
        logger.info(f"CloudConvert download conversion: {inputformat} → {outputformat}")
        return self.execute("GET", f"{self._api_base}convert", params.to_params(self._api_key))

    def convert_upload(
        self,
        inputformat: str,
        outputformat: str,
        local_file_path: str | os.PathLike[str],
        extra_params: Mapping[str, ParamValue] | None = None,
    ) -> Outcome:
        """
        Convert a local file uploaded along with the request.

        Args:
            inputformat: Input format (e.g. "docx")
            outputformat: Output format (e.g. "pdf")
            local_file_path: Path of the file to upload
            extra_params: Additional API parameters; they never override
                the fixed conversion parameters

        Returns:
            Decoded response
        """
        params = ConversionParams(
            inputformat=inputformat,
            outputformat=outputformat,
            input="upload",
            file=UploadFile(local_file_path),
            extra=extra_params or {},
        )
        logger.info(f"CloudConvert upload conversion: {inputformat} → {outputformat}")
        return self.execute("POST", f"{self._api_base}convert", params.to_params(self._api_key))

    def convert_upload_data(
        self,
        inputformat: str,
        outputformat: str,
        raw_data: bytes | str,
        extra_params: Mapping[str, ParamValue] | None = None,
    ) -> Outcome:
        """
        Convert in-memory data by uploading it as a temporary file.

        The temporary file is named with the input format as extension and is
        removed whether or not the conversion succeeds.
        """
        if isinstance(raw_data, str):
            raw_data = raw_data.encode("utf-8")

        tmp = tempfile.NamedTemporaryFile(delete=False, prefix="cc", suffix=f".{inputformat}")
        try:
            with tmp:
                tmp.write(raw_data)
            return self.convert_upload(inputformat, outputformat, tmp.name, extra_params)
        finally:
            os.unlink(tmp.name)

    def execute(self, verb: str, url: str, params: Params | None = None) -> Outcome:
        """
        Perform one request against the API.

        POST sends the parameters as the request body (multipart when a
        parameter is an `UploadFile`). Every other verb sends them in the
        query string.

        Args:
            verb: HTTP method (GET, POST, DELETE, ...)
            url: Target URL
            params: Request parameters

        Returns:
            Decoded JSON, the raw payload, or "" for an empty body

        Raises:
            TransportError: No usable response was obtained (network, timeout,
                redirect loop, undecodable transfer encoding)
            ServiceError: The response status was not 200
            DecodeError: The body looked like JSON but was not valid
        """
        verb = verb.upper()
        params = params or {}
        logger.debug(f"CloudConvert {verb} {url.split('?', 1)[0]}")

        with ExitStack() as stack:
            client = stack.enter_context(httpx.Client(**self._client_options()))
            try:
                if verb == "POST":
                    response = self._post(client, stack, url, params)
                else:
                    response = client.request(verb, append_query(url, params))
            except httpx.RequestError as exc:
                logger.warning(f"CloudConvert {verb} request failed: {exc}")
                raise TransportError(f"CloudConvert request failed: {exc}") from exc

        return self._handle_response(response)

    @staticmethod
    def _post(client: httpx.Client, stack: ExitStack, url: str, params: Params) -> httpx.Response:
        data, uploads = split_form(params)
        # Upload handles stay open until the request has been sent
        files = {
            key: (upload.filename, stack.enter_context(open(upload.path, "rb")))
            for key, upload in uploads.items()
        }
        return client.post(url, data=data, files=files or None)

    def _client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"follow_redirects": True}
        if self._timeout is not None:
            options["timeout"] = self._timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    def _handle_response(self, response: httpx.Response) -> Outcome:
        if response.status_code != 200:
            raise self._service_error(response)

        if not response.content:
            return ""

        body = response.text.strip()
        if not _looks_like_json(body, _content_type(response)):
            # Inline conversions return the converted file itself
            return _raw_payload(response)

        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"CloudConvert JSON response can not be processed: {body}", body) from exc

    def _service_error(self, response: httpx.Response) -> ServiceError:
        body = response.text
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and "error" in payload and "code" in payload:
            error = ServiceError.from_service_error(
                payload["error"], payload["code"], response.status_code, body
            )
        else:
            error = ServiceError.from_raw_response(response.status_code, body)

        logger.warning(f"CloudConvert API error ({response.status_code}): {error.message}")
        return error
