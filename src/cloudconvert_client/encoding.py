"""Query string and form body encoding."""

from __future__ import annotations

from urllib.parse import quote_plus

from .models import Params, ParamValue, UploadFile


def encode_value(value: ParamValue) -> str:
    """Convert a scalar parameter value to its wire string.

    `True` becomes "1", `False` and `None` become "".
    """
    if isinstance(value, UploadFile):
        raise TypeError("File attachments can only be sent in a POST body")
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    return str(value)


def build_query(params: Params) -> str:
    """Encode parameters as `key=value` pairs joined by `&`.

    Keys are lower-cased, values percent-encoded form style.
    """
    return "&".join(f"{key.lower()}={_quote(encode_value(value))}" for key, value in params.items())


def _quote(value: str) -> str:
    # quote_plus never escapes "~", form encoding on the wire sends %7E
    return quote_plus(value).replace("~", "%7E")


def append_query(url: str, params: Params) -> str:
    query = build_query(params)
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def split_form(params: Params) -> tuple[dict[str, str], dict[str, UploadFile]]:
    """Split POST parameters into plain form fields and file attachments."""
    data: dict[str, str] = {}
    files: dict[str, UploadFile] = {}
    for key, value in params.items():
        if isinstance(value, UploadFile):
            files[key.lower()] = value
        else:
            data[key.lower()] = encode_value(value)
    return data, files
