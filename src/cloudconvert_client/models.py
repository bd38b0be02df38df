"""Typed request parameters and response shapes."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class UploadFile:
    """Reference to a local file sent as a multipart attachment."""

    path: str | os.PathLike[str]

    @property
    def filename(self) -> str:
        return os.path.basename(os.fspath(self.path))


ParamValue = Union[str, bool, int, float, None, UploadFile]
Params = Mapping[str, ParamValue]

# Decoded JSON (mapping or sequence), raw text/binary payload, or "" for an empty body
Outcome = Union[dict[str, Any], list[Any], str, bytes]


@dataclass
class ConversionParams:
    """Parameters of a `/convert` call.

    The typed fields always take precedence over `extra`. Keys are compared
    case-insensitively since they are lower-cased when encoded.
    """

    inputformat: str
    outputformat: str
    input: str
    file: str | UploadFile
    wait: bool = True
    extra: Mapping[str, ParamValue] = field(default_factory=dict)

    def to_params(self, api_key: str) -> dict[str, ParamValue]:
        fixed: dict[str, ParamValue] = {
            "apikey": api_key,
            "inputformat": self.inputformat,
            "outputformat": self.outputformat,
            "input": self.input,
            "file": self.file,
            "wait": self.wait,
        }
        params: dict[str, ParamValue] = {
            key: value for key, value in self.extra.items() if key.lower() not in fixed
        }
        params.update(fixed)
        return params
