"""Remote file data model."""

import base64
import json
from dataclasses import dataclass
from typing import Any


@dataclass
class ManifestFile:
    """
    A JSON file stored in a repository (``package.json`` or
    ``npm-shrinkwrap.json``).

    ``content`` is the encoded text exactly as the contents API serves and
    accepts it; ``document`` is its decoded JSON. ``sha`` is the revision
    token the API requires to overwrite the file on a given branch.
    """

    path: str
    sha: str
    content: str
    encoding: str = "base64"
    document: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.document is None:
            self.document = json.loads(decode_content(self.content, self.encoding))

    def set_document(self, document: dict[str, Any]) -> None:
        """Replace the document and re-encode ``content`` to match."""
        text = decode_content(self.content, self.encoding)
        serialized = json.dumps(document, indent=2, ensure_ascii=False)
        if text.endswith("\n"):
            serialized += "\n"
        self.document = document
        self.content = encode_content(serialized, self.encoding)


def decode_content(content: str, encoding: str) -> str:
    if encoding == "base64":
        # Line breaks inserted by the API are discarded by b64decode.
        return base64.b64decode(content).decode("utf-8")
    return content


def encode_content(text: str, encoding: str) -> str:
    if encoding == "base64":
        return base64.b64encode(text.encode("utf-8")).decode("ascii")
    return text
