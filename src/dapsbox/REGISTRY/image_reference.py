# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Local image reference handling.
Parses references like 'dapsbox', 'dapsbox:15.5' or 'localhost:5000/docs/daps:1'.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class ImageReference:
    """
    Parsed reference to an image in the local image store.

    Unlike a pull reference, an unqualified name stays unqualified: podman and
    buildah resolve it as a local 'localhost/<name>' image.

    Examples:
        - dapsbox -> dapsbox:latest
        - dapsbox:15.5 -> dapsbox:15.5
        - localhost:5000/docs/daps:1 -> localhost:5000/docs/daps:1
    """

    repository: str
    tag: str = "latest"
    registry: Optional[str] = None

    DEFAULT_TAG = "latest"

    @classmethod
    def parse(cls, reference: str) -> "ImageReference":
        """
        Parse an image reference string.

        Args:
            reference: Image reference string (e.g., 'dapsbox:latest').

        Returns:
            Parsed ImageReference object.

        Raises:
            ValueError: If the reference is empty or has an empty component.
        """
        reference = reference.strip() if reference else ""
        if not reference:
            raise ValueError("Empty image reference")
        if "@" in reference:
            raise ValueError(f"Digest references cannot name a local build: {reference}")

        tag = cls.DEFAULT_TAG
        last_colon = reference.rfind(":")
        if last_colon != -1:
            after_colon = reference[last_colon + 1 :]
            # A colon followed by a path is a registry port, not a tag
            if "/" not in after_colon:
                tag = after_colon
                reference = reference[:last_colon]
                if not tag:
                    raise ValueError("Empty tag in image reference")

        registry = None
        parts = reference.split("/")
        first_part = parts[0]
        if len(parts) > 1 and ("." in first_part or ":" in first_part or first_part == "localhost"):
            registry = first_part
            parts = parts[1:]

        repository = "/".join(parts)
        if not repository or any(not part for part in parts):
            raise ValueError(f"Empty repository in image reference: {reference}")

        return cls(repository=repository, tag=tag, registry=registry)

    @property
    def name(self) -> str:
        """Reference as handed to the image builder and the runtime."""
        if self.registry:
            return f"{self.registry}/{self.repository}:{self.tag}"
        return f"{self.repository}:{self.tag}"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ImageReference({self.name})"
