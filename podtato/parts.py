from __future__ import annotations

import socket

from pydantic import BaseModel, ConfigDict, Field

from .errors import FatalError
from .settings import Settings


class PartResult(BaseModel):
    """What a part service reports: image variant, serving host and version.

    The empty result stands for "omit this part", not for an error.
    """

    model_config = ConfigDict(populate_by_name=True)

    image: str = Field("", description="Asset path of the image variant")
    served_by: str = Field("", alias="servedBy", description="Hostname that answered")
    version: str = Field("", description="Version of the answering service")

    @classmethod
    def empty(cls) -> "PartResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.image or self.served_by or self.version)


def own_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError as e:
        raise FatalError(f"failed to get hostname: {e}") from e


def part_image_path(part_name: str, part_number: str) -> str:
    return f"/assets/images/{part_name}/{part_name}-{part_number}.svg"


def serve_part(part_name: str, config: Settings) -> PartResult:
    return PartResult(
        image=part_image_path(part_name, config.part_number),
        served_by=own_hostname(),
        version=config.version,
    )
