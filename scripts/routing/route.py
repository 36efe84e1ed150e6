"""Route model: one (prefix, path) entry of the town routing table."""

from __future__ import annotations

from pathlib import PurePosixPath, PureWindowsPath

from pydantic import BaseModel, ConfigDict, Field, field_validator

from conf import TOWN_ROUTE_PATH


class Route(BaseModel):
    """Maps an identifier prefix (``"tr-"``) to a store path relative to the town root.

    A ``path`` of ``"."`` means the record lives in the town-level store.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    prefix: str = Field(min_length=1)
    path: str = Field(min_length=1)

    @field_validator("prefix")
    @classmethod
    def _prefix_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prefix must not be blank")
        return value

    @field_validator("path")
    @classmethod
    def _path_is_relative(cls, value: str) -> str:
        if PurePosixPath(value).is_absolute() or PureWindowsPath(value).is_absolute():
            raise ValueError(f"path must be relative to the town root, got {value!r}")
        if ".." in PurePosixPath(value).parts or ".." in PureWindowsPath(value).parts:
            raise ValueError(f"path must stay under the town root, got {value!r}")
        return value

    @property
    def is_town_route(self) -> bool:
        return PurePosixPath(self.path) == PurePosixPath(TOWN_ROUTE_PATH)

    @property
    def rig_name(self) -> str | None:
        """First component of ``path``, or None for the town route."""
        if self.is_town_route:
            return None
        return PurePosixPath(self.path).parts[0]

    def matches(self, identifier: str) -> bool:
        return identifier.startswith(self.prefix)

    def to_line(self) -> str:
        """Serialize as a single routes.jsonl line (no trailing newline)."""
        return self.model_dump_json()
