"""Pydantic models for the action metadata file (``action.yml``).

The document layout follows the GitHub metadata syntax:
https://docs.github.com/en/actions/creating-actions/metadata-syntax-for-github-actions
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, StrictBool, StrictStr
from pydantic_core import PydanticSerializationError
from yaml.constructor import ConstructorError

from .config import ActionsSettings, get_settings
from .errors import ActionsIOError, ActionsNotImplemented

logger = logging.getLogger(__name__)

_DUMP_OPTIONS: dict[str, Any] = {
    "sort_keys": False,
    "default_flow_style": False,
    "allow_unicode": True,
}


class ActionBranding(BaseModel):
    """Badge shown on the marketplace. Both keys are mandatory."""

    color: StrictStr
    icon: StrictStr


class ActionInput(BaseModel):
    """A single entry of the ``inputs`` mapping."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: StrictStr | None = None
    required: StrictBool | None = None
    default: StrictStr | None = None
    deprecation_message: StrictStr | None = Field(default=None, alias="deprecationMessage")

    # In-memory only: never read from nor written to a document.
    _kind: str = PrivateAttr(default="")

    @property
    def kind(self) -> str:
        return self._kind

    @kind.setter
    def kind(self, value: str) -> None:
        self._kind = value


class ActionOutput(BaseModel):
    """A single entry of the ``outputs`` mapping."""

    description: StrictStr | None = None


class ActionRuns(BaseModel):
    """Execution strategy of the action (``runs`` section)."""

    using: StrictStr = Field(..., description="Execution mechanism, e.g. 'docker'")
    image: StrictStr | None = Field(default=None, description="Image or Dockerfile reference, kept verbatim")
    args: list[StrictStr] | None = None

    @classmethod
    def default(cls) -> ActionRuns:
        """Container execution built from the local ``./Dockerfile``."""
        return cls(using="docker", image="./Dockerfile")


class ActionDescriptor(BaseModel):
    """Action metadata file, optionally bound to the path it lives at.

    Documents must carry ``inputs``, ``outputs`` and ``runs``; use
    :meth:`create` for a fresh descriptor with empty mappings and the default
    execution strategy. The bound path is the descriptor's only notion of
    location and is never part of the document body.
    """

    name: StrictStr | None = None
    description: StrictStr | None = None
    author: StrictStr | None = None
    branding: ActionBranding | None = None
    inputs: dict[str, ActionInput] = Field(..., description="May be empty, never absent")
    outputs: dict[str, ActionOutput] = Field(..., description="May be empty, never absent")
    runs: ActionRuns

    _path: Path | None = PrivateAttr(default=None)

    @classmethod
    def create(
        cls,
        settings: ActionsSettings | None = None,
        path: str | Path | None = None,
        **data: Any,
    ) -> ActionDescriptor:
        """Return a fresh descriptor, unbound unless ``path`` is given.

        ``name`` is seeded from ``settings.package_name``, ``runs`` from
        ``ActionRuns.default()`` and the mappings start empty, unless the
        caller supplies them.
        """
        settings = settings or get_settings()
        data.setdefault("name", settings.package_name)
        data.setdefault("inputs", {})
        data.setdefault("outputs", {})
        data.setdefault("runs", ActionRuns.default())
        descriptor = cls(**data)
        descriptor.path = path
        return descriptor

    @classmethod
    def load(cls, path: str | Path) -> ActionDescriptor:
        return load_action(path)

    @classmethod
    def from_yaml(cls, raw: str | bytes) -> ActionDescriptor:
        """Parse document text; the result is not bound to any path."""
        text = raw.decode() if isinstance(raw, bytes) else raw
        return cls.model_validate(_parse_document(text))

    @property
    def path(self) -> Path | None:
        return self._path

    @path.setter
    def path(self, value: str | Path | None) -> None:
        self._path = Path(value) if value is not None else None

    def to_document(self) -> dict[str, Any]:
        """Plain mapping as persisted: absent optional keys are left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_document(), **_DUMP_OPTIONS)

    def write(self) -> Path:
        """Write the descriptor to its bound path and return that path.

        Missing parent directories are created. The document is built before
        the file is opened; the file is then truncated in place, so a failure
        while emitting can still leave it incomplete.
        """
        if self._path is None:
            raise ActionsNotImplemented()
        path = self._path
        try:
            document = self.to_document()
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as fhandle:
                yaml.safe_dump(document, fhandle, **_DUMP_OPTIONS)
        except (OSError, yaml.YAMLError, PydanticSerializationError) as err:
            raise ActionsIOError(str(err)) from err
        logger.debug("Wrote action descriptor to %s", path)
        return path


# ---------------------------------------------------------------------------
# helpers


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses duplicate keys inside a mapping."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            if key_node.tag == "tag:yaml.org,2002:merge":
                continue
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                # unhashable key, SafeLoader reports it
                continue
            if duplicate:
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


# YAML 1.2 booleans only: on/off/yes/no stay strings.
_UniqueKeyLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_UniqueKeyLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def _parse_document(stream: Any) -> Any:
    return yaml.load(stream, Loader=_UniqueKeyLoader)


def load_action(path: str | Path) -> ActionDescriptor:
    """Load ``path`` into a descriptor bound to that path.

    ``OSError``, ``yaml.YAMLError`` and ``pydantic.ValidationError`` are
    raised as-is.
    """
    with open(path, "r", encoding="utf-8") as fhandle:
        data = _parse_document(fhandle)
    descriptor = ActionDescriptor.model_validate(data)
    descriptor.path = path
    logger.debug("Loaded action descriptor from %s", path)
    return descriptor


__all__ = [
    "ActionBranding",
    "ActionDescriptor",
    "ActionInput",
    "ActionOutput",
    "ActionRuns",
    "load_action",
]
