"""Library panel models and patch-merge rules.

The panel ``model`` is the opaque visual definition. It is stored and
returned as-is; nothing in this package interprets its contents.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


class Panel(BaseModel):
    """One row of ``library_panels``."""

    model_config = {"frozen": True}

    id: int
    uid: str
    org_id: int
    folder_id: int
    name: str
    model: Any
    created: str
    updated: str
    created_by: int
    updated_by: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Panel:
        """Build a Panel from a ``library_panels`` row mapping."""
        return cls(
            id=row["id"],
            uid=row["uid"],
            org_id=row["org_id"],
            folder_id=row["folder_id"],
            name=row["name"],
            model=decode_model(row["model"]),
            created=row["created"],
            updated=row["updated"],
            created_by=row["created_by"],
            updated_by=row["updated_by"],
        )

    def to_row(self) -> dict[str, Any]:
        """Column values for insert/update (storage id excluded)."""
        return {
            "uid": self.uid,
            "org_id": self.org_id,
            "folder_id": self.folder_id,
            "name": self.name,
            "model": encode_model(self.model),
            "created": self.created,
            "updated": self.updated,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
        }


class PanelPatch(BaseModel):
    """Partial update. Default values mean "keep what is stored"."""

    model_config = {"frozen": True}

    folder_id: int = 0
    name: str = ""
    model: Any = None


def merge_patch(
    existing: Panel,
    patch: PanelPatch,
    *,
    updated: str,
    updated_by: int,
) -> Panel:
    """Return *existing* with every non-default field of *patch* applied.

    ``id``, ``uid``, ``org_id``, ``created`` and ``created_by`` always come
    from *existing*.
    """
    return existing.model_copy(
        update={
            "folder_id": patch.folder_id if patch.folder_id != 0 else existing.folder_id,
            "name": patch.name if patch.name != "" else existing.name,
            "model": patch.model if patch.model is not None else existing.model,
            "updated": updated,
            "updated_by": updated_by,
        }
    )


def encode_model(model: Any) -> str:
    """Serialize a panel model for the ``model`` text column."""
    return json.dumps(model, separators=(",", ":"))


def decode_model(raw: str | None) -> Any:
    if raw is None:
        return None
    return json.loads(raw)
