"""Item identity and description models.

ItemRef is the composite identity of a class of tradeable item; ItemDescription is
the display metadata Steam returns for it. Descriptions never change for a given
(app_id, class_id, instance_id), so they are cached indefinitely.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

UNKNOWN_ITEM_NAME = "Unknown Item"


@dataclass(frozen=True, slots=True, order=True)
class ItemRef:
    """Composite item identity, unique within its origin app."""

    app_id: int
    class_id: str
    instance_id: str = "0"

    @property
    def cache_key(self) -> str:
        """Stable string key used in the cache file."""
        return f"{self.app_id}/{self.class_id}/{self.instance_id}"

    @classmethod
    def from_cache_key(cls, key: str) -> ItemRef:
        """Parse a key produced by cache_key."""
        app_id, class_id, instance_id = key.split("/", 2)
        return cls(app_id=int(app_id), class_id=class_id, instance_id=instance_id)

    @classmethod
    def from_response(cls, asset: Mapping[str, Any]) -> ItemRef:
        """Build from a Steam CEcon_Asset dict (appid, classid, instanceid)."""
        return cls(
            app_id=int(asset["appid"]),
            class_id=str(asset["classid"]),
            instance_id=str(asset.get("instanceid") or "0"),
        )


@dataclass(frozen=True, slots=True)
class ItemDescription:
    """Display metadata for an item class (GetAssetClassInfo)."""

    name: str
    market_name: str = ""
    market_hash_name: str = ""
    icon_url: str | None = None
    name_color: str | None = None
    type: str | None = None

    @property
    def display_name(self) -> str:
        return self.market_hash_name or self.market_name or self.name

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ItemDescription:
        """Build from a cache entry or a GetAssetClassInfo result entry.

        Raises:
            ValueError: If no name field is present.
        """
        name = data.get("name") or data.get("market_name") or data.get("market_hash_name")
        if not isinstance(name, str) or not name:
            raise ValueError("item description has no name")
        return cls(
            name=name,
            market_name=str(data.get("market_name") or ""),
            market_hash_name=str(data.get("market_hash_name") or ""),
            icon_url=data.get("icon_url") or None,
            name_color=data.get("name_color") or None,
            type=data.get("type") or None,
        )


@dataclass(frozen=True, slots=True)
class ItemResolution:
    """Result of resolving item refs through the cache.

    A non-empty `missing` set means partial resolution: those refs could not be
    described and are rendered with a placeholder.
    """

    descriptions: dict[ItemRef, ItemDescription] = field(default_factory=dict)
    missing: frozenset[ItemRef] = frozenset()

    @property
    def is_partial(self) -> bool:
        return bool(self.missing)

    def name_for(self, item: ItemRef) -> str:
        description = self.descriptions.get(item)
        return description.display_name if description else UNKNOWN_ITEM_NAME
