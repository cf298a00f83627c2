from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple
import math

EARTH_RADIUS_KM = 6371.0


# --- 地理 -------------------------------------------------------------

@dataclass(frozen=True)
class GeoPoint:
    """緯度経度（度）"""
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            return False
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def center(self) -> GeoPoint:
        return GeoPoint((self.min_lat + self.max_lat) * 0.5, (self.min_lon + self.max_lon) * 0.5)

    def lat_span(self) -> float:
        return self.max_lat - self.min_lat


# --- ジャーナル -------------------------------------------------------

@dataclass(frozen=True)
class Entry:
    """地図から見たジャーナル1件（読み取り専用）"""
    id: str
    title: str
    timestamp: datetime
    location: Optional[GeoPoint] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @property
    def has_location(self) -> bool:
        return self.location is not None


def _escape_id(eid: str) -> str:
    return eid.replace("\\", "\\\\").replace("-", "\\-")


def cluster_id_for(entries: Iterable[Entry]) -> str:
    """
    メンバーIDを昇順ソートして '-' で連結（入力順に依存しない）。
    ID 内の '-' と '\\' はエスケープするので、異なる集合が同じ ID にならない。
    """
    return "-".join(_escape_id(eid) for eid in sorted(e.id for e in entries))


def sort_members(entries: Iterable[Entry]) -> Tuple[Entry, ...]:
    """新しい順。同時刻は id 昇順"""
    by_id = sorted(entries, key=lambda e: e.id)
    return tuple(sorted(by_id, key=lambda e: e.timestamp, reverse=True))


@dataclass(frozen=True, eq=False)
class Cluster:
    """
    1回のクラスタリングで得られるグループ。
    id はメンバー集合から決まるので、再計算後も同じメンバーなら等価。
    """
    id: str
    centroid: GeoPoint
    members: Tuple[Entry, ...]

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def is_multi(self) -> bool:
        return self.count > 1

    @property
    def is_singleton(self) -> bool:
        return self.count == 1

    @property
    def first_entry(self) -> Entry:
        return self.members[0]

    @property
    def member_ids(self) -> Tuple[str, ...]:
        return tuple(e.id for e in self.members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cluster):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


__all__ = [
    "EARTH_RADIUS_KM",
    "GeoPoint",
    "BoundingBox",
    "Entry",
    "Cluster",
    "cluster_id_for",
    "sort_members",
]
