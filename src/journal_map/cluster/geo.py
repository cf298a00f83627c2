# cluster/geo.py
from typing import Sequence
import numpy as np

from journal_map.model.models import EARTH_RADIUS_KM, BoundingBox, GeoPoint


def haversine_km_many(origin: GeoPoint, lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """origin から各点までの距離 [km] をまとめて計算"""
    lat1 = np.radians(origin.latitude)
    lat2 = np.radians(lats)
    dlat = lat2 - lat1
    dlon = np.radians(lons - origin.longitude)
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def pairwise_km(lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """N x N の距離行列"""
    la = np.radians(lats)[:, None]
    lb = np.radians(lats)[None, :]
    dlat = lb - la
    dlon = np.radians(lons[None, :] - lons[:, None])
    a = np.sin(dlat / 2) ** 2 + np.cos(la) * np.cos(lb) * np.sin(dlon / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def centroid(points: Sequence[GeoPoint]) -> GeoPoint:
    """
    緯度・経度それぞれの算術平均（球面重心ではない）。
    1点ならその点をそのまま返す。
    """
    if not points:
        raise ValueError("points is empty")
    if len(points) == 1:
        return points[0]
    coords = np.array([[p.latitude, p.longitude] for p in points])
    lat, lon = coords.mean(axis=0)
    # 浮動小数の丸めでメンバー範囲から外れないように
    lat = float(np.clip(lat, coords[:, 0].min(), coords[:, 0].max()))
    lon = float(np.clip(lon, coords[:, 1].min(), coords[:, 1].max()))
    return GeoPoint(lat, lon)


def bounding_box(points: Sequence[GeoPoint]) -> BoundingBox:
    if not points:
        raise ValueError("points is empty")
    coords = np.array([[p.latitude, p.longitude] for p in points])
    mn = coords.min(axis=0)
    mx = coords.max(axis=0)
    return BoundingBox(
        min_lat=float(mn[0]), max_lat=float(mx[0]),
        min_lon=float(mn[1]), max_lon=float(mx[1]),
    )
