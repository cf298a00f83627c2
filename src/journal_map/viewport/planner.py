"""
初期カメラ位置の決定。

優先順位:
  1. 端末の現在地
  2. 位置付きエントリが1件 → その地点
  3. 2件以上 → 全件のバウンディングボックス
  4. ロケールごとの既定地域（最後は世界全体）
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from journal_map.cluster.geo import bounding_box
from journal_map.model.models import Entry, GeoPoint
from .locale import LocaleTag, region_for_locale

logger = logging.getLogger(__name__)

# (緯度スパン[度] がこれより大きい, ズーム)
SPAN_ZOOM_TABLE = (
    (40.0, 3.0),
    (20.0, 4.0),
    (10.0, 5.0),
    (5.0, 6.0),
    (2.0, 7.0),
    (1.0, 8.0),
    (0.5, 10.0),
    (0.2, 12.0),
)
MAX_SPAN_ZOOM = 14.0


@dataclass(frozen=True)
class Viewport:
    center: GeoPoint
    zoom: float
    source: str = ""


@dataclass(frozen=True)
class PlannerConfig:
    device_zoom: float = 8.0        # 近隣レベル
    single_entry_zoom: float = 14.0  # 街路レベル
    margin: float = 1.3
    min_span_deg: float = 0.01


def zoom_for_span(span_deg: float) -> float:
    for lower, zoom in SPAN_ZOOM_TABLE:
        if span_deg > lower:
            return zoom
    return MAX_SPAN_ZOOM


def default_viewport_for_locale(locale: Union[LocaleTag, str, None]) -> Viewport:
    tag = LocaleTag.parse(locale) if isinstance(locale, str) else locale
    rule = region_for_locale(tag)
    return Viewport(rule.center, rule.zoom, f"locale:{rule.name}")


def plan_initial_viewport(
    entries: Iterable[Entry],
    device_location: Optional[GeoPoint] = None,
    locale: Union[LocaleTag, str, None] = None,
    config: PlannerConfig = PlannerConfig(),
) -> Viewport:
    if device_location is not None:
        vp = Viewport(device_location, config.device_zoom, "device")
        logger.info("initial viewport from device location: %s", vp)
        return vp

    points = [e.location for e in entries if e.has_location]
    if len(points) == 1:
        vp = Viewport(points[0], config.single_entry_zoom, "entry")
    elif points:
        box = bounding_box(points)
        span = max(config.min_span_deg, box.lat_span() * config.margin)
        vp = Viewport(box.center(), zoom_for_span(span), "entries")
    else:
        vp = default_viewport_for_locale(locale)

    logger.info("initial viewport: %s", vp)
    return vp
