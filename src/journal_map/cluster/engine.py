"""
ジャーナル地図のクラスタリング
-----------------------------------
位置付きエントリをズームに応じた距離しきい値でまとめる。
クラスタ ID はメンバー ID 集合から決まるため、カメラ移動で
再計算しても同じメンバーなら同じ ID になる（選択状態が保てる）。

戦略:
  - greedy    : シードから1回だけ距離判定して吸収（既定）
  - connected : しきい値未満の辺でつながる連結成分
  - place     : 国/都市でまとめる（ズーム無視）
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Sequence

import numpy as np

from journal_map.model.models import Cluster, Entry, cluster_id_for, sort_members
from .geo import centroid, haversine_km_many, pairwise_km
from .places import group_by_place

logger = logging.getLogger(__name__)

# (ズーム上限[未満], しきい値[km])。ズームが小さいほど大きくまとめる
ZOOM_THRESHOLDS_KM = (
    (3.0, 1000.0),
    (5.0, 500.0),
    (7.0, 200.0),
    (9.0, 100.0),
    (11.0, 50.0),
    (13.0, 25.0),
    (15.0, 10.0),
    (17.0, 5.0),
)
MIN_THRESHOLD_KM = 1.0

STRATEGIES = ("greedy", "connected", "place")


def threshold_km_for_zoom(zoom: float) -> float:
    for upper, km in ZOOM_THRESHOLDS_KM:
        if zoom < upper:
            return km
    return MIN_THRESHOLD_KM


def _make_cluster(members: Sequence[Entry]) -> Cluster:
    return Cluster(
        id=cluster_id_for(members),
        centroid=centroid([m.location for m in members]),
        members=sort_members(members),
    )


def _greedy_buckets(pool: List[Entry], threshold_km: float) -> List[List[Entry]]:
    lats = np.array([e.location.latitude for e in pool])
    lons = np.array([e.location.longitude for e in pool])
    remaining = np.ones(len(pool), dtype=bool)

    buckets = []
    for i, seed in enumerate(pool):
        if not remaining[i]:
            continue
        remaining[i] = False
        # シードからの距離だけで判定（再展開はしない）
        dist = haversine_km_many(seed.location, lats, lons)
        hit = remaining & (dist < threshold_km)
        remaining &= ~hit
        buckets.append([seed] + [pool[j] for j in np.flatnonzero(hit)])
    return buckets


def _connected_buckets(pool: List[Entry], threshold_km: float) -> List[List[Entry]]:
    n = len(pool)
    lats = np.array([e.location.latitude for e in pool])
    lons = np.array([e.location.longitude for e in pool])
    near = pairwise_km(lats, lons) < threshold_km

    parent = list(range(n))

    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i, j in zip(*np.nonzero(np.triu(near, k=1))):
        ri, rj = find(int(i)), find(int(j))
        if ri != rj:
            # 小さい index を根にして結果の並びを安定させる
            parent[max(ri, rj)] = min(ri, rj)

    groups: dict[int, List[Entry]] = {}
    for i in range(n):
        groups.setdefault(find(i), []).append(pool[i])
    return [groups[k] for k in sorted(groups)]


class ClusterEngine:
    """entries + zoom → Cluster のリスト（純粋関数・スレッド安全）"""

    def __init__(self, strategy: str = "greedy"):
        if strategy not in STRATEGIES:
            raise ValueError(f"unknown strategy {strategy!r} (expected one of {STRATEGIES})")
        self.strategy = strategy

    def cluster(self, entries: Iterable[Entry], zoom: float) -> List[Cluster]:
        # id 順に並べて、入力順に依存しない結果にする
        pool = sorted((e for e in entries if e.has_location), key=lambda e: e.id)
        if not pool:
            return []

        if self.strategy == "place":
            clusters = group_by_place(pool)
            logger.debug("place clustering: entries=%d clusters=%d", len(pool), len(clusters))
            return clusters

        threshold = threshold_km_for_zoom(zoom)
        if self.strategy == "connected":
            buckets = _connected_buckets(pool, threshold)
        else:
            buckets = _greedy_buckets(pool, threshold)

        clusters = [_make_cluster(b) for b in buckets]
        logger.debug(
            "%s clustering: zoom=%.2f threshold=%.1fkm entries=%d clusters=%d",
            self.strategy, zoom, threshold, len(pool), len(clusters),
        )
        return clusters


def cluster(entries: Iterable[Entry], zoom: float, strategy: str = "greedy") -> List[Cluster]:
    return ClusterEngine(strategy).cluster(entries, zoom)
