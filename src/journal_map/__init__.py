"""
journal_map: ジャーナル地図のクラスタリングと初期ビューポート計算。

- ClusterEngine: entries + zoom → 安定IDつきクラスタ
- plan_initial_viewport: 現在地 > 1件 > 全件の範囲 > ロケール の順でカメラを決める
- MapSession: 画面1回分の状態（初期化・カメラ静止待ち・選択）
"""
from .model.models import GeoPoint, Entry, Cluster, BoundingBox
from .cluster.engine import ClusterEngine, threshold_km_for_zoom
from .viewport.locale import LocaleTag
from .viewport.planner import Viewport, PlannerConfig, plan_initial_viewport
from .session import MapSession, SessionState

__all__ = [
    "GeoPoint",
    "Entry",
    "Cluster",
    "BoundingBox",
    "ClusterEngine",
    "threshold_km_for_zoom",
    "LocaleTag",
    "Viewport",
    "PlannerConfig",
    "plan_initial_viewport",
    "MapSession",
    "SessionState",
]
