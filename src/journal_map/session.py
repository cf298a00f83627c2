# session.py
"""
地図画面1回分のライフサイクル。

  UNINITIALIZED --initialize()--> INITIALIZED --(pan/zoom)--> INITIALIZED

カメラ移動はピンチ中に大量に来るので、最後の移動から settle_delay 秒
経つまで再クラスタリングしない。時刻は呼び出し側から渡す。
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from journal_map.cluster.engine import ClusterEngine
from journal_map.model.models import Cluster, Entry, GeoPoint
from journal_map.viewport.locale import LocaleTag
from journal_map.viewport.planner import PlannerConfig, Viewport, plan_initial_viewport

logger = logging.getLogger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class MapSession:
    def __init__(
        self,
        entries: Iterable[Entry] = (),
        engine: Optional[ClusterEngine] = None,
        planner_config: Optional[PlannerConfig] = None,
        settle_delay: float = 0.25,
    ):
        self.entries: Tuple[Entry, ...] = tuple(entries)
        self.engine = engine or ClusterEngine()
        self.planner_config = planner_config or PlannerConfig()
        self.settle_delay = settle_delay

        self.state = SessionState.UNINITIALIZED
        self.camera: Optional[Viewport] = None
        self.clusters: List[Cluster] = []
        self.selected: Optional[Cluster] = None

        self._pending: Optional[Viewport] = None
        self._last_move: Optional[float] = None

    # --- 初期化 -------------------------------------------------------

    def initialize(
        self,
        device_location: Optional[GeoPoint] = None,
        locale: Union[LocaleTag, str, None] = None,
    ) -> Viewport:
        """最初の1回だけ初期カメラを決める。2回目以降は現在のカメラを返す"""
        if self.state is SessionState.INITIALIZED:
            return self.camera

        self.camera = plan_initial_viewport(
            self.entries, device_location, locale, self.planner_config
        )
        self.state = SessionState.INITIALIZED
        self._recluster()
        return self.camera

    # --- カメラ -------------------------------------------------------

    def on_camera_move(self, viewport: Viewport, now: float) -> None:
        self._require_initialized()
        self._pending = viewport
        self._last_move = now

    def settle(self, now: float) -> bool:
        """静止判定。カメラを反映したら True"""
        self._require_initialized()
        if self._pending is None or now - self._last_move < self.settle_delay:
            return False

        previous = self.camera
        self.camera, self._pending = self._pending, None
        # クラスタはズームだけに依存する
        if previous is None or previous.zoom != self.camera.zoom:
            self._recluster()
        return True

    # --- データ / 選択 ------------------------------------------------

    def set_entries(self, entries: Iterable[Entry]) -> None:
        self.entries = tuple(entries)
        if self.state is SessionState.INITIALIZED:
            self._recluster()

    def select(self, cluster_id: str) -> Optional[Cluster]:
        self.selected = self._find(cluster_id)
        return self.selected

    def clear_selection(self) -> None:
        self.selected = None

    # --- 内部 ---------------------------------------------------------

    def _find(self, cluster_id: str) -> Optional[Cluster]:
        for c in self.clusters:
            if c.id == cluster_id:
                return c
        return None

    def _recluster(self) -> None:
        self.clusters = self.engine.cluster(self.entries, self.camera.zoom)
        if self.selected is not None:
            # 同じメンバー構成が残っていれば新しい値に差し替える
            matched = self._find(self.selected.id)
            if matched is None:
                logger.debug("selected cluster %s disappeared", self.selected.id)
            self.selected = matched

    def _require_initialized(self) -> None:
        if self.state is not SessionState.INITIALIZED:
            raise RuntimeError("map session is not initialized")
