"""
Cluster layer: 位置付きエントリをズームに応じてまとめる。

- engine: しきい値表と ClusterEngine
- geo: haversine / 重心 / バウンディングボックス
- places: 国・都市ごとのまとめと集計
"""
__all__ = ["engine", "geo", "places"]
