from __future__ import annotations
import pathlib, json, warnings
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from jsonschema import validate

from .models import Entry, GeoPoint


def parse_timestamp(raw: Any) -> datetime:
    """
    ISO8601 文字列 or エポックミリ秒 → UTC の aware datetime。
    タイムゾーン無しの文字列は UTC とみなす。
    """
    if isinstance(raw, bool):
        raise ValueError(f"unsupported timestamp: {raw!r}")
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw / 1000.0, tz=timezone.utc)
    if isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    raise ValueError(f"unsupported timestamp: {raw!r}")


def _clean(text: Any) -> Optional[str]:
    if text is None:
        return None
    # スキーマ検証なしでも数値等は文字列として扱う
    text = str(text).strip()
    return text or None


class EntryLoader:
    """ジャーナルの JSON エクスポートを読み込んで Entry 化するローダ"""

    def __init__(self, validate_schema: bool = True, schema_dir: str | pathlib.Path | None = None):
        self.validate_schema = validate_schema
        # デフォルト: このパッケージの schemas ディレクトリ
        if schema_dir is None:
            self.schema_dir = pathlib.Path(__file__).parent.parent / "schemas"
        else:
            self.schema_dir = pathlib.Path(schema_dir)

    def _load_json(self, path: str | pathlib.Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _validate(self, instance: Any, schema_name: str) -> None:
        if self.validate_schema:
            schema = self._load_json(self.schema_dir / schema_name)
            validate(instance=instance, schema=schema)

    # --- 公開API ------------------------------------------------------

    def load_entries(self, path: str | pathlib.Path) -> List[Entry]:
        """entries.json → Entry のリスト"""
        data = self._load_json(path)
        return self.parse_entries(data)

    def parse_entries(self, data: Mapping[str, Any]) -> List[Entry]:
        self._validate(data, "entries.schema.json")

        entries: List[Entry] = []
        seen: set[str] = set()
        for item in data["entries"]:
            eid = str(item["id"])
            if eid in seen:
                warnings.warn(f"Duplicate entry id {eid}, skipped")
                continue
            seen.add(eid)
            entries.append(self._to_entry(eid, item))
        return entries

    def _to_entry(self, eid: str, item: Mapping[str, Any]) -> Entry:
        loc = item.get("location") or None
        point: Optional[GeoPoint] = None
        city = country = None
        if loc is not None:
            city = _clean(loc.get("city"))
            country = _clean(loc.get("country"))
            point = GeoPoint(float(loc["latitude"]), float(loc["longitude"]))
            if not point.is_valid():
                # 範囲外・NaN の座標はクラスタリング対象から外す
                warnings.warn(f"Entry {eid} has invalid location {point}, ignored")
                point = None

        return Entry(
            id=eid,
            title=item.get("title", ""),
            timestamp=parse_timestamp(item["timestamp"]),
            location=point,
            city=city,
            country=country,
        )
