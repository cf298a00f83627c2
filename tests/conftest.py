import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# src レイアウトをインストール無しでも読めるように
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from journal_map.model.models import Entry, GeoPoint

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

PARIS = GeoPoint(48.8566, 2.3522)
PARIS_NEARBY = GeoPoint(48.8570, 2.3530)
VERSAILLES = GeoPoint(48.8049, 2.1204)
LONDON = GeoPoint(51.5074, -0.1278)
LYON = GeoPoint(45.7640, 4.8357)
MARSEILLE = GeoPoint(43.2965, 5.3698)
NICE = GeoPoint(43.7102, 7.2620)
NEW_YORK = GeoPoint(40.7128, -74.0060)


def make_entry(eid, location=None, days_ago=0, city=None, country=None, title=None):
    return Entry(
        id=eid,
        title=title or f"entry {eid}",
        timestamp=BASE_TIME - timedelta(days=days_ago),
        location=location,
        city=city,
        country=country,
    )


@pytest.fixture
def world_entries():
    """ズームごとのクラスタ数が分かっている固定セット"""
    return [
        make_entry("a", PARIS, 1, "Paris", "France"),
        make_entry("b", PARIS_NEARBY, 2, "Paris", "France"),
        make_entry("c", VERSAILLES, 3, "Versailles", "France"),
        make_entry("d", LONDON, 4, "London", "United Kingdom"),
        make_entry("e", LYON, 5, "Lyon", "France"),
        make_entry("f", MARSEILLE, 6, "Marseille", "France"),
        make_entry("g", NICE, 7, "Nice", "France"),
        make_entry("h", NEW_YORK, 8, "New York", "United States"),
        make_entry("x", None, 0),
        make_entry("y", None, 9, "Paris", "France"),
    ]
