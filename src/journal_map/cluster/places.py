# cluster/places.py
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from journal_map.model.models import Cluster, Entry, cluster_id_for, sort_members
from .geo import centroid

UNKNOWN_COUNTRY = "unknown_location"
UNKNOWN_CITY = "unknown_city"


def _place_key(e: Entry) -> Tuple[str, str]:
    return (e.country or UNKNOWN_COUNTRY, e.city or UNKNOWN_CITY)


def group_by_place(entries: Iterable[Entry]) -> List[Cluster]:
    """
    国 → 都市 の順でまとめる。距離は見ない（大きく引いた地図向け）。
    位置を持たないエントリは除外する。
    """
    buckets: Dict[Tuple[str, str], List[Entry]] = defaultdict(list)
    for e in entries:
        if not e.has_location:
            continue
        buckets[_place_key(e)].append(e)

    clusters = []
    for key in sorted(buckets):
        members = buckets[key]
        clusters.append(
            Cluster(
                id=cluster_id_for(members),
                centroid=centroid([m.location for m in members]),
                members=sort_members(members),
            )
        )
    return clusters


@dataclass(frozen=True)
class PlaceSummary:
    countries: int
    cities: int


def _distinct(values: Iterable[Optional[str]]) -> set:
    return {v.strip() for v in values if v and v.strip()}


def summarize_places(entries: Iterable[Entry]) -> PlaceSummary:
    """位置付きエントリの国数・都市数"""
    located = [e for e in entries if e.has_location]
    return PlaceSummary(
        countries=len(_distinct(e.country for e in located)),
        cities=len(_distinct(e.city for e in located)),
    )
