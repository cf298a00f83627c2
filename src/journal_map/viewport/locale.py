# viewport/locale.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import re

from journal_map.model.models import GeoPoint

_SEP = re.compile(r"[-_]")


@dataclass(frozen=True)
class LocaleTag:
    """(言語, 国) の組。国は無いこともある"""
    language: str
    country: Optional[str] = None

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["LocaleTag"]:
        """
        'fr-FR' / 'en_US' / 'en_US.UTF-8' / 'zh-Hans-CN' / 'fr' を受け付ける。
        解釈できなければ None。
        """
        if not text:
            return None
        # POSIX の文字コード・修飾子を落とす
        text = text.split(".", 1)[0].split("@", 1)[0].strip()
        parts = [p for p in _SEP.split(text) if p]
        if not parts or not parts[0].isalpha():
            return None

        language = parts[0].lower()
        country = None
        for p in parts[1:]:
            # 2文字の国コード or 3桁の地域コード（スクリプト 'Hans' 等は飛ばす）
            if (len(p) == 2 and p.isalpha()) or (len(p) == 3 and p.isdigit()):
                country = p.upper()
                break
        return cls(language, country)

    def __str__(self) -> str:
        return f"{self.language}-{self.country}" if self.country else self.language


@dataclass(frozen=True)
class RegionRule:
    name: str
    matches: Callable[[LocaleTag], bool]
    center: GeoPoint
    zoom: float


def _lang_country(languages: Tuple[str, ...], country: str) -> Callable[[LocaleTag], bool]:
    return lambda t: t.language in languages and t.country == country


_EUROPE = frozenset({"BE", "NL", "CH", "AT", "PT", "DK", "SE", "NO", "FI"})

WORLD = RegionRule("world", lambda t: True, GeoPoint(20.0, 0.0), 2.5)

# 上から順に評価して最初に一致したものを使う
REGION_RULES: Tuple[RegionRule, ...] = (
    RegionRule("us", _lang_country(("en",), "US"), GeoPoint(39.8283, -98.5795), 4.5),
    RegionRule("ca", _lang_country(("en", "fr"), "CA"), GeoPoint(56.1304, -106.3468), 3.8),
    RegionRule("gb", _lang_country(("en",), "GB"), GeoPoint(55.3781, -3.4360), 6.5),
    RegionRule("au", _lang_country(("en",), "AU"), GeoPoint(-25.2744, 133.7751), 3.5),
    RegionRule("fr", lambda t: t.language == "fr", GeoPoint(46.2276, 2.2137), 6.8),
    RegionRule("es", _lang_country(("es",), "ES"), GeoPoint(40.4637, -3.7492), 6.8),
    RegionRule("de", _lang_country(("de",), "DE"), GeoPoint(51.1657, 10.4515), 6.8),
    RegionRule("it", _lang_country(("it",), "IT"), GeoPoint(41.8719, 12.5674), 6.5),
    RegionRule("jp", _lang_country(("ja",), "JP"), GeoPoint(36.2048, 138.2529), 5.8),
    RegionRule("br", _lang_country(("pt",), "BR"), GeoPoint(-14.2350, -51.9253), 4.0),
    RegionRule("europe", lambda t: t.country in _EUROPE, GeoPoint(54.5260, 15.2551), 4.5),
    WORLD,
)


def region_for_locale(locale: Optional[LocaleTag], rules: Tuple[RegionRule, ...] = REGION_RULES) -> RegionRule:
    if locale is None:
        return WORLD
    for rule in rules:
        if rule.matches(locale):
            return rule
    return WORLD
