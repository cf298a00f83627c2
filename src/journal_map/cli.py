# cli.py
import argparse, csv, locale as _locale, logging, sys
from jsonschema import ValidationError
from .config import MapConfig, load_json
from .cluster.engine import ClusterEngine, STRATEGIES, threshold_km_for_zoom
from .cluster.places import summarize_places
from .model.loader import EntryLoader
from .model.models import GeoPoint
from .session import MapSession
from .viewport.planner import Viewport

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="journal-map")
    p.add_argument("--config")
    p.add_argument("--entries")
    p.add_argument("--zoom", type=float)
    p.add_argument("--locale")
    p.add_argument("--device-lat", dest="device_lat", type=float)
    p.add_argument("--device-lon", dest="device_lon", type=float)
    p.add_argument("--strategy", choices=STRATEGIES)
    p.add_argument("--print-members", dest="print_members", action="store_true", default=None)
    p.add_argument("--no-validate", dest="validate_schema", action="store_false", default=None)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)

def build_config(args) -> MapConfig:
    cfg_dict = load_json(args.config)
    # JSONをデフォルトに、CLIで上書き
    for k, v in vars(args).items():
        if k in ("config", "verbose"): continue
        if v is not None: cfg_dict[k] = v
    if "entries" not in cfg_dict:
        raise SystemExit("journal-map: --entries (or 'entries' in --config) is required")
    return MapConfig(**cfg_dict)

def system_locale() -> str | None:
    lang, _ = _locale.getlocale()
    return lang

def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = build_config(args)

    # エントリ読み込み
    loader = EntryLoader(validate_schema=cfg.validate_schema)
    try:
        entries = loader.load_entries(cfg.entries)
    except (OSError, ValueError, ValidationError) as e:
        print(f"[ERROR] failed to load entries from {cfg.entries}: {e}", file=sys.stderr)
        return 1
    logger.info("loaded %d entries from %s", len(entries), cfg.entries)

    device = GeoPoint(cfg.device_lat, cfg.device_lon) if cfg.has_device_location() else None
    session = MapSession(entries, engine=ClusterEngine(cfg.strategy))
    vp = session.initialize(device, cfg.locale or system_locale())

    # 指定ズームへカメラを動かして静止させる
    if cfg.zoom is not None and cfg.zoom != vp.zoom:
        session.on_camera_move(Viewport(vp.center, cfg.zoom, "cli"), now=0.0)
        session.settle(now=session.settle_delay)

    cam = session.camera
    # タイトル等のカンマは csv でクォートする
    out = csv.writer(sys.stdout, lineterminator="\n")
    print("# source,center_lat,center_lon,zoom,threshold_km")
    out.writerow([vp.source, f"{cam.center.latitude:.6f}", f"{cam.center.longitude:.6f}",
                  f"{cam.zoom:g}", f"{threshold_km_for_zoom(cam.zoom):g}"])

    print("# cluster_id,count,centroid_lat,centroid_lon")
    for c in sorted(session.clusters, key=lambda c: c.id):
        out.writerow([c.id, c.count, f"{c.centroid.latitude:.6f}", f"{c.centroid.longitude:.6f}"])

    if cfg.print_members:
        print("# cluster_id,entry_id,timestamp,title")
        for c in sorted(session.clusters, key=lambda c: c.id):
            for e in c.members:
                out.writerow([c.id, e.id, e.timestamp.isoformat(), e.title])

    summary = summarize_places(entries)
    print("# countries,cities")
    out.writerow([summary.countries, summary.cities])
    return 0

if __name__ == "__main__":
    sys.exit(main())
