# cli.py: `humble` command: load config, apply flag overrides, build, print summary

import argparse
from pathlib import Path

from .config import load_config, validate_config
from .site import BuildReport, build_site


def print_summary(report: BuildReport, cfg: dict) -> None:
    print("\n=== humble build ===")
    print(f"Source:         {report.source}")
    print(f"Destination:    {report.destination}")
    print(f"Assets:         {report.assets_destination}")
    print(f"Notes scanned:  {report.scanned}")
    print(f"Published:      {len(report.published)} notes ({cfg['publish_marker']} only)")
    print(f"Pages written:  {len(report.written)}" + (" (dry run)" if report.dry_run else ""))
    print(f"Images copied:  {len(report.images_copied)}")
    if report.images_missing:
        print(f"Images missing: {len(report.images_missing)} ({', '.join(sorted(set(report.images_missing)))})")
    print("Done.")


def run(argv=None) -> BuildReport:
    ap = argparse.ArgumentParser(prog="humble", description="Compile publishable wiki notes into a Hugo content tree")
    ap.add_argument("--config", help="Path to YAML/JSON config (default: humble.yaml|yml|json if present)")
    ap.add_argument("--source", help="Override config.source")
    ap.add_argument("--destination", help="Override config.destination")
    ap.add_argument("--assets-source", help="Override config.assets_source")
    ap.add_argument("--assets-destination", help="Override config.assets_destination")
    ap.add_argument("--dry-run", action="store_true", help="Force dry run (overrides config)")
    ap.add_argument("--debug",   action="store_true", help="Force debug (overrides config)")
    args = ap.parse_args(argv)

    cfg = load_config(Path(args.config) if args.config else None)

    if args.source:             cfg["source"] = args.source
    if args.destination:        cfg["destination"] = args.destination
    if args.assets_source:      cfg["assets_source"] = args.assets_source
    if args.assets_destination: cfg["assets_destination"] = args.assets_destination
    if args.dry_run: cfg["dry_run"] = True
    if args.debug:   cfg["debug"]   = True
    validate_config(cfg)

    print(f"[start] source      = {Path(cfg['source']).resolve()}")
    print(f"[start] destination = {Path(cfg['destination']).resolve()}")
    print(f"[start] assets      = {Path(cfg['assets_source']).resolve()} -> {Path(cfg['assets_destination']).resolve()}")

    report = build_site(cfg)
    print_summary(report, cfg)
    return report


def main(argv=None):
    run(argv)
