# -*- coding: utf-8 -*-
from __future__ import annotations
import argparse, json, logging, sys, pathlib

from pydantic import ValidationError

from .api import analyze_histogram, analyze_samples
from .config import load_config
from .errors import MatviewError
from .logging import init_logging_from_cfg
from .utils.config import flatten

logger = logging.getLogger("matview.cli")


def _load_json(p: str):
    with open(p, "r", encoding="utf-8") as f:
        return json.load(f)


def _dump_json(p: str, obj):
    pathlib.Path(p).parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)


def _section(args, keys) -> dict:
    out = {}
    for key in keys:
        value = getattr(args, key)
        if value is not None:
            out[key] = value
    if args.circular:
        out["circular"] = True
    return out


def _load_cfg(args, overrides: dict) -> dict:
    if args.log_level:
        overrides["logging"] = {"level": args.log_level}
    try:
        cfg = load_config(args.config, overrides=overrides)
    except (ValidationError, ValueError, TypeError) as e:
        raise SystemExit(f"invalid configuration: {e}")
    init_logging_from_cfg(cfg)
    logger.debug("effective configuration: %s", flatten(cfg))
    return cfg


def _emit(args, out: dict):
    if args.out:
        _dump_json(args.out, out)
    if args.print or not args.out:
        print(json.dumps(out, ensure_ascii=False))


def _read_histogram(path: str):
    data = _load_json(path)
    if isinstance(data, dict):
        if "histogram" not in data:
            raise SystemExit(f"{path}: expected a JSON array or an object with a 'histogram' key")
        return data["histogram"], data.get("ground_pdf")
    return data, None


def _read_samples(path: str):
    data = _load_json(path)
    if isinstance(data, dict):
        if "values" not in data:
            raise SystemExit(f"{path}: expected a JSON array or an object with a 'values' key")
        return data["values"], data.get("weights")
    return data, None


def cmd_modes(args):
    hist, ground_pdf = _read_histogram(args.histogram)
    modes = _section(args, ("eps", "M", "mu", "sigma2"))
    if args.ground_pdf:
        ground_pdf = _load_json(args.ground_pdf)
    if ground_pdf is not None:
        modes["ground_pdf"] = ground_pdf
    cfg = _load_cfg(args, {"modes": modes} if modes else {})

    try:
        res = analyze_histogram(hist, cfg, kind=args.kind)
    except MatviewError as e:
        raise SystemExit(str(e))
    if isinstance(res, dict):
        out = {k: [m.to_dict() for m in v] for k, v in res.items()}
    else:
        out = {args.kind: [m.to_dict() for m in res]}
    _emit(args, out)
    return 0


def cmd_samples(args):
    values, weights = _read_samples(args.values)
    if args.weights:
        weights = _load_json(args.weights)
    overrides = {}
    hist = _section(args, ("bins", "lo", "hi"))
    if hist:
        overrides["histogram"] = hist
    if args.eps is not None:
        overrides["modes"] = {"eps": args.eps}
    cfg = _load_cfg(args, overrides)

    try:
        res = analyze_samples(values, cfg, weights=weights)
    except MatviewError as e:
        raise SystemExit(str(e))
    _emit(args, {"modes": [m.to_dict() for m in res]})
    return 0


def _add_common(p):
    p.add_argument("--config", default=None, help="YAML configuration file")
    p.add_argument("--out", default=None, help="write the JSON result here")
    p.add_argument("--print", action="store_true", help="print JSON result to stdout")
    p.add_argument("--log-level", dest="log_level", default=None,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])


def make_parser():
    p = argparse.ArgumentParser(prog="matview")
    sub = p.add_subparsers(dest="cmd", required=True)

    pm = sub.add_parser("modes", help="Detect meaningful modes/gaps of a histogram")
    pm.add_argument("histogram", help="JSON array, or object with 'histogram' and optional 'ground_pdf'")
    pm.add_argument("--kind", choices=["modes", "gaps", "both"], default="modes")
    pm.add_argument("--circular", action="store_true", help="intervals may wrap past the last bin")
    pm.add_argument("--eps", type=float, default=None, help="-log10 of the expected false detections")
    pm.add_argument("--M", type=float, default=None, help="number of points behind the histogram")
    pm.add_argument("--mu", type=float, default=None, help="mean point mass (Gaussian model)")
    pm.add_argument("--sigma2", type=float, default=None, help="variance of point masses (Gaussian model)")
    pm.add_argument("--ground-pdf", dest="ground_pdf", default=None, help="JSON array null distribution")
    _add_common(pm)
    pm.set_defaults(func=cmd_modes)

    ps = sub.add_parser("samples", help="Bin sample values and detect the modes of their histogram")
    ps.add_argument("values", help="JSON array, or object with 'values' and optional 'weights'")
    ps.add_argument("--bins", type=int, default=None, help="number of bins (config: histogram.bins)")
    ps.add_argument("--lo", type=float, default=None, help="lower bound of the range")
    ps.add_argument("--hi", type=float, default=None, help="upper bound of the range")
    ps.add_argument("--circular", action="store_true", help="wrap values outside the range")
    ps.add_argument("--eps", type=float, default=None, help="-log10 of the expected false detections")
    ps.add_argument("--weights", default=None, help="JSON array of sample weights")
    _add_common(ps)
    ps.set_defaults(func=cmd_samples)

    return p


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    parser = make_parser()
    ns = parser.parse_args(argv)
    return ns.func(ns)


if __name__ == "__main__":
    raise SystemExit(main())
