import json

import numpy as np
import pytest

from matview.cli import main


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(path, obj):
    path.write_text(json.dumps(obj))
    return str(path)


def test_modes_printed_by_default(workdir, capsys):
    hist = _write(workdir / "h.json", [1, 1, 1, 50, 50, 1, 1, 1])
    assert main(["modes", hist]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [m["bins"] for m in out["modes"]] == [[3, 4]]
    assert out["modes"][0]["phase"] == pytest.approx(3.5 / 8)


def test_both_kinds_written_to_file(workdir, capsys):
    hist = _write(workdir / "h.json", [1, 1, 1, 50, 50, 1, 1, 1])
    out_path = workdir / "res" / "out.json"
    main(["modes", hist, "--kind", "both", "--out", str(out_path)])
    assert capsys.readouterr().out == ""
    res = json.loads(out_path.read_text())
    assert sorted(g["bins"] for g in res["gaps"]) == [[0, 2], [5, 7]]
    main(["modes", hist, "--kind", "gaps", "--out", str(out_path), "--print"])
    assert set(json.loads(capsys.readouterr().out)) == {"gaps"}


def test_object_input_with_ground_pdf(workdir, capsys):
    hist = [1, 1, 1, 50, 50, 1, 1, 1]
    path = _write(workdir / "h.json", {"histogram": hist, "ground_pdf": hist})
    main(["modes", path])
    assert json.loads(capsys.readouterr().out) == {"modes": []}


def test_circular_flag(workdir, capsys):
    hist = _write(workdir / "h.json", [50, 1, 1, 1, 1, 1, 1, 50])
    main(["modes", hist, "--circular"])
    assert json.loads(capsys.readouterr().out)["modes"][0]["bins"] == [7, 0]


def test_config_file(workdir, capsys):
    hist = _write(workdir / "h.json", [1, 1, 1, 50, 50, 1, 1, 1])
    cfg = workdir / "cfg.yaml"
    cfg.write_text("modes: {eps: 60.0}\n")
    main(["modes", hist, "--config", str(cfg)])
    assert json.loads(capsys.readouterr().out) == {"modes": []}


def test_invalid_histogram_exits(workdir):
    hist = _write(workdir / "h.json", [1, -1, 3])
    with pytest.raises(SystemExit) as exc:
        main(["modes", hist])
    assert "initialize" in str(exc.value)


def test_invalid_configuration_exits(workdir):
    hist = _write(workdir / "h.json", [1, 2, 3])
    with pytest.raises(SystemExit) as exc:
        main(["modes", hist, "--M", "0"])
    assert str(exc.value).startswith("invalid configuration")


def test_object_without_histogram_key_exits(workdir):
    path = _write(workdir / "h.json", {"values": [1, 2]})
    with pytest.raises(SystemExit):
        main(["modes", path])


@pytest.fixture
def peaked_samples(rng):
    return np.concatenate((rng.normal(0.5, 0.02, size=2000), rng.uniform(0.0, 1.0, size=2000))).tolist()


def test_samples_use_histogram_section(workdir, capsys, peaked_samples):
    path = _write(workdir / "s.json", peaked_samples)
    cfg = workdir / "cfg.yaml"
    cfg.write_text("histogram: {bins: 32, lo: 0.0, hi: 1.0}\n")
    main(["samples", path, "--config", str(cfg)])
    modes = json.loads(capsys.readouterr().out)["modes"]
    assert modes
    assert modes[0]["phase"] == pytest.approx(0.5, abs=0.05)


def test_samples_flags_override_config(workdir, capsys, peaked_samples):
    path = _write(workdir / "s.json", {"values": [x + 10.0 for x in peaked_samples]})
    cfg = workdir / "cfg.yaml"
    cfg.write_text("histogram: {bins: 8}\n")
    main(["samples", path, "--config", str(cfg), "--bins", "32", "--lo", "10", "--hi", "11"])
    modes = json.loads(capsys.readouterr().out)["modes"]
    assert modes[0]["phase"] == pytest.approx(0.5, abs=0.05)


def test_samples_with_weights_file(workdir, capsys, peaked_samples):
    path = _write(workdir / "s.json", peaked_samples)
    weights = _write(workdir / "w.json", [1.0] * len(peaked_samples))
    main(["samples", path, "--bins", "32", "--weights", weights])
    assert json.loads(capsys.readouterr().out)["modes"]


def test_samples_invalid_range_exits(workdir, peaked_samples):
    path = _write(workdir / "s.json", peaked_samples)
    with pytest.raises(SystemExit) as exc:
        main(["samples", path, "--lo", "2", "--hi", "1"])
    assert str(exc.value).startswith("invalid configuration")


def test_effective_configuration_is_logged(workdir, capsys, caplog):
    hist = _write(workdir / "h.json", [1, 2, 3])
    main(["modes", hist, "--eps", "1.5", "--log-level", "DEBUG"])
    msgs = [r.getMessage() for r in caplog.records if r.name == "matview.cli"]
    assert any("'modes.eps': 1.5" in m and "'histogram.bins': 256" in m for m in msgs)
