import json

from vfe import vfe_cli
from vfe.gateway.inject import DEFAULT_MARKER
from vfe.settings import settings


def test_cli_inject_writes_marked_file(tmp_path, capsys):
    src = tmp_path / "index.html"
    src.write_text("<html><head></head><body>hi</body></html>")
    out = tmp_path / "marked.html"
    assert vfe_cli.main(["inject", "--input", str(src), "--output", str(out)]) == 0
    marked = out.read_text()
    assert DEFAULT_MARKER.meta_tag in marked
    assert DEFAULT_MARKER.badge + "\n</body>" in marked
    assert f"Wrote {out}" in capsys.readouterr().out


def test_cli_inject_missing_input(tmp_path):
    assert vfe_cli.main(["inject", "--input", str(tmp_path / "nope.html")]) == 2


def test_cli_path(capsys):
    assert vfe_cli.main(["path", "bafyX", "/"]) == 0
    assert capsys.readouterr().out.strip() == "ipfs://bafyX/index.html"
    assert vfe_cli.main(["path", "bafyX", "/a/b.css"]) == 0
    assert capsys.readouterr().out.strip() == "ipfs://bafyX/a/b.css"


def test_cli_resolve_from_static_config(tmp_path, monkeypatch, capsys):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"dapp.eth": "bafyFromConfig"}))
    monkeypatch.setattr(settings, "name_config_path", cfg)
    monkeypatch.setattr(settings, "eth_rpc_url", None)
    assert vfe_cli.main(["resolve", "dapp.eth"]) == 0
    assert capsys.readouterr().out.strip() == "bafyFromConfig"
    assert vfe_cli.main(["resolve", "other.eth"]) == 1


def test_cli_serve_arguments():
    args = vfe_cli.build_parser().parse_args(["serve", "--host", "0.0.0.0", "--port", "9000"])
    assert args.func is vfe_cli.cmd_serve
    assert (args.host, args.port) == ("0.0.0.0", 9000)
