import pytest

from vfe.api.models import TrustAnchor
from vfe.gateway.errors import InvalidContentPath, NoAnchor
from vfe.gateway.paths import PathResolver


def _anchor(cid="bafyX"):
    return TrustAnchor(cid=cid, established_at_ms=1)


def test_root_maps_to_index():
    cp = PathResolver().resolve("/", _anchor())
    assert cp.url == "ipfs://bafyX/index.html"
    assert cp.path == "/index.html"
    assert str(cp) == cp.url


def test_nested_path_is_appended_to_cid_root():
    cp = PathResolver().resolve("/assets/app.js", _anchor("QmRoot"))
    assert cp.url == "ipfs://QmRoot/assets/app.js"
    assert cp.cid == "QmRoot"


def test_missing_anchor_fails_with_no_anchor():
    with pytest.raises(NoAnchor) as exc:
        PathResolver().resolve("/", None)
    assert exc.value.status_code == 400


def test_custom_scheme_and_index():
    cp = PathResolver(scheme="ipns", index_path="/home.html").resolve("/", _anchor("site.eth"))
    assert cp.url == "ipns://site.eth/home.html"


@pytest.mark.parametrize("path", ["/../../ipns/evil.eth/index.html", "/a/../b.html", "/./index.html", "/a/..", "/a\\..\\b"])
def test_dot_segments_are_rejected(path):
    with pytest.raises(InvalidContentPath) as exc:
        PathResolver().resolve(path, _anchor())
    assert exc.value.status_code == 400


@pytest.mark.parametrize("cid", ["bafyX/../../ipns/evil.eth", "bafyX?x=1", "bafyX#frag", "bafy%2fX", "evil.example:80", ""])
def test_cids_that_break_out_of_the_authority_are_rejected(cid):
    with pytest.raises(InvalidContentPath):
        PathResolver().resolve("/", _anchor(cid))


def test_reserved_characters_in_names_are_quoted():
    cp = PathResolver().resolve("/a#b?.html", _anchor())
    assert cp.path == "/a#b?.html"
    assert cp.url == "ipfs://bafyX/a%23b%3F.html"
    assert PathResolver().resolve("/100%.txt", _anchor()).url == "ipfs://bafyX/100%25.txt"
