import json
from html.parser import HTMLParser
from unittest.mock import patch

import httpx
import pytest
import respx
from starlette.testclient import TestClient

from akaia.web import create_app, main, render_page

RPC_URL = "https://rpc.example.com"


class _AppFinder(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.attrs = None

    def handle_starttag(self, tag, attrs):
        if tag == "akaia-app":
            self.attrs = dict(attrs)


def _app_attrs(markup):
    finder = _AppFinder()
    finder.feed(markup)
    assert finder.attrs is not None
    return finder.attrs


@pytest.fixture
def site(tmp_path):
    (tmp_path / "app").mkdir()
    (tmp_path / "app" / "akaia_commlink.css").write_text("body{}")
    (tmp_path / "notes.txt").write_text("static content")
    (tmp_path / "favicon.ico").write_bytes(b"\x00\x01icon")
    return tmp_path


@pytest.fixture
def client(site):
    with TestClient(create_app(site, RPC_URL)) as test_client:
        yield test_client


def test_render_page_wraps_body():
    page = render_page("<p>inner</p>")
    assert "<title>CommLink</title>" in page
    assert "<p>inner</p>" in page
    assert page.index("<main") < page.index("<p>inner</p>") < page.index("</main>")
    assert 'src="/static/packages/framework/index.js"' in page


def test_index_is_dashboard(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "<h1>Hello, World!</h1>" in response.text


def test_error_page_is_not_found(client):
    response = client.get("/error")
    assert response.status_code == 404
    assert "<h1>Not Found</h1>" in response.text


def test_deep_path_falls_back_to_dashboard(client):
    response = client.get("/one/two/three")
    assert response.status_code == 200
    assert "<h1>Hello, World!</h1>" in response.text


def test_app_route_renders_shell(client):
    response = client.get("/wallet?tab=send&x=1")
    assert response.status_code == 200
    attrs = _app_attrs(response.text)
    assert attrs["route_path"] == "wallet"
    assert json.loads(attrs["route_query"]) == {"tab": "send", "x": "1"}
    assert attrs["props"] == '{ "name": "akaia" }'


def test_favicon_is_served(client, site):
    response = client.get("/favicon.ico")
    assert response.status_code == 200
    assert response.content == (site / "favicon.ico").read_bytes()


def test_missing_favicon_is_404(tmp_path):
    with TestClient(create_app(tmp_path, RPC_URL)) as test_client:
        assert test_client.get("/favicon.ico").status_code == 404


def test_static_and_app_files(client):
    assert client.get("/static/notes.txt").text == "static content"
    assert client.get("/app/akaia_commlink.css").text == "body{}"


def _rpc_handler(request):
    payload = json.loads(request.content)
    if payload["method"] == "EXPERIMENTAL_protocol_config":
        result = {"runtime_config": {"storage_amount_per_byte": "0"}}
    else:
        result = {"amount": "5000", "locked": "0", "storage_usage": 7}
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": "dontcare", "result": result})


def test_balance_endpoint_returns_balance(client):
    with respx.mock(assert_all_called=False) as router:
        router.post(RPC_URL).mock(side_effect=_rpc_handler)
        response = client.post(
            "/api/near_account/balance",
            content="account_id=akaia.near",
            headers={"content-type": "application/x-www-form-urlencoded"},
        )
    assert response.status_code == 200
    assert response.json() == {
        "total": "5000",
        "state_staked": "0",
        "staked": "0",
        "available": "5000",
    }


def test_balance_endpoint_invalid_account_is_null(client):
    response = client.post("/api/near_account/balance", json={"account_id": "NOT VALID!"})
    assert response.status_code == 200
    assert response.json() is None


def test_balance_endpoint_requires_account(client):
    response = client.post("/api/near_account/balance", json={})
    assert response.status_code == 400


def test_main_runs_server(tmp_path, capsys):
    with patch("uvicorn.run") as run:
        status = main(["--site-addr", "127.0.0.1:8080", "--site-root", str(tmp_path)])
    assert status == 0
    assert run.call_args.kwargs == {"host": "127.0.0.1", "port": 8080}
    assert "Listening on http://127.0.0.1:8080" in capsys.readouterr().out


def test_main_rejects_bad_address(tmp_path):
    with patch("uvicorn.run") as run:
        with pytest.raises(SystemExit):
            main(["--site-addr", "nowhere", "--site-root", str(tmp_path)])
    assert run.call_count == 0