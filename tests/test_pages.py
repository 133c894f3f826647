import pytest

from conftest import login
from xsplatform.app.extensions import db
from xsplatform.app.models import User
from xsplatform.modules.pages import store as store_module
from xsplatform.modules.pages.composer import CURRENT_USER_SCRIPT_ID
from xsplatform.modules.pages.store import PLACEHOLDER

PUBLIC_PAGES = ["home", "shop", "deals", "support"]
PROTECTED_PAGES = ["profile", "wishlist", "orders", "checkout", "cart"]


def test_root_redirects_home(client):
    r = client.get("/")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/home")


# PAGE-001: public pages render for anonymous callers
@pytest.mark.parametrize("page", PUBLIC_PAGES)
def test_public_page_anonymous(client, page):
    r = client.get(f"/{page}")
    assert r.status_code == 200
    assert r.mimetype == "text/html"
    body = r.get_data(as_text=True)
    assert PLACEHOLDER not in body
    assert CURRENT_USER_SCRIPT_ID not in body
    assert 'class="main-header"' in body


def test_shop_merges_fragment_into_shell(client):
    body = client.get("/shop").get_data(as_text=True)
    assert body.count("<html") == 1
    assert '<section class="page page-shop">' in body
    assert '<script src="/js/header.js"></script>' in body


def test_html_suffix_is_accepted(client):
    assert client.get("/shop.html").status_code == 200


# PAGE-002: protected pages redirect anonymous callers to login
@pytest.mark.parametrize("page", PROTECTED_PAGES)
def test_protected_page_anonymous_redirects(client, page):
    r = client.get(f"/{page}")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/auth/login")


@pytest.mark.parametrize("page", PROTECTED_PAGES)
def test_protected_page_authenticated(client, user, page):
    login(client)
    r = client.get(f"/{page}")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert CURRENT_USER_SCRIPT_ID in body
    assert '"email": "test@test.com"' in body


def test_protected_page_with_bearer_token(client, user):
    token = login(client).json["token"]
    client.post("/api/auth/logout")
    r = client.get("/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200


def test_protected_name_without_fragment_is_404_not_redirect(make_app):
    app = make_app(PROTECTED_PAGES=["profile", "vault"])
    r = app.test_client().get("/vault")
    assert r.status_code == 404


def test_deleted_user_session_is_anonymous(app, client, user):
    login(client)
    with app.app_context():
        db.session.delete(db.session.get(User, user))
        db.session.commit()
    r = client.get("/profile")
    assert r.status_code == 302


# PAGE-003: auth forms
def test_login_form_anonymous(client):
    r = client.get("/auth/login")
    assert r.status_code == 200
    assert 'id="login-form"' in r.get_data(as_text=True)


@pytest.mark.parametrize("subpage", ["login", "register"])
def test_auth_forms_redirect_when_signed_in(client, user, subpage):
    login(client)
    r = client.get(f"/auth/{subpage}")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/home")


def test_missing_auth_subpage_is_404(client):
    r = client.get("/auth/forgot")
    assert r.status_code == 404


def test_missing_page_renders_error_page(client):
    r = client.get("/does-not-exist")
    assert r.status_code == 404
    body = r.get_data(as_text=True)
    assert "404" in body
    assert "Page not found" in body


def test_unmatched_path_renders_html_error_page(client):
    r = client.get("/a/b/c")
    assert r.status_code == 404
    assert r.mimetype == "text/html"


def test_store_fault_renders_generic_500(client, monkeypatch):
    def boom(self, name):
        raise OSError("disk on fire at /srv/pages")

    monkeypatch.setattr(store_module.PageStore, "get_page", boom)
    r = client.get("/shop")
    assert r.status_code == 500
    body = r.get_data(as_text=True)
    assert "Internal server error" in body
    assert "disk on fire" not in body


def test_missing_header_shell_uses_default(make_app, tmp_path):
    (tmp_path / "shop.html").write_text("<body>just the shop</body>", encoding="utf-8")
    app = make_app(PAGES_DIR=str(tmp_path), PROTECTED_PAGES=[])
    r = app.test_client().get("/shop")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "just the shop" in body
    assert '<script src="/js/header.js"></script>' in body


def test_static_assets_served(client):
    r = client.get("/js/header.js")
    assert r.status_code == 200
    assert b"window.XSHeader" in r.data
    r.close()
    assert client.get("/css/nope.css").status_code == 404


def test_header_shell_is_not_a_page(client):
    for path in ("/header", "/header.html", "/HEADER"):
        r = client.get(path)
        assert r.status_code == 404
        assert PLACEHOLDER not in r.get_data(as_text=True)


def test_page_names_are_case_folded(client):
    r = client.get("/Profile")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/auth/login")
    assert client.get("/SHOP.HTML").status_code == 200
