"""Tests du catalogue public et des pages d'erreur."""


def test_index_lists_available_cats(client, make_cat):
    make_cat(nom="Garfield", prix="30.00")
    make_cat(nom="Fantome", disponible=False)

    page = client.get("/").get_data(as_text=True)
    assert "Garfield" in page
    assert "30.00" in page
    assert "Fantome" not in page


def test_empty_catalogue(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Aucun chat" in resp.get_data(as_text=True)


def test_cat_detail(client, make_cat):
    cid = make_cat(nom="Tigrou", race="Européen", jouet_prefere="Plume")
    page = client.get(f"/chats/{cid}").get_data(as_text=True)
    assert "Tigrou" in page
    assert "Plume" in page


def test_unavailable_cat_is_404(client, make_cat):
    cid = make_cat(disponible=False)
    assert client.get(f"/chats/{cid}").status_code == 404


def test_unknown_page_is_404(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert "Page non trouvée" in resp.get_data(as_text=True)


def test_security_headers(client):
    resp = client.get("/")
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "default-src 'self'" in resp.headers["Content-Security-Policy"]
