import base64
import io
import json

import httpx
from PIL import Image

from app.models.face_models import Rectangle
from app.scripts import upload_pdf
from app.scripts.detect_faces import draw_rectangles


def test_draw_rectangles_outlines_faces(tmp_path):
    source = tmp_path / "group.png"
    Image.new("RGB", (40, 40), "white").save(source)
    out = tmp_path / "annotated.png"

    draw_rectangles(source, [Rectangle(x=5, y=5, w=10, h=10)], out)

    with Image.open(out) as annotated:
        assert annotated.getpixel((5, 5)) == (255, 0, 0)
        assert annotated.getpixel((30, 30)) == (255, 255, 255)


def test_upload_pdf_posts_base64(tmp_path, monkeypatch):
    pdf = tmp_path / "menu.pdf"
    pdf.write_bytes(b"%PDF-1.4 menu")
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json={"ok": True, "objectName": "boardpass_current.pdf"})

    real_client = httpx.Client
    monkeypatch.setattr(
        upload_pdf.httpx, "Client",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )

    result = upload_pdf.upload_pdf(pdf, "boardpass_current.pdf", relay_url="http://relay.local/")

    assert result == {"ok": True, "objectName": "boardpass_current.pdf"}
    assert seen["url"] == "http://relay.local/uploadPdfDirect"
    assert base64.b64encode(b"%PDF-1.4 menu") in seen["body"]
    assert b"boardpass_current.pdf" in seen["body"]


def test_upload_pdf_without_object_name_lets_relay_default(tmp_path, monkeypatch):
    pdf = tmp_path / "menu.pdf"
    pdf.write_bytes(b"%PDF-1.4 menu")
    seen = {}

    def handler(request):
        seen["json"] = json.loads(request.read())
        return httpx.Response(200, json={"ok": True, "objectName": "menu_current.pdf"})

    real_client = httpx.Client
    monkeypatch.setattr(
        upload_pdf.httpx, "Client",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )

    result = upload_pdf.upload_pdf(pdf, relay_url="http://relay.local")

    assert result["objectName"] == "menu_current.pdf"
    assert "objectName" not in seen["json"]
