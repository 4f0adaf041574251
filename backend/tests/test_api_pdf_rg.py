from conftest import auth

from pdf_rg.core.config import settings
from pdf_rg.models.pedido import PdfRgPedido
from pdf_rg.models.status import StatusPedido

PDF = b"%PDF-1.4\n%fake\n"
FOTO = "data:image/png;base64,iVBORw0KGgo="


def _criar(client, headers, **dados):
    body = {"cpf": "123.456.789-00", "nome": "Ana Lima", **dados}
    r = client.post("/api/v1/pdf-rg/pedidos", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def test_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200


def test_sem_token(client):
    assert client.get("/api/v1/pdf-rg/pedidos").status_code == 401
    r = client.get("/api/v1/pdf-rg/pedidos", headers={"Authorization": "Bearer lixo"})
    assert r.status_code == 401


def test_cotacao(client, user_headers):
    r = client.get("/api/v1/pdf-rg/cotacao", params={"qr_plan": "6m"}, headers=user_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 60.0
    assert body["saldo_suficiente"] is True


def test_criar_e_consultar(client, user_headers, usuario):
    pid = _criar(client, user_headers, foto_base64=FOTO)

    r = client.get(f"/api/v1/pdf-rg/pedidos/{pid}", headers=user_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["cpf"] == "12345678900"
    assert body["user_id"] == usuario.id
    assert body["status"] == StatusPedido.REALIZADO
    assert body["foto_base64"] == FOTO

    carteira = client.get("/api/v1/carteira", headers=user_headers).json()
    assert carteira["saldo"] == 60.0


def test_criar_validacoes(client, user_headers, criar_usuario):
    r = client.post("/api/v1/pdf-rg/pedidos", json={"nome": "Sem CPF"}, headers=user_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "CPF é obrigatório"

    r = client.post(
        "/api/v1/pdf-rg/pedidos",
        json={"cpf": "1", "foto_base64": "data:text/plain;base64,aGVsbG8="},
        headers=user_headers,
    )
    assert r.status_code == 422

    pobre = criar_usuario(saldo="1.00")
    r = client.post("/api/v1/pdf-rg/pedidos", json={"cpf": "1"}, headers=auth(pobre))
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Saldo insuficiente")


def test_listagem_paginada(client, user_headers, admin_headers, criar_usuario):
    outro = criar_usuario(saldo="100")
    for i in range(2):
        _criar(client, user_headers, nome=f"Maria {i}")
    _criar(client, auth(outro), nome="Pedro", cpf="999")

    r = client.get("/api/v1/pdf-rg/pedidos", params={"limit": 1}, headers=user_headers)
    assert r.status_code == 200
    assert r.headers["X-Total"] == "2"
    assert r.headers["X-Total-Count"] == "2"
    assert r.headers["X-Total-Pages"] == "2"
    assert r.headers["X-Page-Size"] == "1"
    assert r.headers["X-Offset"] == "0"
    body = r.json()
    assert len(body["data"]) == 1
    assert body["pagination"] == {"total": 2, "limit": 1, "offset": 0}
    assert "foto_base64" not in body["data"][0]

    # usuário comum não enxerga pedidos de outros, mesmo pedindo
    r = client.get("/api/v1/pdf-rg/pedidos", params={"user_id": outro.id}, headers=user_headers)
    assert r.json()["pagination"]["total"] == 2

    r = client.get("/api/v1/pdf-rg/pedidos", params={"status": "all"}, headers=admin_headers)
    assert r.json()["pagination"]["total"] == 3
    r = client.get("/api/v1/pdf-rg/pedidos", params={"search": "999"}, headers=admin_headers)
    assert [p["nome"] for p in r.json()["data"]] == ["Pedro"]
    r = client.get("/api/v1/pdf-rg/pedidos", params={"status": "xyz"}, headers=admin_headers)
    assert r.status_code == 400


def test_pedido_de_outro_usuario_e_404(client, user_headers, criar_usuario):
    pid = _criar(client, user_headers)
    intruso = criar_usuario()
    assert client.get(f"/api/v1/pdf-rg/pedidos/{pid}", headers=auth(intruso)).status_code == 404


def test_rotas_de_admin(client, user_headers):
    pid = _criar(client, user_headers)
    assert client.get("/api/v1/pdf-rg/pedidos/resumo", headers=user_headers).status_code == 403
    r = client.patch(f"/api/v1/pdf-rg/pedidos/{pid}/status", data={"status": "2"}, headers=user_headers)
    assert r.status_code == 403
    assert client.delete(f"/api/v1/pdf-rg/pedidos/{pid}", headers=user_headers).status_code == 403


def test_fluxo_de_entrega(client, user_headers, admin_headers):
    pid = _criar(client, user_headers)
    url = f"/api/v1/pdf-rg/pedidos/{pid}"

    assert client.get(f"{url}/pdf", headers=user_headers).status_code == 404

    r = client.patch(f"{url}/status", data={"status": "entregue"}, headers=admin_headers)
    assert r.status_code == 400

    r = client.patch(f"{url}/status", data={"status": "3"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["pedido"]["status"] == StatusPedido.EM_CONFECCAO

    r = client.patch(
        f"{url}/status",
        data={"status": "4"},
        files={"pdf": ("rg.pdf", PDF, "application/pdf")},
        headers=admin_headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["avisos"] == []
    nome = r.json()["pedido"]["pdf_entrega_nome"]
    assert nome.startswith("pdf_rg_") and nome.endswith(".pdf")

    r = client.get(f"{url}/pdf", headers=user_headers)
    assert r.status_code == 200
    assert r.content == PDF
    assert r.headers["content-type"] == "application/pdf"
    assert nome in r.headers["content-disposition"]

    resumo = client.get("/api/v1/pdf-rg/pedidos/resumo", headers=admin_headers).json()
    assert resumo == {"pendentes": 0, "concluidos": 1}

    notificacoes = client.get("/api/v1/notificacoes", headers=user_headers).json()
    assert len(notificacoes) == 2
    assert notificacoes[0]["prioridade"] == "alta"


def test_status_pedido_inexistente(client, admin_headers):
    r = client.patch("/api/v1/pdf-rg/pedidos/999/status", data={"status": "2"}, headers=admin_headers)
    assert r.status_code == 404


def test_deletar(client, user_headers, admin_headers):
    pid = _criar(client, user_headers)
    assert client.delete(f"/api/v1/pdf-rg/pedidos/{pid}", headers=admin_headers).json() == {"ok": True}
    assert client.get(f"/api/v1/pdf-rg/pedidos/{pid}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/v1/pdf-rg/pedidos/{pid}", headers=admin_headers).status_code == 404


def test_pdf_fora_da_entrega_e_rejeitado(client, user_headers, admin_headers):
    pid = _criar(client, user_headers)
    r = client.patch(
        f"/api/v1/pdf-rg/pedidos/{pid}/status",
        data={"status": "2"},
        files={"pdf": ("rg.pdf", PDF, "application/pdf")},
        headers=admin_headers,
    )
    assert r.status_code == 400
    pedido = client.get(f"/api/v1/pdf-rg/pedidos/{pid}", headers=admin_headers).json()
    assert pedido["status"] == StatusPedido.REALIZADO
    assert pedido["pdf_entrega_nome"] is None


def test_download_do_dono_so_depois_da_entrega(client, db, user_headers, admin_headers):
    pid = _criar(client, user_headers)
    url = f"/api/v1/pdf-rg/pedidos/{pid}"
    r = client.patch(
        f"{url}/status", data={"status": "4"},
        files={"pdf": ("rg.pdf", PDF, "application/pdf")}, headers=admin_headers,
    )
    assert r.status_code == 200

    # volta para "em confecção": o documento fica gravado, mas o dono não baixa
    assert client.patch(f"{url}/status", data={"status": "3"}, headers=admin_headers).status_code == 200
    db.expire_all()
    assert db.get(PdfRgPedido, pid).pdf_entrega_nome is not None

    r = client.get(f"{url}/pdf", headers=user_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "PDF ainda não disponível"
    assert client.get(f"{url}/pdf", headers=admin_headers).status_code == 200


def test_pdf_acima_do_limite(client, user_headers, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "MAX_PDF_MB", 0)
    pid = _criar(client, user_headers)
    r = client.patch(
        f"/api/v1/pdf-rg/pedidos/{pid}/status",
        data={"status": "4"},
        files={"pdf": ("rg.pdf", PDF, "application/pdf")},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert "muito grande" in r.json()["detail"]


def test_campos_maiores_que_a_coluna(client, user_headers):
    for campo, tamanho in (("dt_nascimento", 21), ("diretor", 61), ("nome", 256)):
        r = client.post(
            "/api/v1/pdf-rg/pedidos",
            json={"cpf": "1", campo: "x" * tamanho},
            headers=user_headers,
        )
        assert r.status_code == 422, campo
    r = client.post(
        "/api/v1/pdf-rg/pedidos",
        json={"cpf": "1", "dt_nascimento": "x" * 20, "diretor": "y" * 60},
        headers=user_headers,
    )
    assert r.status_code == 201
