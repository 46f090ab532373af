"""
Integration tests for the dashboard endpoints using the SQLite test DB.
"""
from datetime import date

import pytest


@pytest.fixture()
def two_developers(seed):
    dev_a = seed.developer("Alpha")
    dev_b = seed.developer("Beta")
    pa = seed.project(dev_a, "Residencial Solar")
    pb = seed.project(dev_b, "Torre Norte")
    visit = seed.action_type("Visita com cliente", 10)
    sale = seed.action_type("Venda concretizada", 100)
    x = seed.agency("Imobiliária X")
    y = seed.agency("Imobiliária Y")
    seed.event(pa, x, visit, data_acao=date(2025, 3, 1))
    seed.event(pa, x, visit, data_acao=date(2025, 3, 2))
    seed.event(pa, x, sale, data_acao=date(2025, 3, 3))
    seed.event(pa, y, visit, data_acao=date(2025, 3, 4))
    seed.event(pb, y, sale, quantidade=3, data_acao=date(2025, 4, 1))
    return {"dev_a": dev_a, "dev_b": dev_b, "pa": pa, "pb": pb, "x": x, "y": y}


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestConsultingRanking:

    def test_global_ranking(self, client, two_developers):
        r = client.get("/dashboard/consultoria")
        assert r.status_code == 200
        body = r.json()
        names = [row["imobiliaria_nome"] for row in body["ranking"]]
        assert names == ["Imobiliária Y", "Imobiliária X"]
        assert body["ranking"][0]["posicao"] == 1
        assert body["ranking"][0]["pontuacao_total"] == 310
        assert body["estatisticas"] == {
            "total_imobiliarias": 2,
            "total_acoes": 5,
            "total_pontos": 430,
        }

    def test_percentages(self, client, two_developers):
        r = client.get(
            "/dashboard/consultoria",
            params={"incorporadora_id": two_developers["dev_a"].id},
        )
        body = r.json()
        assert body["estatisticas"]["total_pontos"] == 130
        shares = [row["percentual"] for row in body["ranking"]]
        assert shares == [round(120 / 130 * 100, 2), round(10 / 130 * 100, 2)]

    def test_breakdown_in_payload(self, client, two_developers):
        body = client.get(
            "/dashboard/consultoria",
            params={"incorporadora_id": two_developers["dev_a"].id},
        ).json()
        top = body["ranking"][0]
        assert top["imobiliaria_id"] == two_developers["x"].id
        assert [(d["acao_nome"], d["quantidade"], d["pontuacao_acao"]) for d in top["detalhes_acoes"]] == [
            ("Venda concretizada", 1, 100),
            ("Visita com cliente", 2, 20),
        ]

    def test_date_filter(self, client, two_developers):
        r = client.get(
            "/dashboard/consultoria",
            params={"data_inicio": "2025-03-02", "data_fim": "2025-03-31"},
        )
        assert r.status_code == 200
        assert r.json()["estatisticas"]["total_acoes"] == 3

    def test_blank_dates_mean_no_filter(self, client, two_developers):
        r = client.get("/dashboard/consultoria", params={"data_inicio": "", "data_fim": ""})
        assert r.status_code == 200
        assert r.json()["estatisticas"]["total_acoes"] == 5

    def test_locale_date_rejected(self, client, two_developers):
        r = client.get("/dashboard/consultoria", params={"data_inicio": "01/03/2025"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "INVALID_FILTER"
        assert body["details"]["field"] == "data_inicio"

    def test_unknown_project_rejected(self, client):
        r = client.get("/dashboard/consultoria", params={"empreendimento_id": 424242})
        assert r.status_code == 422
        assert r.json()["details"]["field"] == "empreendimento_id"

    def test_blank_ids_mean_no_filter(self, client, two_developers):
        r = client.get(
            "/dashboard/consultoria",
            params={"incorporadora_id": "", "empreendimento_id": ""},
        )
        assert r.status_code == 200
        assert r.json()["estatisticas"] == {
            "total_imobiliarias": 2,
            "total_acoes": 5,
            "total_pontos": 430,
        }

    def test_non_integer_id_rejected(self, client):
        r = client.get("/dashboard/consultoria", params={"incorporadora_id": "abc"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "INVALID_FILTER"
        assert body["details"] == {"field": "incorporadora_id", "value": "abc"}

    def test_empty_store(self, client):
        r = client.get("/dashboard/consultoria")
        assert r.status_code == 200
        assert r.json() == {
            "ranking": [],
            "estatisticas": {"total_imobiliarias": 0, "total_acoes": 0, "total_pontos": 0},
        }


class TestDeveloperRanking:

    def test_scoped_ranking(self, client, two_developers):
        r = client.get(
            "/dashboard/incorporadora",
            params={"incorporadora_id": two_developers["dev_b"].id},
        )
        assert r.status_code == 200
        body = r.json()
        assert [row["imobiliaria_id"] for row in body["ranking"]] == [two_developers["y"].id]
        assert body["estatisticas"]["total_pontos"] == 300
        assert body["ranking"][0]["percentual"] == 100.0

    def test_missing_developer_rejected(self, client, two_developers):
        r = client.get("/dashboard/incorporadora")
        assert r.status_code == 400
        assert r.json()["code"] == "MISSING_REQUIRED_SCOPE"

    def test_blank_developer_is_missing_scope(self, client, two_developers):
        r = client.get("/dashboard/incorporadora", params={"incorporadora_id": ""})
        assert r.status_code == 400
        assert r.json()["code"] == "MISSING_REQUIRED_SCOPE"

    def test_blank_project_means_every_project(self, client, two_developers):
        r = client.get(
            "/dashboard/incorporadora",
            params={"incorporadora_id": two_developers["dev_a"].id, "empreendimento_id": ""},
        )
        assert r.status_code == 200
        assert r.json()["estatisticas"]["total_pontos"] == 130

    def test_missing_developer_wins_over_bad_date(self, client):
        r = client.get("/dashboard/incorporadora", params={"data_inicio": "garbage"})
        assert r.status_code == 400

    def test_foreign_project_rejected(self, client, two_developers):
        r = client.get(
            "/dashboard/incorporadora",
            params={
                "incorporadora_id": two_developers["dev_a"].id,
                "empreendimento_id": two_developers["pb"].id,
            },
        )
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_FILTER"

    def test_date_range_with_no_events(self, client, two_developers):
        r = client.get(
            "/dashboard/incorporadora",
            params={
                "incorporadora_id": two_developers["dev_a"].id,
                "data_inicio": "2025-04-01",
            },
        )
        assert r.status_code == 200
        assert r.json()["ranking"] == []


class TestFilterData:

    def test_consulting_filters(self, client, two_developers):
        r = client.get("/dashboard/consultoria/filtros")
        assert r.status_code == 200
        body = r.json()
        assert {d["id"] for d in body["incorporadoras"]} == {
            two_developers["dev_a"].id, two_developers["dev_b"].id,
        }
        assert [p["nome"] for p in body["empreendimentos"]] == ["Residencial Solar", "Torre Norte"]

    def test_developer_filters(self, client, two_developers):
        r = client.get(
            "/dashboard/incorporadora/filtros",
            params={"incorporadora_id": two_developers["dev_a"].id},
        )
        assert r.status_code == 200
        assert [p["id"] for p in r.json()["empreendimentos"]] == [two_developers["pa"].id]

    def test_developer_filters_require_id(self, client):
        r = client.get("/dashboard/incorporadora/filtros")
        assert r.status_code == 400



    def test_developer_filters_blank_id_is_missing_scope(self, client):
        r = client.get("/dashboard/incorporadora/filtros", params={"incorporadora_id": ""})
        assert r.status_code == 400
        assert r.json()["code"] == "MISSING_REQUIRED_SCOPE"


class TestStoreUnavailable:

    def test_ranking_returns_503(self, broken_store):
        r = broken_store.get("/dashboard/consultoria")
        assert r.status_code == 503
        assert r.json()["code"] == "STORE_UNAVAILABLE"

    def test_consulting_filters_return_503(self, broken_store):
        r = broken_store.get("/dashboard/consultoria/filtros")
        assert r.status_code == 503
        assert r.json()["details"]["operation"] == "consulting_filter_data"

    def test_developer_filters_return_503(self, broken_store):
        r = broken_store.get("/dashboard/incorporadora/filtros", params={"incorporadora_id": 1})
        assert r.status_code == 503
        assert r.json()["code"] == "STORE_UNAVAILABLE"
