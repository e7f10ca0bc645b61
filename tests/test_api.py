import json

import httpx
import pytest
import pytest_asyncio

from conftest import FakeEmbeddingClient, FakeLLMClient, seed_products
from api.main import app
from api.routes import get_generator, get_pipeline
from processor import CriterionGenerator, CriterionScorer, CriterionScoringPipeline
from database import get_session
from repositories import CriterionRepository, ProductRepository


@pytest_asyncio.fixture
async def client(db):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def use_pipeline(reply):
    app.dependency_overrides[get_pipeline] = lambda: CriterionScoringPipeline(
        scorer=CriterionScorer(client=FakeLLMClient(reply)),
        embedder=FakeEmbeddingClient(),
    )


async def test_health(client):
    resp = await client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_list_products(client):
    await seed_products(2)

    resp = await client.get("/api/products")

    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert data["products"][0] == {
        "productId": "P01",
        "name": "Product 1",
        "category": "widgets",
        "criteria": {"annualDollarUsage": 100.0},
    }


async def test_define_criterion(client):
    reply = json.dumps({
        "criteriaName": "Criticality",
        "criteriaDefinition": "1 = critical, 0.01 = not critical",
        "dataSources": ["reviews"],
    })
    app.dependency_overrides[get_generator] = lambda: CriterionGenerator(client=FakeLLMClient(reply))

    resp = await client.post("/api/criteria/define", json={"prompt": "How critical is each item?"})

    assert resp.status_code == 200
    assert resp.json()["criteriaName"] == "Criticality"


async def test_define_criterion_empty_prompt(client):
    app.dependency_overrides[get_generator] = lambda: CriterionGenerator(client=FakeLLMClient("{}"))

    resp = await client.post("/api/criteria/define", json={"prompt": ""})

    assert resp.status_code == 400


async def test_define_criterion_generation_failure(client):
    app.dependency_overrides[get_generator] = lambda: CriterionGenerator(
        client=FakeLLMClient("nope"), max_retries=1, retry_delay=0
    )

    resp = await client.post("/api/criteria/define", json={"prompt": "criticality"})

    assert resp.status_code == 500


async def test_score_then_list_and_delete_criterion(client):
    await seed_products(3)
    use_pipeline('{"score": 2}')

    resp = await client.post("/api/criteria/score", json={
        "criteriaField": "criticality",
        "criteriaDefinition": "1 = critical, 0.01 = not critical",
        "criteriaName": "Criticality",
        "dataSources": ["reviews"],
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["committed"] == 3
    assert body["failed"] == []

    resp = await client.get("/api/criteria")
    fields = [c["criteriaField"] for c in resp.json()["criteria"]]
    assert fields == ["criticality"]

    resp = await client.delete("/api/criteria/criticality")
    assert resp.status_code == 200
    assert resp.json()["productsUpdated"] == 3

    async with get_session() as session:
        assert await CriterionRepository(session).get("criticality") is None


async def test_score_rejects_missing_definition(client):
    use_pipeline('{"score": 2}')

    resp = await client.post("/api/criteria/score", json={
        "criteriaField": "criticality",
        "criteriaDefinition": "",
    })

    assert resp.status_code == 400


async def test_delete_protected_and_unknown(client):
    resp = await client.delete("/api/criteria/annualDollarUsage")
    assert resp.status_code == 403

    resp = await client.delete("/api/criteria/doesNotExist")
    assert resp.status_code == 404


async def test_classify(client):
    await seed_products(3)

    resp = await client.post("/api/classify", json={
        "criteria": ["annualDollarUsage"],
        "previous": {"P03": "B"},
    })

    assert resp.status_code == 200
    data = resp.json()
    # Normalized usage: P03=1.0, P02=0.5, P01=0.0
    assert data["classes"] == {"P03": "B", "P02": "C", "P01": "C"}
    assert data["trends"] == {"P03": "same"}


@pytest.mark.parametrize("body", [{"criteria": []}, {"criteria": ["annualDollarUsage"], "weights": {"annualDollarUsage": -1}}])
async def test_classify_rejects_bad_criteria(client, body):
    resp = await client.post("/api/classify", json=body)

    assert resp.status_code == 400


@pytest.mark.parametrize("body, status", [
    ({"criteriaField": "annualDollarUsage", "criteriaDefinition": "1 = high spend"}, 403),
    ({"criteriaField": "criticality", "criteriaDefinition": "1 = critical", "dataSources": ["twitter"]}, 400),
])
async def test_score_refuses_base_fields_and_unknown_sources(client, body, status):
    await seed_products(2)
    embedder = FakeEmbeddingClient()
    app.dependency_overrides[get_pipeline] = lambda: CriterionScoringPipeline(
        scorer=CriterionScorer(client=FakeLLMClient('{"score": 2}')),
        embedder=embedder,
    )

    resp = await client.post("/api/criteria/score", json=body)

    assert resp.status_code == status
    assert embedder.calls == 0

    async with get_session() as session:
        products = await ProductRepository(session).get_all()
    assert {p.id: p.criteria for p in products} == {
        "P01": {"annualDollarUsage": 100.0},
        "P02": {"annualDollarUsage": 200.0},
    }


async def test_classify_defaults_to_annual_dollar_usage(client):
    await seed_products(3)

    resp = await client.post("/api/classify", json={})

    assert resp.status_code == 200
    assert resp.json()["classes"] == {"P03": "B", "P02": "C", "P01": "C"}


async def test_classify_rejects_unknown_previous_class(client):
    await seed_products(1)

    resp = await client.post("/api/classify", json={"previous": {"P01": "x"}})

    assert resp.status_code == 422
