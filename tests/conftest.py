import pytest_asyncio

from database import init_engine, close_engine, create_tables, get_session
from database.models import Review
from llm import LLMClient, LLMResponse
from llm.embeddings import EmbeddingClient
from repositories import ProductRepository, ReviewRepository


class FakeLLMClient(LLMClient):
    """Returns canned replies; `reply` may be a string, a list (consumed in order) or a callable(prompt)."""

    def __init__(self, reply="", error=None):
        super().__init__(api_key="test-key", model="fake-model", enable_logging=False)
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt, system=None, max_tokens=4096, temperature=0.0):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            content = self.reply(prompt)
        elif isinstance(self.reply, list):
            content = self.reply.pop(0)
        else:
            content = self.reply
        return LLMResponse(content=content, model=self.model, usage={"input_tokens": 1, "output_tokens": 1})

    def chat(self, messages, system=None, max_tokens=4096, temperature=0.0):
        return self.generate(messages[-1].content, system, max_tokens, temperature)


class FakeEmbeddingClient(EmbeddingClient):
    def __init__(self, vector=None, error=None):
        super().__init__(model="fake-embedding")
        self.vector = vector or [1.0, 0.0, 0.0]
        self.error = error
        self.calls = 0

    def embed(self, text):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.vector)


@pytest_asyncio.fixture
async def db(tmp_path):
    """Fresh SQLite database per test, installed as the process engine."""
    await close_engine()
    await init_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables()
    yield get_session
    await close_engine()


async def seed_products(count, reviews_per_product=2, criteria=None):
    """Create P01..Pnn, each with a few embedded reviews mentioning its id."""
    product_ids = [f"P{i:02d}" for i in range(1, count + 1)]
    async with get_session() as session:
        products = ProductRepository(session)
        reviews = ReviewRepository(session)
        for n, product_id in enumerate(product_ids, start=1):
            await products.upsert_product(
                product_id,
                name=f"Product {n}",
                category="widgets",
                criteria=dict(criteria or {"annualDollarUsage": float(n * 100)}),
            )
            for r in range(reviews_per_product):
                await reviews.add(Review(
                    id=f"{product_id}-R{r}",
                    product_id=product_id,
                    title=f"Review {r}",
                    message=f"Review of {product_id}",
                    rating=4.0,
                    embedding=[1.0, float(r), 0.0],
                ))
    return product_ids
