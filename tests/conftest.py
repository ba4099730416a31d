import httpx
import pytest
import pytest_asyncio

from airbnb_api import AirbnbClient, ClientConfig


@pytest.fixture
def config():
    return ClientConfig(api_key="test-key")


@pytest_asyncio.fixture
async def client(config):
    http_client = httpx.AsyncClient()
    yield AirbnbClient(config, client=http_client)
    await http_client.aclose()


def make_day(available, type=None, subtype=None, price=None, date="2026-07-01"):
    return {
        "date": date,
        "available": available,
        "type": type,
        "subtype": subtype,
        "price": {"local_price": price} if price is not None else None,
    }
