"""FastAPI read-only view of a greeter deployment."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from hello_relay.core.types import DomainId
from hello_relay.errors import UpstreamError

if TYPE_CHECKING:
    from hello_relay.greeter.contract import HelloRelay
    from hello_relay.protocol.messages import GreetingReceived


class LatestGreetingResponse(BaseModel):
    text: str
    source_domain: int | None = None
    sender: str | None = None


class QuoteResponse(BaseModel):
    target_domain: int
    gas_limit: int
    cost: int


class GreetingEvent(BaseModel):
    text: str
    source_domain: int
    sender: str


def _hex(address: bytes) -> str:
    return f"0x{address.hex()}"


def create_app(greeter: HelloRelay, history_size: int = 100) -> FastAPI:
    app = FastAPI(title="Hello Relay State API")
    history: deque[GreetingEvent] = deque(maxlen=history_size)

    def record(event: GreetingReceived) -> None:
        history.append(
            GreetingEvent(
                text=event.text,
                source_domain=event.source_domain,
                sender=_hex(event.sender),
            )
        )

    greeter.subscribe(record)

    @app.get("/api/greeting")
    async def get_latest_greeting() -> LatestGreetingResponse:
        latest = greeter.latest_greeting
        if latest is None:
            return LatestGreetingResponse(text="")
        return LatestGreetingResponse(
            text=latest.text,
            source_domain=latest.source_domain,
            sender=_hex(latest.sender),
        )

    @app.get("/api/gas-limit")
    async def get_gas_limit() -> dict[str, int]:
        return {"gas_limit": greeter.gas_limit}

    @app.get("/api/quote/{target_domain}")
    async def get_quote(target_domain: int) -> QuoteResponse:
        try:
            cost = greeter.quote(DomainId(target_domain))
        except UpstreamError as e:
            raise HTTPException(status_code=502, detail=e.reason) from e
        return QuoteResponse(target_domain=target_domain, gas_limit=greeter.gas_limit, cost=cost)

    @app.get("/api/events")
    async def get_events(limit: int = 20) -> list[GreetingEvent]:
        if limit <= 0:
            return []
        return list(history)[-limit:]

    return app


def run_server(greeter: HelloRelay, host: str = "0.0.0.0", port: int = 8000) -> None:
    import uvicorn

    app = create_app(greeter)
    print(f"Serving greeter 0x{greeter.address.hex()} at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)
