import asyncio
import time

import httpx

from conftest import FakeAI


class SlowAI(FakeAI):
    def enhance_resume(self, content):
        time.sleep(1.0)
        return super().enhance_resume(content)


def test_slow_handler_does_not_block_health(app):
    app.state.ai_service = SlowAI()

    async def timed(coro):
        started = time.perf_counter()
        response = await coro
        return response, time.perf_counter() - started

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            registered = await client.post("/api/register", json={
                "username": "slowpoke", "password": "secret123", "email": "slow@example.com"
            })
            assert registered.status_code == 201

            slow = asyncio.ensure_future(timed(client.post("/api/enhance-resume", json={"content": "text"})))
            await asyncio.sleep(0.1)
            health = await timed(client.get("/health"))
            return await slow, health

    (enhanced, slow_elapsed), (health, health_elapsed) = asyncio.run(scenario())

    assert enhanced.status_code == 200
    assert enhanced.json() == {"enhanced": "TEXT"}
    assert health.status_code == 200
    assert slow_elapsed >= 1.0
    assert health_elapsed < 0.5
