"""Tests for the outbound n8n client against a local aiohttp server."""

import asyncio

from aiohttp import web
from aiohttp.test_utils import TestServer

from propdoc.services.n8n_service import N8nGateway


def run_against(handlers, call, timeout=5):
    """Serve ``handlers`` ({(method, path): handler}) and run ``call(gateway)``."""
    async def scenario():
        app = web.Application()
        for (method, path), handler in handlers.items():
            app.router.add_route(method, path, handler)
        server = TestServer(app)
        await server.start_server()
        try:
            gateway = N8nGateway(str(server.make_url("/prop-flow")), timeout=timeout)
            return await call(gateway)
        finally:
            await server.close()

    return asyncio.run(scenario())


def test_document_generate_posts_flattened_payload():
    received = {}

    async def handler(request):
        received.update(await request.json())
        return web.json_response({"ok": True})

    result = run_against(
        {("POST", "/prop-flow/document-generate"): handler},
        lambda gateway: gateway.document_generate(7, {"buyerName": "Jane"}, 3),
    )

    assert result.ok
    assert result.operation == "document-generate"
    assert result.body == {"ok": True}
    assert received == {"documentId": 7, "buyerName": "Jane", "templateId": 3}


def test_approve_signing_endpoint():
    received = {}

    async def handler(request):
        received.update(await request.json())
        return web.Response(text="")

    result = run_against({("POST", "/prop-flow/approves-signing"): handler}, lambda gateway: gateway.approve_signing(5))
    assert result.ok
    assert result.body is None
    assert received == {"documentId": 5}


def test_sign_status_passes_document_id_as_query():
    async def handler(request):
        return web.json_response({"status": "signed", "documentId": request.query["documentId"]})

    result = run_against({("GET", "/prop-flow/sign-status"): handler}, lambda gateway: gateway.sign_status(11))
    assert result.ok
    assert result.body == {"status": "signed", "documentId": "11"}


def test_non_2xx_is_a_failed_result():
    async def handler(request):
        return web.Response(status=500, text="workflow crashed")

    result = run_against({("POST", "/prop-flow/create-template"): handler}, lambda gateway: gateway.create_template({"id": 1}))
    assert not result.ok
    assert result.status_code == 500
    assert result.body == "workflow crashed"


def test_timeout_is_a_failed_result():
    async def handler(request):
        await asyncio.sleep(1)
        return web.json_response({})

    result = run_against(
        {("POST", "/prop-flow/approves-signing"): handler},
        lambda gateway: gateway.approve_signing(1),
        timeout=0.1,
    )
    assert not result.ok
    assert result.status_code is None
    assert result.error


def test_unreachable_host_is_a_failed_result():
    gateway = N8nGateway("http://127.0.0.1:1/prop-flow", timeout=2)
    result = asyncio.run(gateway.sign_status(1))
    assert not result.ok
    assert result.error
