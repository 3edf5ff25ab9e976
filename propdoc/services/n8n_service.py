import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from propdoc.config import settings

CREATE_TEMPLATE = "create-template"
DOCUMENT_GENERATE = "document-generate"
APPROVE_SIGNING = "approves-signing"
SIGN_STATUS = "sign-status"


@dataclass
class GatewayResult:
    """Outcome of one call to the n8n workflow. Calls never raise."""
    operation: str
    ok: bool
    status_code: Optional[int] = None
    body: Any = None
    error: Optional[str] = None


class N8nGateway:
    def __init__(self, base_url: str = None, timeout: float = None):
        self.base_url = (base_url or settings.N8N_BASE_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout or settings.N8N_TIMEOUT_SECONDS)

    async def _request(self, method: str, operation: str, payload: Dict = None, params: Dict = None) -> GatewayResult:
        url = f"{self.base_url}/{operation}"
        logging.info(f"Triggering n8n {operation}: {method} {url}")
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(
                    method,
                    url,
                    json=payload,
                    params=params,
                    headers={"Content-Type": "application/json"},
                ) as resp:
                    text = await resp.text()
                    logging.info(f"n8n response: {resp.status} {resp.reason}")
                    if resp.status < 200 or resp.status >= 300:
                        logging.warning(f"n8n {operation} error body: {text}")
                        return GatewayResult(operation, False, resp.status, text, f"HTTP {resp.status}")
                    try:
                        body = json.loads(text) if text else None
                    except json.JSONDecodeError:
                        body = text
                    return GatewayResult(operation, True, resp.status, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            message = str(e) or e.__class__.__name__
            logging.error(f"Failed to trigger n8n {operation} webhook: {message}")
            return GatewayResult(operation, False, None, None, message)

    async def create_template(self, template: Dict[str, Any]) -> GatewayResult:
        return await self._request("POST", CREATE_TEMPLATE, payload=template)

    async def document_generate(self, document_id: int, metadata: Dict[str, Any], template_id: int) -> GatewayResult:
        payload = {"documentId": document_id, **(metadata or {}), "templateId": template_id}
        return await self._request("POST", DOCUMENT_GENERATE, payload=payload)

    async def approve_signing(self, document_id: int) -> GatewayResult:
        return await self._request("POST", APPROVE_SIGNING, payload={"documentId": document_id})

    async def sign_status(self, document_id: int) -> GatewayResult:
        """Ask n8n for the signing status; a good answer looks like {"status": "signed", ...}."""
        return await self._request("GET", SIGN_STATUS, params={"documentId": str(document_id)})


def get_gateway() -> N8nGateway:
    return N8nGateway()
