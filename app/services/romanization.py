import json
import logging
import time
from typing import Optional

from app.clients.ichiran_client import IchiranClient, build_client
from app.core.config import settings
from app.core.errors import IchiranError, ParseError, ProcessError, ValidationError
from app.services.parser import parse_ichiran_output

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "Text field is required"


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


class RomanizationService:
    """
    Runs ichiran-cli for one request and shapes its output.
    """

    def __init__(self, client: Optional[IchiranClient] = None):
        self.client = client or build_client()

    def _require_client(self) -> IchiranClient:
        if not self.client:
            raise ProcessError("ichiran-cli is not configured")
        return self.client

    async def romanize(self, text: Optional[str], request_id: str = "n/a") -> dict:
        if not text:
            raise ValidationError(TEXT_REQUIRED)
        client = self._require_client()

        logger.info("[ROMANIZE] request_id=%s event=start mode=line len=%d", request_id, len(text))
        start = time.perf_counter()
        try:
            output = await client.romanize(text)
        except IchiranError as e:
            logger.error("[ROMANIZE] request_id=%s event=failure mode=line error=%s", request_id, e)
            raise
        result = parse_ichiran_output(output)
        logger.info(
            "[ROMANIZE] request_id=%s event=ok mode=line words=%d latency_ms=%.2f",
            request_id,
            len(result["words"]),
            (time.perf_counter() - start) * 1000,
        )
        return result

    async def romanize_full(self, text: Optional[str], limit: Optional[int] = None, request_id: str = "n/a") -> str:
        """
        Return the engine's JSON document as text, after checking it parses.
        """
        if not text:
            raise ValidationError(TEXT_REQUIRED)
        if limit is None:
            limit = settings.ICHIRAN_DEFAULT_LIMIT
        if limit < 1:
            raise ValidationError("Limit must be a positive integer")
        client = self._require_client()

        logger.info(
            "[ROMANIZE] request_id=%s event=start mode=full len=%d limit=%d", request_id, len(text), limit
        )
        start = time.perf_counter()
        try:
            output = await client.romanize_full(text, limit)
        except IchiranError as e:
            logger.error("[ROMANIZE] request_id=%s event=failure mode=full error=%s", request_id, e)
            raise

        try:
            json.loads(output, parse_constant=_reject_constant)
        except ValueError as e:
            logger.error("[ROMANIZE] request_id=%s event=parse_error mode=full error=%s", request_id, e)
            raise ParseError(str(e)) from e

        logger.info(
            "[ROMANIZE] request_id=%s event=ok mode=full bytes=%d latency_ms=%.2f",
            request_id,
            len(output),
            (time.perf_counter() - start) * 1000,
        )
        return output
