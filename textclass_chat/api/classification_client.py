"""
HTTP adapter to the remote text classification service.

The service exposes a single endpoint:

    POST <CLASSIFIER_URL>
    {"input": "<text>", "model_type": 1 | 2}

and answers with a JSON object holding the label in `result` (and, for some
deployments, a `confidence` in [0, 1]). Every failure mode surfaces as
`ClassificationUnavailable`; there are no retries.
"""

import logging
from typing import Optional

import httpx

from textclass_chat.api.categories import MODEL_NAMES
from textclass_chat.api.exceptions import ClassificationUnavailable
from textclass_chat.api.models import ClassificationResult

logger = logging.getLogger(__name__)


class ClassificationClient:
    """
    Thin client for the classification endpoint.

    Parameters
    ----------
    url : str
        Full URL of the classification endpoint.
    timeout : float
        Seconds allowed for connecting to and reading from the service.
    http_client : httpx.Client, optional
        Pre-built client (tests inject one backed by `httpx.MockTransport`).
    """

    def __init__(self, url: str, timeout: float = 10.0, http_client: Optional[httpx.Client] = None):
        self.url = url
        self.timeout = timeout
        self._client = http_client or httpx.Client(timeout=timeout)

    def classify(self, text: str, model_type: int) -> ClassificationResult:
        """
        Classify `text` with the selected remote model.

        Raises
        ------
        ValueError
            If `text` is blank or `model_type` is not a supported selector.
        ClassificationUnavailable
            On network errors, timeouts, non-2xx answers or malformed payloads.
        """
        if not text or not text.strip():
            raise ValueError("text must not be empty")
        if model_type not in MODEL_NAMES:
            raise ValueError(f"unsupported model_type {model_type!r}")

        try:
            response = self._client.post(
                self.url,
                json={"input": text, "model_type": model_type},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ClassificationUnavailable(f"Classification request failed: {e}") from e
        except ValueError as e:
            raise ClassificationUnavailable("Classification response is not valid JSON") from e

        if not isinstance(payload, dict):
            raise ClassificationUnavailable("Classification response is not a JSON object")
        label = payload.get("result")
        if not isinstance(label, str) or not label.strip():
            raise ClassificationUnavailable("Classification response has no `result` label")

        return ClassificationResult(result=label.strip(), confidence=self._read_confidence(payload))

    @staticmethod
    def _read_confidence(payload: dict) -> Optional[float]:
        confidence = payload.get("confidence")
        if confidence is None:
            return None
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            logger.warning("Ignoring non-numeric confidence %r", confidence)
            return None
        if not 0.0 <= confidence <= 1.0:
            logger.warning("Ignoring out-of-range confidence %r", confidence)
            return None
        return float(confidence)

    def close(self) -> None:
        self._client.close()
