"""Client for the external leaf disease classification service."""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from core.utils import AnalysisResult, ImageAsset, InferenceErrorReason

logger = logging.getLogger("farmlens.inference_client")

DEFAULT_INFERENCE_URL = "http://localhost:5050/predict/leaf-disease"


class InferenceError(Exception):
    """The inference call did not produce a usable result."""

    def __init__(self, reason: InferenceErrorReason, detail: str = ""):
        super().__init__(detail or reason.value)
        self.reason = reason
        self.detail = detail

    @property
    def message(self) -> str:
        from i18n import t
        return t(f"inference.error_{self.reason.value}")


class InferenceClient:
    """Posts one leaf image per call and translates the outcome.

    Stateless per call and never retries; the workflow decides whether a
    failed call is tried again.
    """

    def __init__(
        self,
        url: str = DEFAULT_INFERENCE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._url = url
        self._timeout = timeout
        self._transport = transport

    def analyze(self, asset: ImageAsset) -> AnalysisResult:
        files = {"image": (asset.name or "leaf", asset.data, asset.mime_type)}
        logger.info("Sending %s (%d bytes) for analysis", asset.name or "image", asset.size)

        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = client.post(self._url, files=files)
            except httpx.TimeoutException as exc:
                logger.warning("Inference request timed out: %s", type(exc).__name__)
                raise InferenceError(InferenceErrorReason.TIMEOUT, str(exc)) from exc
            except httpx.HTTPError as exc:
                logger.warning("Inference transport error: %s", type(exc).__name__)
                raise InferenceError(InferenceErrorReason.TRANSPORT, str(exc)) from exc

        if response.status_code >= 400:
            logger.warning("Inference service returned status %d", response.status_code)
            raise InferenceError(
                InferenceErrorReason.SERVER_REJECTED,
                f"HTTP {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Inference service returned invalid JSON")
            raise InferenceError(InferenceErrorReason.SERVER_REJECTED, "invalid JSON") from exc

        return parse_analysis_payload(payload)


class DemoInferenceClient:
    """Offline stand-in that answers every image with a fixed diagnosis."""

    DEMO_PAYLOAD = {
        "disease": "Apple_Black_rot",
        "confidence": 0.92,
        "information": {
            "description": (
                "Apple black rot is a fungal disease that affects apples, "
                "caused by the fungus Botryosphaeria obtusa."
            ),
            "symptoms": (
                "Circular lesions on leaves, rotting fruit with concentric rings, "
                "and cankers on branches."
            ),
            "treatment": (
                "Prune out cankers and dead wood. Apply fungicides during the growing "
                "season. Remove fallen fruits and leaves to reduce infection sources."
            ),
        },
        "recommendations": (
            "Prune out cankers and dead wood. Apply fungicides during the growing "
            "season. Remove fallen fruits and leaves to reduce infection sources."
        ),
    }

    def __init__(self, delay_s: float = 2.0):
        self._delay_s = delay_s

    def analyze(self, asset: ImageAsset) -> AnalysisResult:
        logger.info("Demo mode: simulating analysis of %s", asset.name or "image")
        if self._delay_s > 0:
            time.sleep(self._delay_s)
        return parse_analysis_payload(self.DEMO_PAYLOAD)


def parse_analysis_payload(payload: Any) -> AnalysisResult:
    """Build an AnalysisResult from the service's JSON body.

    Raises InferenceError(SERVER_REJECTED) when the body does not match the
    expected shape.
    """
    if not isinstance(payload, dict):
        raise InferenceError(InferenceErrorReason.SERVER_REJECTED, "response is not an object")

    disease = payload.get("disease")
    if not isinstance(disease, str) or not disease:
        raise InferenceError(InferenceErrorReason.SERVER_REJECTED, "missing disease label")

    confidence = payload.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise InferenceError(InferenceErrorReason.SERVER_REJECTED, "missing confidence")
    if not 0.0 <= confidence <= 1.0:
        raise InferenceError(
            InferenceErrorReason.SERVER_REJECTED,
            f"confidence out of range: {confidence}",
        )

    information: Dict[str, Any] = payload.get("information") or {}
    if not isinstance(information, dict):
        raise InferenceError(InferenceErrorReason.SERVER_REJECTED, "malformed information block")

    return AnalysisResult(
        disease=disease,
        confidence=float(confidence),
        description=str(information.get("description", "")),
        symptoms=str(information.get("symptoms", "")),
        treatment=str(information.get("treatment", "")),
        recommendations=str(payload.get("recommendations", "")),
    )


def create_inference_client(config):
    """Pick the real client, or the demo client when no service URL is configured."""
    if config.demo_mode:
        logger.info("No inference service configured, using demo mode")
        return DemoInferenceClient()
    return InferenceClient(url=config.inference_url, timeout=config.request_timeout_s)
