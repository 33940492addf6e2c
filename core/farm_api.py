"""REST client for the farm backend: analysis records and prediction routes."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger("farmlens.farm_api")

PROFILE_ANALYSIS_PATH = "/profile/analysis"
PREDICT_YIELD_PATH = "/predict-yield"
PREDICT_MARKET_PATH = "/predict-market"

TASK_FLAGS = ("irrigation_needed", "fertilization_needed")


class FarmApiError(Exception):
    """A farm backend call failed or returned something unusable."""


@dataclass
class AnalysisRecord:
    """One stored field analysis from the user's profile."""
    id: str
    irrigation_needed: bool = False
    fertilization_needed: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AnalysisRecord":
        record_id = data.get("_id") or data.get("id")
        if not record_id:
            raise FarmApiError("Analysis record without an id")
        return cls(
            id=str(record_id),
            irrigation_needed=bool(data.get("irrigation_needed", False)),
            fertilization_needed=bool(data.get("fertilization_needed", False)),
            raw=data,
        )


@dataclass
class YieldPrediction:
    predicted_yield: float
    unit: str
    confidence: float
    factors: List[str] = field(default_factory=list)


@dataclass
class MarketPrediction:
    predicted_price: float
    currency: str
    per_unit: str
    trend: str
    suggested_action: str


class FarmApiClient:
    """Authenticated calls to the profile and prediction routes."""

    def __init__(
        self,
        profile_api_url: str,
        prediction_api_url: str,
        token: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._profile_api_url = profile_api_url.rstrip("/")
        self._prediction_api_url = prediction_api_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, url: str, json_body: Optional[dict] = None) -> Any:
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = client.request(method, url, headers=self._headers(), json=json_body)
            except httpx.HTTPError as exc:
                logger.error("%s %s failed: %s", method, url, type(exc).__name__)
                raise FarmApiError(f"Could not reach the farm server: {exc}") from exc

        if response.status_code >= 400:
            logger.error("%s %s returned status %d", method, url, response.status_code)
            raise FarmApiError(f"Farm server returned HTTP {response.status_code}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s %s returned invalid JSON", method, url)
            raise FarmApiError("Farm server returned invalid JSON") from exc

    # --- Profile analysis records ---

    def list_analyses(self) -> List[AnalysisRecord]:
        """Fetch the user's analysis records, oldest first."""
        payload = self._request("GET", self._profile_api_url + PROFILE_ANALYSIS_PATH)
        if not isinstance(payload, list):
            raise FarmApiError("Expected a list of analysis records")
        return [AnalysisRecord.from_json(item) for item in payload if isinstance(item, dict)]

    def update_analysis(self, analysis_id: str, flag: str, value: bool = False):
        """Set one task flag on a stored analysis."""
        if flag not in TASK_FLAGS:
            raise ValueError(f"Unknown task flag: {flag}")
        url = f"{self._profile_api_url}{PROFILE_ANALYSIS_PATH}/{analysis_id}"
        self._request("PUT", url, json_body={flag: value})
        logger.info("Analysis %s updated: %s=%s", analysis_id, flag, value)

    # --- Prediction routes ---

    def predict_yield(self, params: Optional[dict] = None) -> YieldPrediction:
        data = self._prediction_data(PREDICT_YIELD_PATH, params)
        try:
            return YieldPrediction(
                predicted_yield=float(data["predictedYield"]),
                unit=str(data["unit"]),
                confidence=float(data["confidence"]),
                factors=[str(f) for f in data.get("factors", [])],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise FarmApiError(f"Malformed yield prediction: {exc}") from exc

    def predict_market(self, params: Optional[dict] = None) -> MarketPrediction:
        data = self._prediction_data(PREDICT_MARKET_PATH, params)
        try:
            return MarketPrediction(
                predicted_price=float(data["predictedPrice"]),
                currency=str(data["currency"]),
                per_unit=str(data["perUnit"]),
                trend=str(data["trend"]),
                suggested_action=str(data["suggestedAction"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise FarmApiError(f"Malformed market prediction: {exc}") from exc

    def _prediction_data(self, path: str, params: Optional[dict]) -> Dict[str, Any]:
        payload = self._request("POST", self._prediction_api_url + path, json_body=params or {})
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise FarmApiError("Prediction response has no data block")
        return data


def create_farm_api_client(config) -> FarmApiClient:
    return FarmApiClient(
        profile_api_url=config.profile_api_url,
        prediction_api_url=config.prediction_api_url,
        token=config.api_token,
        timeout=config.request_timeout_s,
    )
