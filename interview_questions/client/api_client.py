from __future__ import annotations

import httpx
import structlog
from typing import Any, Dict, List, Optional

from interview_questions.core.errors import TransportError, error_from_payload


class InterviewApiClient:
    """Async client for the question API and the proxy functions.

    Construct one per process and pass it to the components that need it.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        api_prefix: str = "/api/v1",
        functions_prefix: str = "/functions/v1",
        request_timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_prefix = api_prefix.rstrip("/")
        self._functions_prefix = functions_prefix.rstrip("/")
        headers = {"Content-Type": "application/json", "x-client-info": "interview-questions-python"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self._base_url, timeout=request_timeout, headers=headers
        )
        self._logger = structlog.get_logger().bind(component="InterviewApiClient")

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "InterviewApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            self._logger.error("Request failed", method=method, url=url, error=str(exc))
            raise TransportError(f"Could not reach {url}: {exc}") from exc

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = {"error": response.text[:200] or response.reason_phrase}
            error = error_from_payload(response.status_code, payload)
            self._logger.warning(
                "Request rejected",
                method=method,
                url=url,
                status_code=response.status_code,
                code=error.code,
            )
            raise error
        return response

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        response = await self._request(method, url, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            # e.g. an HTML page from a gateway in front of the service
            self._logger.error(
                "Response is not JSON",
                method=method,
                url=url,
                status_code=response.status_code,
                content_type=response.headers.get("content-type"),
            )
            raise TransportError(f"Unexpected non-JSON response from {url}") from exc

    async def invoke(self, function_name: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Call a proxy function and return its JSON body."""
        return await self._request_json(
            "POST", f"{self._functions_prefix}/{function_name}", json=body
        )

    async def fetch_question_types(self) -> List[Dict[str, Any]]:
        return await self._request_json("GET", f"{self._api_prefix}/question-types")

    async def fetch_difficulty_levels(self) -> List[Dict[str, Any]]:
        return await self._request_json("GET", f"{self._api_prefix}/difficulty-levels")

    async def generate_questions(self, question_type: str, difficulty: str, count: int = 2) -> List[Dict[str, Any]]:
        return await self._request_json(
            "POST",
            f"{self._api_prefix}/questions/generate",
            json={"type": question_type, "difficulty": difficulty, "limit": count},
        )

    async def fetch_job_descriptions(self) -> List[Dict[str, Any]]:
        return await self._request_json("GET", f"{self._api_prefix}/job-descriptions")

    async def fetch_templates(self) -> List[Dict[str, Any]]:
        return await self._request_json("GET", f"{self._api_prefix}/templates")

    async def fetch_template_questions(self, template_id: str) -> List[Dict[str, Any]]:
        return await self._request_json("GET", f"{self._api_prefix}/templates/{template_id}/questions")

    async def create_template(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        return await self._request_json(
            "POST", f"{self._api_prefix}/templates", json={"name": name, "description": description}
        )

    async def add_question_to_template(self, template_id: str, question_id: str, order_index: int) -> Dict[str, Any]:
        return await self._request_json(
            "POST",
            f"{self._api_prefix}/templates/{template_id}/questions",
            json={"question_id": question_id, "order_index": order_index},
        )

    async def export_template(self, template_id: str) -> str:
        return (await self._request("GET", f"{self._api_prefix}/templates/{template_id}/export")).text

    async def save_voice_response(
        self,
        question_id: str,
        audio_url: Optional[str] = None,
        transcript: Optional[str] = None,
        feedback: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._request_json(
            "POST",
            f"{self._api_prefix}/voice-responses",
            json={
                "question_id": question_id,
                "audio_url": audio_url,
                "transcript": transcript,
                "feedback": feedback,
            },
        )

    async def generate_custom_questions(
        self,
        question_type: Optional[str] = None,
        difficulty: Optional[str] = None,
        job_description_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        body: Dict[str, Any] = {}
        if question_type:
            body["questionType"] = question_type
        if difficulty:
            body["difficultyLevel"] = difficulty
        if job_description_id:
            body["jobDescriptionId"] = job_description_id
        data = await self.invoke("generate-custom-questions", body)
        return list(data.get("questions") or [])
