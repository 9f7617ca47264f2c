"""Asynchronous HTTP client for the survey backend."""

from __future__ import annotations

from collections.abc import Mapping
from json import dumps
from types import TracebackType
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel

from survey_client import endpoints
from survey_client.endpoints import Endpoint
from survey_client.models import Credentials
from survey_client.result import Result
from survey_client.session import USER_ID_KEY
from survey_client.storage import SessionStorage

NETWORK_ERROR = "Network error"

type Body = BaseModel | Mapping[str, Any] | list[Any] | None


def _serialize(body: Body) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    if isinstance(body, Mapping):
        return dict(body)
    return body


class ApiClient:
    """Typed wrapper over the backend's REST endpoints.

    Every call resolves to a :class:`Result`; nothing raises past
    :meth:`request`. Build one instance at start-up and pass it around.
    """

    def __init__(
        self,
        base_url: str,
        storage: SessionStorage | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.storage = storage
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(transport=transport, timeout=None)

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _headers(self) -> httpx.Headers:
        headers = httpx.Headers({"Content-Type": "application/json"})
        user_id = self.storage.get_item(USER_ID_KEY) if self.storage is not None else None
        if user_id:
            headers["X-User-ID"] = user_id
        return headers

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        json: Body = None,
        headers: Mapping[str, str] | None = None,
    ) -> Result[Any]:
        """Send one request to ``base_url + endpoint`` and normalize the outcome."""
        url = f"{self.base_url}{endpoint}"
        try:
            logger.debug("api.request method={} url={}", method, url)
            merged = self._headers()
            if headers:
                merged.update(headers)
            payload = _serialize(json)
            response = await self._http.request(
                method,
                url,
                headers=merged,
                json=payload,
            )
            data = response.json()
        except Exception as exc:
            logger.warning("api.request.failed method={} url={} error={!r}", method, url, exc)
            return Result.fail(str(exc) or NETWORK_ERROR)

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            if not message:
                message = f"HTTP error! status: {response.status_code}"
            logger.info("api.request.rejected status={} url={}", response.status_code, url)
            return Result.fail(message if isinstance(message, str) else dumps(message, ensure_ascii=False))

        return Result.ok(data)

    async def call(self, endpoint: Endpoint, body: Body = None, **params: Any) -> Result[Any]:
        """Issue one row of the endpoint table."""
        path = endpoint.build_path(**params)
        return await self.request(path, method=endpoint.method, json=body if endpoint.has_body else None)

    # Auth endpoints
    async def login(self, email: str, password: str) -> Result[Any]:
        return await self.call(endpoints.LOGIN, Credentials(email=email, password=password))

    async def register(self, user_data: Body) -> Result[Any]:
        return await self.call(endpoints.REGISTER, user_data)

    # Student endpoints
    async def get_student_subjects(self) -> Result[Any]:
        return await self.call(endpoints.STUDENT_SUBJECTS)

    async def get_student_surveys(self) -> Result[Any]:
        return await self.call(endpoints.STUDENT_SURVEYS)

    async def submit_response(self, response: Body) -> Result[Any]:
        return await self.call(endpoints.SUBMIT_RESPONSE, response)

    async def get_student_responses(self) -> Result[Any]:
        return await self.call(endpoints.STUDENT_RESPONSES)

    async def get_survey_by_id(self, survey_id: str | int) -> Result[Any]:
        return await self.call(endpoints.SURVEY_BY_ID, survey_id=survey_id)

    # Professor endpoints
    async def get_professor_subjects(self) -> Result[Any]:
        return await self.call(endpoints.PROFESSOR_SUBJECTS)

    async def get_professor_surveys(self) -> Result[Any]:
        return await self.call(endpoints.PROFESSOR_SURVEYS)

    async def create_survey(self, survey: Body) -> Result[Any]:
        return await self.call(endpoints.CREATE_SURVEY, survey)

    async def add_question_to_survey(self, survey_id: str | int, question: Body) -> Result[Any]:
        return await self.call(endpoints.ADD_QUESTION, question, survey_id=survey_id)

    async def get_professor_responses(self) -> Result[Any]:
        return await self.call(endpoints.PROFESSOR_RESPONSES)

    async def get_survey_responses(self, survey_id: str | int) -> Result[Any]:
        return await self.call(endpoints.SURVEY_RESPONSES, survey_id=survey_id)

    # Admin endpoints
    async def create_semester(self, semester: Body) -> Result[Any]:
        return await self.call(endpoints.CREATE_SEMESTER, semester)

    async def get_semesters(self) -> Result[Any]:
        return await self.call(endpoints.SEMESTERS)

    async def activate_semester(self, semester_id: str | int) -> Result[Any]:
        return await self.call(endpoints.ACTIVATE_SEMESTER, semester_id=semester_id)

    async def create_subject(self, subject: Body) -> Result[Any]:
        return await self.call(endpoints.CREATE_SUBJECT, subject)

    async def get_subjects(self) -> Result[Any]:
        return await self.call(endpoints.SUBJECTS)

    async def create_enrollment(self, enrollment: Body) -> Result[Any]:
        return await self.call(endpoints.CREATE_ENROLLMENT, enrollment)

    async def get_enrollments(self) -> Result[Any]:
        return await self.call(endpoints.ENROLLMENTS)

    async def get_all_responses(self) -> Result[Any]:
        return await self.call(endpoints.ALL_RESPONSES)

    async def get_all_users(self) -> Result[Any]:
        return await self.call(endpoints.ALL_USERS)
